import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ScreenID(str, Enum):
    SCREEN1 = 'screen1'
    SCREEN2 = 'screen2'

    @property
    def number(self) -> int:
        return 1 if self is ScreenID.SCREEN1 else 2

    @property
    def busy_key(self) -> str:
        return f'isScreen{self.number}Busy'

    @property
    def controller_event(self) -> str:
        return f'controller{self.number}'


@dataclass(frozen=True)
class BusyState:
    screen1: bool = False
    screen2: bool = False

    def is_busy(self, screen: ScreenID) -> bool:
        return self.screen1 if screen is ScreenID.SCREEN1 else self.screen2

    def to_dict(self) -> Dict[str, bool]:
        return {
            ScreenID.SCREEN1.busy_key: self.screen1,
            ScreenID.SCREEN2.busy_key: self.screen2,
        }


class BusyStateMachine:
    """Free/Busy flag per screen.

    Transitions are idempotent and never raise. Mutators return the snapshot
    taken under the same lock, so callers broadcast exactly what they wrote.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._busy: Dict[ScreenID, bool] = {screen: False for screen in ScreenID}

    def _snapshot_locked(self) -> BusyState:
        return BusyState(screen1=self._busy[ScreenID.SCREEN1], screen2=self._busy[ScreenID.SCREEN2])

    def mark_busy(self, screen: ScreenID) -> BusyState:
        with self._lock:
            self._busy[ScreenID(screen)] = True
            return self._snapshot_locked()

    def mark_free(self, screen: ScreenID) -> BusyState:
        with self._lock:
            self._busy[ScreenID(screen)] = False
            return self._snapshot_locked()

    def snapshot(self) -> BusyState:
        with self._lock:
            return self._snapshot_locked()
