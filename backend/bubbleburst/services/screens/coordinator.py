import logging
import threading
from typing import Any, Dict, Optional

from bubbleburst.schemas import ResetRequest, ScoreSubmission, ScreenSubmission, parse
from .broadcast import BroadcastHub
from .state import BusyState, BusyStateMachine, ScreenID
from .store import ScoreStore
from .winner import WinnerSelector


class ScreenCoordinator:
    """Request-level orchestration of busy flags, broadcasts and the score store.

    Every flag change is broadcast before the store is touched, so controllers
    see a screen flip even while persistence is still running. Store failures
    propagate as :class:`~bubbleburst.errors.StorageError` and do not roll the
    flag back.
    """

    def __init__(
        self,
        store: ScoreStore,
        hub: BroadcastHub,
        state: Optional[BusyStateMachine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.hub = hub
        self.state = state or BusyStateMachine()
        self.selector = WinnerSelector(store)
        self.logger = logger or logging.getLogger(__name__)
        # Serializes mutate+broadcast so snapshots go out in mutation order
        self._transition_lock = threading.Lock()

    def _mark(self, screen: ScreenID, busy: bool) -> BusyState:
        with self._transition_lock:
            snapshot = self.state.mark_busy(screen) if busy else self.state.mark_free(screen)
            self.hub.publish_status(screen, snapshot)
        self.logger.info(f"[screen-{'busy' if busy else 'free'}] screen={screen.value} state={snapshot.to_dict()}")
        return snapshot

    def status(self) -> Dict[str, bool]:
        return self.state.snapshot().to_dict()

    def submit_to_screen(self, screen: ScreenID, payload: Any) -> Dict[str, Any]:
        screen = ScreenID(screen)
        submission = parse(ScreenSubmission, payload, 'name (string) required')
        data = dict(payload)
        snapshot = self._mark(screen, True)
        record_id = self.store.insert(submission.name)
        self.hub.publish_screen_data(screen, data, record_id)
        return {
            'status': f'sent to {screen.value}',
            'data': data,
            screen.busy_key: snapshot.is_busy(screen),
            'sendPlayer': record_id,
        }

    def submit_score(self, screen: ScreenID, payload: Any) -> Dict[str, Any]:
        screen = ScreenID(screen)
        submission = parse(ScoreSubmission, payload, 'userID (string) and score (number) required')
        self.store.upsert_score(submission.user_id, screen, submission.score)
        self.logger.info(f"[score] user={submission.user_id} screen={screen.value} score={submission.score}")
        return {
            'status': 'score recorded',
            'userID': submission.user_id,
            'screen': screen.value,
            'score': submission.score,
        }

    def reset_screens(self, payload: Any) -> Dict[str, Any]:
        reset = parse(ResetRequest, payload, 'screen1/screen2 (bool), userID (string) and score (number) expected')
        targets = [s for s in ScreenID if getattr(reset, s.value) is True]
        if not targets:
            return {'status': 'no screens reset', **self.status()}
        for screen in targets:
            self._mark(screen, False)
        if reset.record_id is not None and reset.score is not None:
            self.store.update_score_by_id(reset.record_id, reset.score)
        return {'status': 'reset', **self.status()}

    def query_winner(self) -> Dict[str, Any]:
        return {'players': self.selector.winners()}

    def list_scores(self) -> Dict[str, Any]:
        return {'scores': [row.to_dict() for row in self.store.all_user_scores()]}
