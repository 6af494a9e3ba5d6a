from typing import Any, Dict

from flask_socketio import SocketIO

from .state import BusyState, ScreenID

STATUS_EVENT = 'statusUpdate'


class BroadcastHub:
    """Fan-out of screen events to every connected Socket.IO client.

    Fire and forget: no acks, no retries. Clients that connect later catch up
    by pulling a snapshot (see ``bubbleburst.socketio_events``).
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/'):
        self._socketio = socketio
        self.namespace = namespace

    def _emit(self, event: str, payload: Dict[str, Any]) -> None:
        self._socketio.emit(event, payload, namespace=self.namespace)

    def publish_status(self, screen: ScreenID, snapshot: BusyState) -> None:
        # Legacy per-screen event only carries the changed flag
        self._emit(screen.controller_event, {screen.busy_key: snapshot.is_busy(screen)})
        self._emit(STATUS_EVENT, snapshot.to_dict())

    def publish_screen_data(self, screen: ScreenID, data: Dict[str, Any], record_id) -> None:
        self._emit(screen.value, {**data, 'sendPlayer': record_id})
