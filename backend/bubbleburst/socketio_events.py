from flask_socketio import emit
from flask import current_app, request
from bubbleburst import socketio
from bubbleburst.services.screens import ScreenID, get_coordinator
from bubbleburst.services.screens.broadcast import STATUS_EVENT


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    current_app.logger.info(f"[socket-connect] sid={_get_sid()}")
    if current_app.config.get('PUSH_STATUS_ON_CONNECT', True):
        emit(STATUS_EVENT, get_coordinator().status())


def handle_disconnect(*args):
    current_app.logger.info(f"[socket-disconnect] sid={_get_sid()}")


def _make_screen_listener(screen: ScreenID):
    # Displays talk back on their own channel; nothing acts on it yet
    def handle_screen_message(data=None):
        current_app.logger.info(f"[socket-{screen.value}] sid={_get_sid()} data={data}")
    handle_screen_message.__name__ = f"handle_{screen.value}_message"
    return handle_screen_message


def _make_snapshot_responder(event: str):
    """Reply to the requesting socket with the full busy snapshot under the same event name."""
    def handle_snapshot_request(data=None):
        current_app.logger.info(f"[socket-pull] sid={_get_sid()} event={event}")
        emit(event, get_coordinator().status())
    handle_snapshot_request.__name__ = f"handle_{event}_request"
    return handle_snapshot_request


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Displays send ``screen1``/``screen2`` (logged only). Controllers pull the
    current busy snapshot with ``controller1``, ``controller2`` or
    ``statusUpdate``; that is how late joiners catch up on broadcasts they
    missed.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    for screen in ScreenID:
        socketio.on_event(screen.value, _make_screen_listener(screen), namespace=namespace)
        socketio.on_event(screen.controller_event, _make_snapshot_responder(screen.controller_event), namespace=namespace)
    socketio.on_event(STATUS_EVENT, _make_snapshot_responder(STATUS_EVENT), namespace=namespace)
