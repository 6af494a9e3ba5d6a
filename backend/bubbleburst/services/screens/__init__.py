"""Screen coordination services: busy flags, broadcasts, scores and winners.

Imported by the HTTP blueprint and the socket handlers, keeping transport
concerns out of the state machine and winner rule.
"""

from flask import current_app

from .broadcast import BroadcastHub
from .coordinator import ScreenCoordinator
from .state import BusyState, BusyStateMachine, ScreenID
from .store import ScoreStore
from .winner import TIE_WINDOW, WinnerSelector, select_winners

EXTENSION_KEY = 'screen_coordinator'


def init_screen_coordinator(app, database, socketio) -> ScreenCoordinator:
    store = ScoreStore(database, logger=app.logger)
    coordinator = ScreenCoordinator(store, BroadcastHub(socketio), logger=app.logger)
    app.extensions[EXTENSION_KEY] = coordinator
    return coordinator


def get_coordinator() -> ScreenCoordinator:
    return current_app.extensions[EXTENSION_KEY]
