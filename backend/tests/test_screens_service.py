from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from bubbleburst.errors import UninitializedStoreError, ValidationError
from bubbleburst.services.screens import (
    BusyState,
    BusyStateMachine,
    ScoreStore,
    ScreenCoordinator,
    ScreenID,
    select_winners,
)


BASE_TS = datetime(2026, 10, 18, 12, 0, 0)


def _rec(name, score, offset_ms):
    return SimpleNamespace(name=name, score=score, timestamp=BASE_TS + timedelta(milliseconds=offset_ms))


class RecordingHub:
    def __init__(self):
        self.events = []

    def publish_status(self, screen, snapshot):
        self.events.append(('status', screen, snapshot))

    def publish_screen_data(self, screen, data, record_id):
        self.events.append(('data', screen, dict(data, sendPlayer=record_id)))


# ---- BusyStateMachine ----

def test_state_starts_free():
    assert BusyStateMachine().snapshot() == BusyState(screen1=False, screen2=False)


def test_transitions_are_idempotent():
    machine = BusyStateMachine()
    assert machine.mark_busy(ScreenID.SCREEN1).to_dict() == {'isScreen1Busy': True, 'isScreen2Busy': False}
    assert machine.mark_busy(ScreenID.SCREEN1).is_busy(ScreenID.SCREEN1)
    machine.mark_free(ScreenID.SCREEN1)
    assert machine.mark_free(ScreenID.SCREEN1) == BusyState()
    # Freeing a screen that was never busy is fine too
    assert machine.mark_free(ScreenID.SCREEN2) == BusyState()


def test_screens_are_independent():
    machine = BusyStateMachine()
    machine.mark_busy('screen2')
    snap = machine.snapshot()
    assert snap.screen2 is True
    assert snap.screen1 is False


def test_screen_id_names():
    assert ScreenID.SCREEN2.busy_key == 'isScreen2Busy'
    assert ScreenID.SCREEN2.controller_event == 'controller2'
    assert [s.value for s in ScreenID] == ['screen1', 'screen2']


# ---- winner rule ----

def test_no_records_no_winner():
    assert select_winners([]) == []


def test_single_record_wins():
    only = _rec('Alice', 10, 0)
    assert select_winners([only]) == [only]


def test_same_round_reports_both_ranked():
    high = _rec('Bob', 95, 0)
    low = _rec('Alice', 80, 5000)
    assert select_winners([high, low]) == [high, low]
    # Reranked even if handed over in the wrong order
    assert select_winners([low, high]) == [high, low]


def test_separate_rounds_report_first_only():
    high = _rec('Bob', 95, 30000)
    low = _rec('Alice', 80, 0)
    assert select_winners([high, low]) == [high]


def test_tie_window_boundary():
    first = _rec('Bob', 95, 20000)
    second = _rec('Alice', 80, 0)
    assert len(select_winners([first, second])) == 2
    just_over = _rec('Bob', 95, 20001)
    assert select_winners([just_over, second]) == [just_over]


def test_equal_scores_rank_most_recent_first():
    older = _rec('Alice', 90, 0)
    newer = _rec('Bob', 90, 1000)
    assert select_winners([older, newer]) == [newer, older]


# ---- coordinator with an unbound store ----

@pytest.fixture()
def offline():
    hub = RecordingHub()
    return ScreenCoordinator(ScoreStore(), hub), hub


def test_submit_without_store_still_flips_and_broadcasts(offline):
    coordinator, hub = offline
    result = coordinator.submit_to_screen(ScreenID.SCREEN2, {'name': 'Bob'})
    assert result['isScreen2Busy'] is True
    assert result['sendPlayer'] is None
    assert [e[0] for e in hub.events] == ['status', 'data']
    assert hub.events[0][2].screen2 is True


def test_winner_and_scores_empty_without_store(offline):
    coordinator, _ = offline
    assert coordinator.query_winner() == {'players': []}
    assert coordinator.list_scores() == {'scores': []}


def test_reset_finalize_without_store_is_noop(offline):
    coordinator, _ = offline
    coordinator.submit_to_screen(ScreenID.SCREEN1, {'name': 'Alice'})
    result = coordinator.reset_screens({'screen1': True, 'userID': 'abc', 'score': 5})
    assert result == {'status': 'reset', 'isScreen1Busy': False, 'isScreen2Busy': False}


def test_submit_score_without_store_raises(offline):
    coordinator, _ = offline
    with pytest.raises(UninitializedStoreError):
        coordinator.submit_score(ScreenID.SCREEN1, {'userID': 'u-1', 'score': 3})


def test_invalid_submission_touches_nothing(offline):
    coordinator, hub = offline
    with pytest.raises(ValidationError):
        coordinator.submit_to_screen(ScreenID.SCREEN1, {'name': 12})
    with pytest.raises(ValidationError):
        coordinator.submit_score(ScreenID.SCREEN1, {'userID': 'u-1', 'score': '80'})
    assert hub.events == []
    assert coordinator.status() == {'isScreen1Busy': False, 'isScreen2Busy': False}
