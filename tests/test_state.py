"""Unit tests for the application reducer."""

from datetime import datetime

import pytest

from babydaily.engine import mutations
from babydaily.engine.clock import epoch_ms
from babydaily.engine.errors import ValidationFailure
from babydaily.engine.state import (
    AppState,
    CancelEdit,
    ClearToast,
    DeleteRecord,
    LoadStore,
    Logout,
    Navigate,
    SaveRecord,
    ShowToast,
    StartEdit,
    ToggleLanguage,
    reduce,
)
from babydaily.engine.store import RecordStore

T = epoch_ms(datetime(2024, 6, 15, 10, 15))
FEEDING = {"id": 1, "type": "formula", "volume": 110, "time": "10:15", "timestamp": T}


def test_initial_state():
    state = AppState()
    assert state.view == "LOGIN"
    assert state.language == "en"
    assert not state.show_nav


def test_navigate_and_nav_visibility():
    state = reduce(AppState(), Navigate(view="HOME"))
    assert state.view == "HOME"
    assert state.show_nav
    assert not reduce(state, Navigate(view="ADD_FEEDING")).show_nav


def test_toggle_language():
    state = reduce(AppState(), ToggleLanguage())
    assert state.language == "zh"
    assert reduce(state, ToggleLanguage()).language == "en"


def test_toast():
    state = reduce(AppState(), ShowToast(message="hello"))
    assert state.toast == "hello"
    assert reduce(state, ClearToast()).toast is None


def test_reduce_never_mutates_input():
    before = AppState(view="HOME")
    after = reduce(before, SaveRecord(kind="feedings", record=FEEDING))
    assert before.store.feedings == ()
    assert len(after.store.feedings) == 1


@pytest.mark.parametrize("kind, record, view", [
    ("feedings", FEEDING, "HOME"),
    ("diapers", {"id": 1, "type": "pee", "time": "11:15", "timestamp": T}, "DIAPER_LOG"),
    ("sleeps", {"id": 1, "start": "13:00", "end": "15:00", "timestamp": T}, "SLEEP_LOG"),
    ("growth", {"id": 1, "weight": 7, "height": 65, "date": "2024-06-15"}, "GROWTH_LOG"),
])
def test_save_returns_to_list_view(kind, record, view):
    state = reduce(AppState(view="HOME"), SaveRecord(kind=kind, record=record))
    assert state.view == view
    assert state.toast == "saved"
    assert len(state.store.records(kind)) == 1


def test_edit_flow():
    state = reduce(AppState(view="HOME"), SaveRecord(kind="feedings", record=FEEDING))
    state = reduce(state, StartEdit(kind="feedings", record_id=1))
    assert state.view == "ADD_FEEDING"
    assert state.editing.record_id == 1

    state = reduce(state, SaveRecord(kind="feedings", record={**FEEDING, "volume": 150}))
    assert state.view == "HOME"
    assert state.editing is None
    assert state.toast == "updated"
    assert [f.volume for f in state.store.feedings] == [150]


def test_start_edit_unknown_id_opens_blank_form():
    state = reduce(AppState(view="HOME"), StartEdit(kind="diapers", record_id=99))
    assert state.view == "ADD_DIAPER"
    assert state.editing is None


def test_cancel_edit():
    state = reduce(AppState(view="ADD_SLEEP"), CancelEdit(kind="sleeps"))
    assert state.view == "SLEEP_LOG"


def test_delete_record():
    state = reduce(AppState(view="HOME"), SaveRecord(kind="feedings", record=FEEDING))
    state = reduce(state, DeleteRecord(kind="feedings", record_id=1))
    assert state.store.feedings == ()
    assert state.toast == "deleted"
    # Deleting again is harmless.
    assert reduce(state, DeleteRecord(kind="feedings", record_id=1)).store.feedings == ()


def test_invalid_save_raises_and_leaves_state():
    state = AppState(view="ADD_FEEDING")
    with pytest.raises(ValidationFailure):
        reduce(state, SaveRecord(kind="feedings", record={"id": 1, "timestamp": T}))
    assert state.view == "ADD_FEEDING"


def test_load_store_and_logout():
    store = mutations.upsert(RecordStore(), "feedings", FEEDING)
    state = reduce(AppState(view="HOME", language="zh"), LoadStore(store=store))
    assert len(state.store.feedings) == 1

    state = reduce(state, Logout())
    assert state.view == "LOGIN"
    assert state.language == "zh"
    assert state.store.feedings == ()


def test_unknown_action():
    with pytest.raises(TypeError):
        reduce(AppState(), object())
