"""Application state and the reducer that moves it forward.

The UI keeps a single ``AppState``; every user action becomes an action
object and ``reduce(state, action)`` returns the next state. Nothing here
mutates its arguments.
"""

import logging
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel

from babydaily.engine import mutations
from babydaily.engine.store import RecordId, RecordKind, RecordStore

logger = logging.getLogger(__name__)

ViewName = Literal[
    "LOGIN",
    "HOME",
    "DIAPER_LOG",
    "SLEEP_LOG",
    "GROWTH_LOG",
    "PROFILE",
    "ADD_FEEDING",
    "ADD_DIAPER",
    "ADD_SLEEP",
    "ADD_GROWTH",
]
Language = Literal["en", "zh"]

# Where each kind's list and form live.
LIST_VIEW: dict[str, str] = {
    "feedings": "HOME",
    "diapers": "DIAPER_LOG",
    "sleeps": "SLEEP_LOG",
    "growth": "GROWTH_LOG",
}
FORM_VIEW: dict[str, str] = {
    "feedings": "ADD_FEEDING",
    "diapers": "ADD_DIAPER",
    "sleeps": "ADD_SLEEP",
    "growth": "ADD_GROWTH",
}


class Editing(BaseModel):
    kind: RecordKind
    record_id: RecordId

    model_config = {"frozen": True}


class AppState(BaseModel):
    view: ViewName = "LOGIN"
    language: Language = "en"
    toast: Optional[str] = None
    editing: Optional[Editing] = None
    store: RecordStore = RecordStore()

    model_config = {"frozen": True}

    @property
    def show_nav(self) -> bool:
        return not self.view.startswith("ADD_") and self.view != "LOGIN"


# ── Actions ───────────────────────────────────────────────────────────────────


class Navigate(BaseModel):
    view: ViewName


class ToggleLanguage(BaseModel):
    pass


class ShowToast(BaseModel):
    message: str


class ClearToast(BaseModel):
    pass


class LoadStore(BaseModel):
    store: RecordStore


class StartEdit(BaseModel):
    kind: RecordKind
    record_id: RecordId


class CancelEdit(BaseModel):
    kind: RecordKind


class SaveRecord(BaseModel):
    kind: RecordKind
    record: dict[str, Any]


class DeleteRecord(BaseModel):
    kind: RecordKind
    record_id: RecordId


class Logout(BaseModel):
    pass


Action = Union[
    Navigate, ToggleLanguage, ShowToast, ClearToast, LoadStore,
    StartEdit, CancelEdit, SaveRecord, DeleteRecord, Logout,
]


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that follows ``action``."""
    if isinstance(action, Navigate):
        return state.model_copy(update={"view": action.view, "editing": None})

    if isinstance(action, ToggleLanguage):
        return state.model_copy(update={"language": "zh" if state.language == "en" else "en"})

    if isinstance(action, ShowToast):
        return state.model_copy(update={"toast": action.message})

    if isinstance(action, ClearToast):
        return state.model_copy(update={"toast": None})

    if isinstance(action, LoadStore):
        return state.model_copy(update={"store": action.store})

    if isinstance(action, StartEdit):
        # Editing an id that is gone falls back to a blank form.
        found = state.store.find(action.kind, action.record_id) is not None
        editing = Editing(kind=action.kind, record_id=action.record_id) if found else None
        return state.model_copy(update={"view": FORM_VIEW[action.kind], "editing": editing})

    if isinstance(action, CancelEdit):
        return state.model_copy(update={"view": LIST_VIEW[action.kind], "editing": None})

    if isinstance(action, SaveRecord):
        existed = state.store.find(action.kind, action.record.get("id")) is not None
        store = mutations.upsert(state.store, action.kind, action.record)
        logger.info("%s %s record %r", "Updated" if existed else "Saved", action.kind, action.record.get("id"))
        return state.model_copy(update={
            "store": store,
            "view": LIST_VIEW[action.kind],
            "editing": None,
            "toast": "updated" if existed else "saved",
        })

    if isinstance(action, DeleteRecord):
        store = mutations.remove(state.store, action.kind, action.record_id)
        return state.model_copy(update={
            "store": store,
            "view": LIST_VIEW[action.kind],
            "editing": None,
            "toast": "deleted",
        })

    if isinstance(action, Logout):
        return AppState(language=state.language)

    raise TypeError(f"Unsupported action: {type(action).__name__}")
