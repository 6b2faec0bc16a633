"""In-memory record store for one baby profile."""

from typing import Literal, Union, get_args

from pydantic import BaseModel

from babydaily.models.diaper import Diaper, DiaperCreate
from babydaily.models.feeding import Feeding, FeedingCreate
from babydaily.models.growth import Growth, GrowthCreate
from babydaily.models.sleep import Sleep, SleepCreate

RecordKind = Literal["feedings", "diapers", "sleeps", "growth"]
KINDS: tuple[str, ...] = get_args(RecordKind)

Record = Union[Feeding, Diaper, Sleep, Growth]
RecordId = Union[int, str]

# kind -> (stored model, create/replace payload model)
KIND_MODELS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "feedings": (Feeding, FeedingCreate),
    "diapers": (Diaper, DiaperCreate),
    "sleeps": (Sleep, SleepCreate),
    "growth": (Growth, GrowthCreate),
}


def check_kind(kind: str) -> str:
    if kind not in KIND_MODELS:
        raise KeyError(f"Unknown record kind {kind!r}, expected one of {', '.join(KINDS)}")
    return kind


class RecordStore(BaseModel):
    """Immutable snapshot of all four collections, each newest first.

    Mutations never touch an existing store; they return a new one
    (see :mod:`babydaily.engine.mutations`).
    """
    feedings: tuple[Feeding, ...] = ()
    diapers: tuple[Diaper, ...] = ()
    sleeps: tuple[Sleep, ...] = ()
    growth: tuple[Growth, ...] = ()

    model_config = {"frozen": True}

    def records(self, kind: str) -> tuple[Record, ...]:
        return getattr(self, check_kind(kind))

    def with_records(self, kind: str, records) -> "RecordStore":
        return self.model_copy(update={check_kind(kind): tuple(records)})

    def find(self, kind: str, record_id: RecordId) -> Record | None:
        return next((r for r in self.records(kind) if r.id == record_id), None)
