"""Derived views: the filtered lists, totals and predictions a screen shows.

All functions are pure. Anything that depends on the current moment takes
it as an explicit ``now`` / ``reference`` argument (epoch ms or datetime).
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Literal, Optional, Union, get_args

from pydantic import BaseModel

from babydaily.engine.clock import (
    add_hours,
    days_apart,
    duration_minutes,
    epoch_ms,
    format_clock,
    format_minutes,
    same_local_day,
)
from babydaily.engine.errors import InvalidFormat
from babydaily.engine.store import RecordStore
from babydaily.models.diaper import Diaper, DiaperType
from babydaily.models.feeding import Feeding
from babydaily.models.growth import Growth
from babydaily.models.sleep import Sleep

logger = logging.getLogger(__name__)

Moment = Union[int, datetime]
DiaperFilter = Literal["all", "pee", "poo", "mixed"]
DiaperScope = Literal["today", "history"]
FeedingScope = Literal["today", "week"]
GrowthField = Literal["weight", "height"]

WEEK_DAYS = 7
NEXT_DIAPER_HOURS = 2.5
DEFAULT_DIAPER_PREDICTION_TIME = "12:00"
SERIES_PADDING = 0.5


def _ms(moment: Moment) -> int:
    return epoch_ms(moment) if isinstance(moment, datetime) else int(moment)


# ── Feedings ──────────────────────────────────────────────────────────────────


def filter_feedings_by_day(feedings: Sequence[Feeding], reference: Moment) -> list[Feeding]:
    """Feedings on the same local calendar day as ``reference``."""
    ref = _ms(reference)
    return [f for f in feedings if same_local_day(f.timestamp, ref)]


def filter_feedings_by_week(feedings: Sequence[Feeding], reference: Moment) -> list[Feeding]:
    """Feedings at most 7 days from ``reference``, counting partial days as whole.

    A record exactly 7 days away is kept; one 7 days and a minute away rounds
    up to 8 and is dropped. Records after ``reference`` are measured the same way.
    """
    ref = _ms(reference)
    return [f for f in feedings if days_apart(ref, f.timestamp) <= WEEK_DAYS]


def total_volume(feedings: Sequence[Feeding]) -> int:
    return sum(f.volume for f in feedings)


# ── Diapers ───────────────────────────────────────────────────────────────────


def filter_diapers_by_type(diapers: Sequence[Diaper], diaper_type: str) -> list[Diaper]:
    if diaper_type == "all":
        return list(diapers)
    if diaper_type not in get_args(DiaperType):
        raise InvalidFormat(f"Unknown diaper filter {diaper_type!r}")
    return [d for d in diapers if d.type == diaper_type]


def filter_diapers_by_scope(diapers: Sequence[Diaper], scope: str, now: Moment) -> list[Diaper]:
    if scope == "history":
        return list(diapers)
    if scope != "today":
        raise InvalidFormat(f"Unknown diaper scope {scope!r}")
    today = _ms(now)
    return [d for d in diapers if same_local_day(d.timestamp, today)]


class DiaperPrediction(BaseModel):
    time: str
    type: DiaperType


def predict_next_diaper(diapers: Sequence[Diaper]) -> DiaperPrediction:
    """Newest change plus two and a half hours; the type guess is always pee."""
    if not diapers:
        return DiaperPrediction(time=DEFAULT_DIAPER_PREDICTION_TIME, type="pee")
    latest = diapers[0]
    return DiaperPrediction(
        time=format_clock(add_hours(latest.timestamp, NEXT_DIAPER_HOURS)),
        type="pee",
    )


# ── Sleep ─────────────────────────────────────────────────────────────────────


def filter_sleeps_by_day(sleeps: Sequence[Sleep], reference: Moment) -> list[Sleep]:
    ref = _ms(reference)
    return [s for s in sleeps if same_local_day(s.timestamp, ref)]


def total_sleep_minutes(sleeps: Sequence[Sleep]) -> int:
    return sum(duration_minutes(s.start, s.end) for s in sleeps)


# ── Growth ────────────────────────────────────────────────────────────────────


class GrowthSnapshot(BaseModel):
    weight: str
    height: str
    date: Optional[str] = None


EMPTY_GROWTH = GrowthSnapshot(weight="0.00", height="0.00")


def latest_growth(growth: Sequence[Growth]) -> Growth | GrowthSnapshot:
    return growth[0] if growth else EMPTY_GROWTH


class SeriesPoint(BaseModel):
    x: float
    y: float


def growth_series(growth: Sequence[Growth], field: str) -> list[SeriesPoint]:
    """Chart points in [0, 1] x [0, 1], oldest first.

    The vertical range is padded by half a unit beyond the observed min/max,
    so no point sits exactly on the top or bottom edge.
    """
    if field not in get_args(GrowthField):
        raise InvalidFormat(f"Unknown growth field {field!r}")
    if len(growth) < 2:
        return []
    ordered = sorted(growth, key=lambda g: g.timestamp)
    values = [float(getattr(g, field)) for g in ordered]
    low, high = min(values) - SERIES_PADDING, max(values) + SERIES_PADDING
    last = len(values) - 1
    return [
        SeriesPoint(x=i / last, y=(v - low) / (high - low))
        for i, v in enumerate(values)
    ]


# ── Screen bundles ────────────────────────────────────────────────────────────


class FeedingView(BaseModel):
    scope: FeedingScope
    records: list[Feeding]
    total_volume: int


class DiaperView(BaseModel):
    diaper_type: DiaperFilter
    scope: DiaperScope
    records: list[Diaper]
    prediction: DiaperPrediction


class SleepView(BaseModel):
    records: list[Sleep]
    total: str


class GrowthView(BaseModel):
    field: GrowthField
    latest: Union[Growth, GrowthSnapshot]
    series: list[SeriesPoint]


def feeding_view(store: RecordStore, scope: str, now: Moment) -> FeedingView:
    if scope == "today":
        records = filter_feedings_by_day(store.feedings, now)
    elif scope == "week":
        records = filter_feedings_by_week(store.feedings, now)
    else:
        raise InvalidFormat(f"Unknown feeding scope {scope!r}")
    logger.debug("Feeding view %s: %d of %d records", scope, len(records), len(store.feedings))
    return FeedingView(scope=scope, records=records, total_volume=total_volume(records))


def diaper_view(store: RecordStore, diaper_type: str, scope: str, now: Moment) -> DiaperView:
    """Diapers for the log screen; the prediction always uses the full history."""
    records = filter_diapers_by_type(filter_diapers_by_scope(store.diapers, scope, now), diaper_type)
    return DiaperView(
        diaper_type=diaper_type,
        scope=scope,
        records=records,
        prediction=predict_next_diaper(store.diapers),
    )


def sleep_view(store: RecordStore, now: Moment) -> SleepView:
    records = filter_sleeps_by_day(store.sleeps, now)
    return SleepView(records=records, total=format_minutes(total_sleep_minutes(records)))


def growth_view(store: RecordStore, field: str) -> GrowthView:
    return GrowthView(
        field=field,
        latest=latest_growth(store.growth),
        series=growth_series(store.growth, field),
    )
