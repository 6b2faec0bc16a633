"""Flatten every record kind into one table for bulk export."""

from babydaily.engine.clock import format_date
from babydaily.engine.store import RecordStore

HEADER = ["Category", "Date", "Time", "Detail", "Value"]


def export_all(store: RecordStore) -> list[list[str]]:
    """Rows of ``[category, date, time/range, detail, value]``.

    Feedings first, then diapers, sleeps and growth, each in store order.
    """
    rows = []
    for f in store.feedings:
        rows.append(["Feeding", format_date(f.timestamp), f.time, f.type, f"{f.volume}ml"])
    for d in store.diapers:
        rows.append(["Diaper", format_date(d.timestamp), d.time, d.type, d.sub])
    for s in store.sleeps:
        rows.append(["Sleep", format_date(s.timestamp), f"{s.start}-{s.end}", "Duration", s.duration])
    for g in store.growth:
        rows.append(["Growth", g.date, "-", f"H:{g.height}cm", f"W:{g.weight}kg"])
    return rows


def to_csv(rows: list[list[str]], header: bool = True) -> str:
    """Comma-joined lines. Fields are not quoted, so a comma inside a note splits it."""
    lines = [",".join(HEADER)] if header else []
    lines.extend(",".join(str(v) for v in row) for row in rows)
    return "\n".join(lines) + "\n"
