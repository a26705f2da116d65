"""Date-range helpers used by the date-picker collaborator.

All ranges are inclusive and expressed as ``YYYY-MM-DD`` strings, the only
format the filter pipeline compares correctly.
"""
from __future__ import annotations

from datetime import date, timedelta

QUICK_RANGE_CUSTOM = "custom"
DEFAULT_QUICK_RANGE = "last7"

# name -> (days back for start, days back for end)
QUICK_RANGES: dict[str, tuple[int, int]] = {
    "today": (0, 0),
    "yesterday": (1, 1),
    "last7": (6, 0),
    "last14": (13, 0),
    "last30": (29, 0),
}


def format_ymd(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def clamp_to_today(d: date, today: date | None = None) -> date:
    """Return *d*, or *today* if *d* lies in the future."""
    today = today or date.today()
    return today if d > today else d


def relative_date_range(
    days_back_start: int,
    days_back_end: int = 0,
    today: date | None = None,
) -> tuple[str, str]:
    """Return ``(from, to)`` counted back from today."""
    anchor = today or date.today()
    start = anchor - timedelta(days=days_back_start)
    end = anchor - timedelta(days=days_back_end)
    return format_ymd(start), format_ymd(end)


def quick_range(name: str, today: date | None = None) -> tuple[str, str]:
    """Resolve a named quick range to ``(from, to)``."""
    if name not in QUICK_RANGES:
        raise ValueError(
            f"Unknown quick range {name!r}; must be one of {sorted(QUICK_RANGES)}"
        )
    days_back_start, days_back_end = QUICK_RANGES[name]
    return relative_date_range(days_back_start, days_back_end, today)


def ensure_from_to_order(date_from: str, date_to: str) -> tuple[str, str]:
    """Auto-correct an inverted picker selection by moving *to* up to *from*."""
    if date_from and date_to and date_from > date_to:
        return date_from, date_from
    return date_from, date_to


def detect_quick_range(date_from: str, date_to: str, today: date | None = None) -> str:
    """Return the quick-range name matching ``(from, to)`` exactly, else ``custom``."""
    for name in QUICK_RANGES:
        if quick_range(name, today) == (date_from, date_to):
            return name
    return QUICK_RANGE_CUSTOM
