"""Shared query-parameter handling for record and export routes."""
from __future__ import annotations

from fastapi import HTTPException

from vaxdq.filtering.dates import quick_range
from vaxdq.filtering.state import FilterState


def resolve_date_range(
    date_from: str | None,
    date_to: str | None,
    range_name: str | None,
) -> tuple[str | None, str | None]:
    """A named quick range wins over explicit dates."""
    if range_name is None:
        return date_from, date_to
    try:
        return quick_range(range_name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def build_filter_state(
    date_from: str | None,
    date_to: str | None,
    range_name: str | None = None,
    missing: str = "all",
    severity: str | None = None,
    hide_reviewed: bool = False,
) -> FilterState:
    date_from, date_to = resolve_date_range(date_from, date_to, range_name)
    try:
        return FilterState(
            date_from=date_from,
            date_to=date_to,
            missing=missing,
            active_severity=severity,
            hide_reviewed=hide_reviewed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
