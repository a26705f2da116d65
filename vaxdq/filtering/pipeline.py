"""Record filter pipeline.

Stages, always applied in this order::

    1. date range        date_from <= administered_date <= date_to
    2. missing field     selector from MISSING_SELECTORS
    3. active severity   optional pinned severity tier
    4. reviewed          optional; drops records marked reviewed

Every stage returns a new list in input order and never mutates a record.
Stage 1 refuses unranged data: without both bounds the result is empty.
Dates compare as strings, which is only date-order-correct for fixed-width
``YYYY-MM-DD`` values.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from vaxdq.filtering.state import MISSING_ALL, FilterState
from vaxdq.quality.classifier import SEVERITY_CLEAN, get_severity
from vaxdq.records.model import ImmunizationRecord, is_falsy

ReviewLookup = Callable[[str], bool]

_MISSING_PREDICATES: dict[str, Callable[[ImmunizationRecord], bool]] = {
    "incomplete": lambda r: get_severity(r) != SEVERITY_CLEAN,
    "complete": lambda r: get_severity(r) == SEVERITY_CLEAN,
    "vfc": lambda r: is_falsy(r.vfc_status),
    "funding": lambda r: is_falsy(r.funding_source),
    "race": lambda r: is_falsy(r.race),
    "ethnicity": lambda r: is_falsy(r.ethnicity),
    "contact": lambda r: is_falsy(r.email) or is_falsy(r.mobile),
}


def _in_range(record: ImmunizationRecord, date_from: str, date_to: str) -> bool:
    if is_falsy(record.administered_date):
        return False
    administered = str(record.administered_date)
    return date_from <= administered <= date_to


def filter_by_date_range(
    records: Iterable[ImmunizationRecord],
    date_from: str | None,
    date_to: str | None,
) -> list[ImmunizationRecord]:
    """Stage 1: keep records administered within the inclusive range."""
    if not date_from or not date_to:
        return []
    return [r for r in records if _in_range(r, date_from, date_to)]


def filter_by_missing(
    records: Iterable[ImmunizationRecord],
    selector: str,
) -> list[ImmunizationRecord]:
    """Stage 2: keep records matching the missing-field *selector*."""
    if selector == MISSING_ALL:
        return list(records)
    try:
        predicate = _MISSING_PREDICATES[selector]
    except KeyError:
        raise ValueError(f"Unknown missing-field selector {selector!r}") from None
    return [r for r in records if predicate(r)]


def filter_by_severity(
    records: Iterable[ImmunizationRecord],
    severity: str | None,
) -> list[ImmunizationRecord]:
    """Stage 3: keep records whose severity tier equals *severity*, if pinned."""
    if severity is None:
        return list(records)
    return [r for r in records if get_severity(r) == severity]


def hide_reviewed_records(
    records: Iterable[ImmunizationRecord],
    is_reviewed: ReviewLookup,
) -> list[ImmunizationRecord]:
    """Stage 4: drop records currently marked reviewed."""
    return [r for r in records if not is_reviewed(r.doc_id)]


def apply_narrowing_filters(
    records: Sequence[ImmunizationRecord],
    state: FilterState,
) -> list[ImmunizationRecord]:
    """Stages 2 and 3 over an already date-filtered collection."""
    rows = filter_by_missing(records, state.missing)
    return filter_by_severity(rows, state.active_severity)


def apply_view_filters(
    records: Sequence[ImmunizationRecord],
    state: FilterState,
    is_reviewed: ReviewLookup,
) -> list[ImmunizationRecord]:
    """Stage 4, view-only."""
    if not state.hide_reviewed:
        return list(records)
    return hide_reviewed_records(records, is_reviewed)


def compute_display_collection(
    records: Sequence[ImmunizationRecord],
    state: FilterState,
    is_reviewed: ReviewLookup,
) -> list[ImmunizationRecord]:
    """Run the whole chain and return the records slated for display."""
    rows = filter_by_date_range(records, state.date_from, state.date_to)
    rows = apply_narrowing_filters(rows, state)
    return apply_view_filters(rows, state, is_reviewed)
