"""Immutable filter state.

A ``FilterState`` is a snapshot of every user-selected filter.  The pipeline
reads it and never changes it; shells build a new value on each change with
:meth:`FilterState.replace`.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from vaxdq.quality.classifier import SEVERITY_TIERS

MISSING_ALL = "all"

MISSING_SELECTORS: tuple[str, ...] = (
    MISSING_ALL,
    "incomplete",
    "complete",
    "vfc",
    "funding",
    "race",
    "ethnicity",
    "contact",
)

VALID_MISSING_SELECTORS: frozenset[str] = frozenset(MISSING_SELECTORS)
VALID_SEVERITIES: frozenset[str] = frozenset(SEVERITY_TIERS)


@dataclass(frozen=True)
class FilterState:
    date_from: str | None = None
    date_to: str | None = None
    missing: str = MISSING_ALL
    active_severity: str | None = None
    hide_reviewed: bool = False

    def __post_init__(self) -> None:
        if self.missing not in VALID_MISSING_SELECTORS:
            raise ValueError(
                f"Unknown missing-field selector {self.missing!r}; "
                f"must be one of {sorted(VALID_MISSING_SELECTORS)}"
            )
        if self.active_severity is not None and self.active_severity not in VALID_SEVERITIES:
            raise ValueError(
                f"Unknown severity {self.active_severity!r}; "
                f"must be one of {sorted(VALID_SEVERITIES)}"
            )

    @property
    def has_date_range(self) -> bool:
        return bool(self.date_from) and bool(self.date_to)

    def replace(self, **changes) -> FilterState:
        return dataclasses.replace(self, **changes)

    def date_range_differs(self, other: FilterState) -> bool:
        return (self.date_from, self.date_to) != (other.date_from, other.date_to)
