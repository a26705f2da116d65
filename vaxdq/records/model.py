"""Canonical immutable record shared by every engine component.

Field contract
--------------
doc_id            : unique identifier; stable key for review tracking
patient_id        : patient identifier
administered_date : ISO calendar date ``YYYY-MM-DD``
vaccine_name      : administered product name
quantity, units   : dose amount and unit
ndc, lot_number,
expiration_date   : product identification; may be absent
vfc_status,
funding_source    : program/compliance codes; may be absent
race, ethnicity   : demographics; may be absent
mobile, email     : patient contact; may be absent
age, status       : display-only descriptors

Values keep their JSON types (``quantity`` and ``age`` are frequently
numbers).  Missing keys become ``None``; unknown keys are ignored.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any

RECORD_FIELDS: tuple[str, ...] = (
    "doc_id",
    "patient_id",
    "status",
    "age",
    "race",
    "ethnicity",
    "mobile",
    "email",
    "administered_date",
    "vaccine_name",
    "vfc_status",
    "funding_source",
    "quantity",
    "units",
    "ndc",
    "lot_number",
    "expiration_date",
)


def is_falsy(value: Any) -> bool:
    """Return ``True`` for absent, empty, zero, false, or NaN values."""
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value


def is_empty(value: Any) -> bool:
    """Return ``True`` when *value* is absent or blank after trimming.

    Unlike :func:`is_falsy`, ``0`` and ``False`` are not empty, while a
    whitespace-only string is.
    """
    return value is None or str(value).strip() == ""


@dataclass(frozen=True)
class ImmunizationRecord:
    """One immunization administration event."""

    doc_id: str
    patient_id: Any = None
    status: Any = None
    age: Any = None
    race: Any = None
    ethnicity: Any = None
    mobile: Any = None
    email: Any = None
    administered_date: Any = None
    vaccine_name: Any = None
    vfc_status: Any = None
    funding_source: Any = None
    quantity: Any = None
    units: Any = None
    ndc: Any = None
    lot_number: Any = None
    expiration_date: Any = None

    def __post_init__(self) -> None:
        if is_empty(self.doc_id):
            raise ValueError("doc_id must be a non-empty value")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImmunizationRecord:
        """Build a record from a decoded JSON object, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if "doc_id" not in values:
            raise ValueError("record is missing doc_id")
        values["doc_id"] = str(values["doc_id"])
        return cls(**values)

    def get(self, field: str) -> Any:
        return getattr(self, field, None)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in RECORD_FIELDS}
