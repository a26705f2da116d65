"""Risk tier classification.

Two independent rules:

``risk_class_from_record`` (structural)
    high   : a field required for a usable order record is empty
             (vaccine_name, quantity, units, ndc, lot_number, expiration_date)
    medium : vfc_status, funding_source, race or ethnicity is empty
    low    : mobile or email is empty
    ""     : nothing missing

``get_severity`` (categorical)
    high   : vfc_status AND funding_source are both falsy
    medium : race OR ethnicity is falsy
    low    : mobile OR email is falsy
    clean  : otherwise

The structural rule treats whitespace-only strings as empty; the categorical
rule only treats falsy values as missing.  They are not expected to agree.
"""
from __future__ import annotations

from vaxdq.records.model import ImmunizationRecord, is_empty, is_falsy

RISK_HIGH = "high"
RISK_MEDIUM = "medium"
RISK_LOW = "low"
RISK_NONE = ""

RISK_CLASSES: frozenset[str] = frozenset({RISK_HIGH, RISK_MEDIUM, RISK_LOW, RISK_NONE})

SEVERITY_HIGH = "high"
SEVERITY_MEDIUM = "medium"
SEVERITY_LOW = "low"
SEVERITY_CLEAN = "clean"

# Summary-strip order.
SEVERITY_TIERS: tuple[str, ...] = (SEVERITY_HIGH, SEVERITY_MEDIUM, SEVERITY_LOW, SEVERITY_CLEAN)

STRUCTURAL_HIGH_FIELDS: tuple[str, ...] = (
    "vaccine_name",
    "quantity",
    "units",
    "ndc",
    "lot_number",
    "expiration_date",
)
STRUCTURAL_MEDIUM_FIELDS: tuple[str, ...] = ("vfc_status", "funding_source", "race", "ethnicity")
CONTACT_FIELDS: tuple[str, ...] = ("mobile", "email")


def _any_empty(record: ImmunizationRecord, names: tuple[str, ...]) -> bool:
    return any(is_empty(record.get(name)) for name in names)


def risk_class_from_record(record: ImmunizationRecord) -> str:
    """Return the structural risk tier used for row highlighting."""
    if _any_empty(record, STRUCTURAL_HIGH_FIELDS):
        return RISK_HIGH
    if _any_empty(record, STRUCTURAL_MEDIUM_FIELDS):
        return RISK_MEDIUM
    if _any_empty(record, CONTACT_FIELDS):
        return RISK_LOW
    return RISK_NONE


def get_severity(record: ImmunizationRecord) -> str:
    """Return the severity tier used for triage, filtering and the summary strip."""
    if is_falsy(record.vfc_status) and is_falsy(record.funding_source):
        return SEVERITY_HIGH
    if is_falsy(record.race) or is_falsy(record.ethnicity):
        return SEVERITY_MEDIUM
    if is_falsy(record.mobile) or is_falsy(record.email):
        return SEVERITY_LOW
    return SEVERITY_CLEAN
