"""Readiness score: 0-100 summary of weighted field completeness."""
from __future__ import annotations

from vaxdq.records.model import ImmunizationRecord, is_falsy

READINESS_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("lot_number", 25),
    ("ndc", 25),
    ("expiration_date", 10),
    ("vfc_status", 15),
    ("funding_source", 15),
    ("mobile", 5),
    ("email", 5),
)

DATE_INVERSION_PENALTY = 15

MAX_SCORE = 100
MIN_SCORE = 0


def compute_readiness(record: ImmunizationRecord) -> int:
    """Return the readiness score for *record*.

    Each falsy weighted field costs its weight.  An expiration date that
    sorts before the administration date costs a further
    ``DATE_INVERSION_PENALTY``.  Dates are compared as strings, which orders
    correctly only for fixed-width ``YYYY-MM-DD`` values.
    """
    score = MAX_SCORE
    for field, weight in READINESS_WEIGHTS:
        if is_falsy(record.get(field)):
            score -= weight

    if not is_falsy(record.administered_date) and not is_falsy(record.expiration_date):
        if str(record.expiration_date) < str(record.administered_date):
            score = max(MIN_SCORE, score - DATE_INVERSION_PENALTY)

    return max(MIN_SCORE, min(MAX_SCORE, score))


def is_complete_record(record: ImmunizationRecord) -> bool:
    """Return whether every weighted readiness field is present."""
    return all(not is_falsy(record.get(field)) for field, _ in READINESS_WEIGHTS)
