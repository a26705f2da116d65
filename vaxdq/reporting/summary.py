"""Aggregate views over the display collection.

``severity_counts`` feeds the summary strip; ``summarize_missing`` feeds the
plain-language report of records that may need correction.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from vaxdq.quality.classifier import SEVERITY_TIERS, get_severity
from vaxdq.records.model import ImmunizationRecord, is_falsy

# (field, report line)
SUMMARY_FIELDS: tuple[tuple[str, str], ...] = (
    ("lot_number", "Records missing a lot number"),
    ("ndc", "Records missing an NDC"),
    ("vfc_status", "Records missing VFC eligibility"),
    ("funding_source", "Records missing funding source"),
    ("email", "Records missing patient email"),
    ("mobile", "Records missing patient phone number"),
)


def severity_counts(records: Iterable[ImmunizationRecord]) -> dict[str, int]:
    counts = {tier: 0 for tier in SEVERITY_TIERS}
    for record in records:
        counts[get_severity(record)] += 1
    return counts


def format_record_count(count: int) -> str:
    return "1 record" if count == 1 else f"{count} records"


@dataclass
class QualitySummary:
    date_from: str | None
    date_to: str | None
    total: int
    missing: dict[str, int] = field(default_factory=dict)

    def lines(self) -> list[str]:
        """Render the report as plain text lines."""
        out = [
            f"Date range: {self.date_from or ''} to {self.date_to or ''}",
            f"Records identified: {self.total}",
            "Summary of records that may need correction or follow-up",
        ]
        for name, text in SUMMARY_FIELDS:
            out.append(f"{text}: {self.missing.get(name, 0)}")
        return out

    def to_dict(self) -> dict:
        return {
            "date_from": self.date_from,
            "date_to": self.date_to,
            "total": self.total,
            "missing": dict(self.missing),
        }


def summarize_missing(
    records: Sequence[ImmunizationRecord],
    date_from: str | None,
    date_to: str | None,
) -> QualitySummary:
    missing = {
        name: sum(1 for r in records if is_falsy(r.get(name)))
        for name, _ in SUMMARY_FIELDS
    }
    return QualitySummary(
        date_from=date_from,
        date_to=date_to,
        total=len(records),
        missing=missing,
    )
