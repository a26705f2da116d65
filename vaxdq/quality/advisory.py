"""Per-record remediation advisories.

Scans a fixed list of fields in priority order and emits one entry per gap,
decorated with the field guidance text.  The scan does not consult either
risk tier; it only enumerates what a provider can fix.
"""
from __future__ import annotations

from dataclasses import dataclass

from vaxdq.quality.classifier import SEVERITY_HIGH, SEVERITY_LOW, SEVERITY_MEDIUM
from vaxdq.quality.guidance import get_guidance
from vaxdq.records.model import ImmunizationRecord, is_falsy

NO_GAPS_MESSAGE = "No documentation gaps detected for this record."
NO_RECOMMENDATIONS_MESSAGE = (
    "No recommendations. This record is complete for the selected checks."
)

ADVISORY_CHECKS: tuple[tuple[str, str], ...] = (
    ("vfc_status", SEVERITY_HIGH),
    ("funding_source", SEVERITY_HIGH),
    ("race", SEVERITY_MEDIUM),
    ("ethnicity", SEVERITY_MEDIUM),
    ("mobile", SEVERITY_LOW),
    ("email", SEVERITY_LOW),
)

_IMPACT_LABELS: dict[str, str] = {
    SEVERITY_HIGH: "High impact",
    SEVERITY_MEDIUM: "Medium impact",
    SEVERITY_LOW: "Low impact",
}


@dataclass(frozen=True)
class AdvisoryEntry:
    field: str
    severity: str
    label: str
    impact: str
    fix: str

    @property
    def impact_label(self) -> str:
        return _IMPACT_LABELS[self.severity]

    def to_dict(self) -> dict[str, str]:
        return {
            "field": self.field,
            "severity": self.severity,
            "impact_label": self.impact_label,
            "label": self.label,
            "impact": self.impact,
            "fix": self.fix,
        }


def generate_advisories(record: ImmunizationRecord) -> list[AdvisoryEntry]:
    """Return the ordered advisory entries for *record* (empty when no gaps)."""
    entries: list[AdvisoryEntry] = []
    for field, severity in ADVISORY_CHECKS:
        if not is_falsy(record.get(field)):
            continue
        guidance = get_guidance(field)
        entries.append(
            AdvisoryEntry(
                field=field,
                severity=severity,
                label=guidance.label if guidance else field,
                impact=guidance.impact if guidance else "",
                fix=guidance.fix if guidance else "",
            )
        )
    return entries
