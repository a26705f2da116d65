"""Field guidance table.

Maps each assessable field to a human-readable label, an impact severity,
the reporting impact of leaving it blank, and the remediation step for the
provider.  Static and process-lifetime constant.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

SEVERITY_HIGH = "High"
SEVERITY_MEDIUM = "Medium"
SEVERITY_LOW = "Low"

GUIDANCE_SEVERITIES: frozenset[str] = frozenset({SEVERITY_HIGH, SEVERITY_MEDIUM, SEVERITY_LOW})


@dataclass(frozen=True)
class FieldGuidance:
    label: str
    severity: str
    impact: str
    fix: str


_DEMOGRAPHICS_FIX = (
    "Update patient demographics in the EHR. If patient declines, record the "
    "appropriate refusal/unknown option per your workflow."
)

FIELD_GUIDANCE: MappingProxyType[str, FieldGuidance] = MappingProxyType({
    "ndc": FieldGuidance(
        label="NDC",
        severity=SEVERITY_MEDIUM,
        impact=(
            "Product identification can fail for registry acceptance and "
            "inventory reconciliation."
        ),
        fix=(
            "Select the correct NDC from your vaccine master or barcode scan, "
            "aligned to the administered product."
        ),
    ),
    "lot_number": FieldGuidance(
        label="Lot Number",
        severity=SEVERITY_HIGH,
        impact=(
            "Lot decrement and inventory reconciliation at the registry can "
            "fail, increasing audit risk."
        ),
        fix=(
            "Enter the lot from vial/carton. If unavailable, confirm via "
            "inventory log for that administration date."
        ),
    ),
    "expiration_date": FieldGuidance(
        label="Exp Date",
        severity=SEVERITY_HIGH,
        impact="Missing or invalid expiration can trigger registry validation errors.",
        fix=(
            "Enter expiration from vial/carton. Ensure expiration is after the "
            "administration date."
        ),
    ),
    "vfc_status": FieldGuidance(
        label="VFC Eligibility",
        severity=SEVERITY_HIGH,
        impact="VFC accountability and public program reporting can be incomplete.",
        fix=(
            "Confirm eligibility at time of administration and record the "
            "correct VFC code."
        ),
    ),
    "funding_source": FieldGuidance(
        label="Funding Source",
        severity=SEVERITY_HIGH,
        impact=(
            "Funding attribution impacts reporting, reimbursements, and public "
            "program compliance."
        ),
        fix=(
            "Select the funding source aligned to eligibility and clinic "
            "program configuration."
        ),
    ),
    "race": FieldGuidance(
        label="Race",
        severity=SEVERITY_MEDIUM,
        impact=(
            "Missing race can reduce registry data completeness and downstream "
            "reporting accuracy."
        ),
        fix=_DEMOGRAPHICS_FIX,
    ),
    "ethnicity": FieldGuidance(
        label="Ethnicity",
        severity=SEVERITY_MEDIUM,
        impact=(
            "Missing ethnicity can reduce registry data completeness and "
            "downstream reporting accuracy."
        ),
        fix=_DEMOGRAPHICS_FIX,
    ),
    "mobile": FieldGuidance(
        label="Mobile",
        severity=SEVERITY_LOW,
        impact="Patient reminders and series completion outreach are impacted.",
        fix="Verify phone during check-in or via patient portal.",
    ),
    "email": FieldGuidance(
        label="Email",
        severity=SEVERITY_LOW,
        impact="Electronic reminders and follow-up may not reach the patient.",
        fix="Verify email during check-in or via patient portal.",
    ),
})


def get_guidance(field: str) -> FieldGuidance | None:
    """Return the guidance entry for *field*, or ``None`` if it has none."""
    return FIELD_GUIDANCE.get(field)
