"""Program eligibility helpers shown alongside record guidance."""
from __future__ import annotations

from typing import Any

CHILD_AGE_LIMIT = 19

# VFC eligibility codes V02-V0x; V01 means "not VFC eligible".
VFC_NOT_ELIGIBLE = "V01"

PUBLIC_FUNDING_CODES: frozenset[str] = frozenset({"VXC50", "VXC51", "VXC52"})


def is_child(age: Any) -> bool:
    """Return whether *age* is present and below the VFC child age limit.

    A blank age is unknown, not zero, so ``is_child("")`` is False.
    """
    if age is None or age == "":
        return False
    try:
        return float(age) < CHILD_AGE_LIMIT
    except (TypeError, ValueError):
        return False


def is_vfc_eligible(vfc_status: Any) -> bool:
    if not vfc_status or not isinstance(vfc_status, str):
        return False
    return vfc_status.startswith("V0") and vfc_status != VFC_NOT_ELIGIBLE


def is_public_funding(funding_source: Any) -> bool:
    return isinstance(funding_source, str) and funding_source in PUBLIC_FUNDING_CODES
