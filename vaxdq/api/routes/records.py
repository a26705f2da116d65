"""Record listing and record guidance routes.

GET /records            -- filtered, classified rows plus strip counts and summary
GET /records/{doc_id}   -- guidance detail for one record
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vaxdq.api.deps import get_records, get_records_index, get_review_tracker
from vaxdq.api.routes._filters import build_filter_state
from vaxdq.dashboard.session import build_row_view
from vaxdq.filtering.pipeline import (
    apply_narrowing_filters,
    apply_view_filters,
    filter_by_date_range,
)
from vaxdq.quality.advisory import NO_GAPS_MESSAGE, generate_advisories
from vaxdq.quality.classifier import get_severity, risk_class_from_record
from vaxdq.quality.eligibility import is_child, is_public_funding, is_vfc_eligible
from vaxdq.quality.readiness import compute_readiness, is_complete_record
from vaxdq.records.model import ImmunizationRecord
from vaxdq.reporting.summary import format_record_count, severity_counts, summarize_missing
from vaxdq.review.tracker import ReviewTracker

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", summary="Filtered and classified records")
def list_records(
    date_from: str | None = None,
    date_to: str | None = None,
    quick_range: str | None = None,
    missing: str = "all",
    severity: str | None = None,
    hide_reviewed: bool = False,
    limit: int | None = Query(default=None, ge=1),
    records: list[ImmunizationRecord] = Depends(get_records),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    state = build_filter_state(date_from, date_to, quick_range, missing, severity, hide_reviewed)

    date_filtered = filter_by_date_range(records, state.date_from, state.date_to)
    narrowed = apply_narrowing_filters(date_filtered, state)
    display = apply_view_filters(narrowed, state, tracker.is_reviewed)

    shown = display if limit is None else display[:limit]
    return {
        "filters": {
            "date_from": state.date_from,
            "date_to": state.date_to,
            "missing": state.missing,
            "severity": state.active_severity,
            "hide_reviewed": state.hide_reviewed,
        },
        "total_records": len(records),
        "date_filtered_count": len(date_filtered),
        "display_count": len(display),
        "count_label": format_record_count(len(display)),
        "severity_counts": severity_counts(display),
        "summary": summarize_missing(display, state.date_from, state.date_to).to_dict(),
        "rows": [build_row_view(r, tracker).to_dict() for r in shown],
    }


@router.get("/{doc_id}", summary="Record guidance detail")
def get_record_detail(
    doc_id: str,
    index: dict[str, ImmunizationRecord] = Depends(get_records_index),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    record = index.get(doc_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {doc_id} not found")

    advisories = generate_advisories(record)
    return {
        "record": record.to_dict(),
        "severity": get_severity(record),
        "risk_class": risk_class_from_record(record),
        "readiness_score": compute_readiness(record),
        "is_complete": is_complete_record(record),
        "eligibility": {
            "is_child": is_child(record.age),
            "is_vfc_eligible": is_vfc_eligible(record.vfc_status),
            "is_public_funding": is_public_funding(record.funding_source),
        },
        "review": tracker.get_state(doc_id).to_dict(),
        "advisories": [a.to_dict() for a in advisories],
        "message": None if advisories else NO_GAPS_MESSAGE,
    }
