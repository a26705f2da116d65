"""Reviewed-disposition routes.

GET  /review/{doc_id}          -- current state
PUT  /review/{doc_id}          -- set reviewed true/false
POST /review/{doc_id}/toggle   -- flip the disposition
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from vaxdq.api.deps import get_records_index, get_review_tracker
from vaxdq.dashboard.session import build_row_view
from vaxdq.records.model import ImmunizationRecord
from vaxdq.review.tracker import ReviewTracker

router = APIRouter(prefix="/review", tags=["review"])


class SetReviewedBody(BaseModel):
    reviewed: bool


def _require_record(index: dict[str, ImmunizationRecord], doc_id: str) -> ImmunizationRecord:
    record = index.get(doc_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Record {doc_id} not found")
    return record


def _row_response(record: ImmunizationRecord, tracker: ReviewTracker) -> dict:
    row = build_row_view(record, tracker)
    return {
        "doc_id": record.doc_id,
        "reviewed": row.reviewed,
        "reviewed_at": row.reviewed_at,
        "css_classes": row.css_classes,
    }


@router.get("/{doc_id}", summary="Reviewed state for a record")
def get_review_state(
    doc_id: str,
    index: dict[str, ImmunizationRecord] = Depends(get_records_index),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    record = _require_record(index, doc_id)
    return _row_response(record, tracker)


@router.put("/{doc_id}", summary="Mark a record reviewed or needing review")
def set_review_state(
    doc_id: str,
    body: SetReviewedBody,
    index: dict[str, ImmunizationRecord] = Depends(get_records_index),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    record = _require_record(index, doc_id)
    tracker.set_reviewed(doc_id, body.reviewed)
    return _row_response(record, tracker)


@router.post("/{doc_id}/toggle", summary="Flip a record's reviewed state")
def toggle_review_state(
    doc_id: str,
    index: dict[str, ImmunizationRecord] = Depends(get_records_index),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    record = _require_record(index, doc_id)
    tracker.toggle(doc_id)
    return _row_response(record, tracker)
