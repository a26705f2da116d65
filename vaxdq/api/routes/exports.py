"""CSV export route.

GET /exports/csv -- date-filtered collection as a CSV attachment
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from vaxdq.api.deps import get_records, get_review_tracker
from vaxdq.api.routes._filters import resolve_date_range
from vaxdq.core.settings import get_settings
from vaxdq.export.csv_exporter import CSVExporter, EmptyExportError
from vaxdq.filtering.pipeline import filter_by_date_range
from vaxdq.records.model import ImmunizationRecord
from vaxdq.review.tracker import ReviewTracker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exports", tags=["exports"])


@router.get("/csv", summary="Export the date-filtered records as CSV")
def export_csv(
    date_from: str | None = None,
    date_to: str | None = None,
    quick_range: str | None = None,
    records: list[ImmunizationRecord] = Depends(get_records),
    tracker: ReviewTracker = Depends(get_review_tracker),
):
    date_from, date_to = resolve_date_range(date_from, date_to, quick_range)
    rows = filter_by_date_range(records, date_from, date_to)

    try:
        content = CSVExporter(tracker).render(rows)
    except EmptyExportError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info("Serving CSV export with %d rows", len(rows))
    filename = get_settings().export_filename
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
