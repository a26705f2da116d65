"""FastAPI dependency injection: database sessions, records and services."""
from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from vaxdq.db.session import get_db_session
from vaxdq.records.model import ImmunizationRecord
from vaxdq.review.store import SqlReviewStore
from vaxdq.review.tracker import ReviewTracker


def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    yield from get_db_session()


def get_records(request: Request) -> list[ImmunizationRecord]:
    """Return the record collection loaded once at startup."""
    return request.app.state.records


def get_records_index(request: Request) -> dict[str, ImmunizationRecord]:
    return request.app.state.records_by_id


def get_review_tracker(db: Session = Depends(get_db)) -> ReviewTracker:
    """Return a ReviewTracker bound to the current DB session."""
    return ReviewTracker(SqlReviewStore(db))
