"""Reviewed-disposition tracking.

State per record id lives in two store keys::

    resolved:<doc_id>       "1" reviewed / "0" not reviewed
    resolved:<doc_id>:ts    ISO-8601 UTC timestamp, present only while reviewed

Unseen ids read as not reviewed.  ``set_reviewed`` is the single write path;
nothing else caches reviewed state.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from vaxdq.review.store import ReviewStore

logger = logging.getLogger(__name__)

_REVIEWED = "1"
_NOT_REVIEWED = "0"


def reviewed_key(doc_id: str) -> str:
    return f"resolved:{doc_id}"


def reviewed_ts_key(doc_id: str) -> str:
    return f"resolved:{doc_id}:ts"


def utc_timestamp(now: datetime | None = None) -> str:
    """Return *now* (default: current UTC time) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ReviewState:
    doc_id: str
    reviewed: bool
    reviewed_at: str | None

    def to_dict(self) -> dict:
        return {
            "doc_id": self.doc_id,
            "reviewed": self.reviewed,
            "reviewed_at": self.reviewed_at,
        }


class ReviewTracker:
    """Read and write reviewed state through an injected ``ReviewStore``."""

    def __init__(
        self,
        store: ReviewStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def is_reviewed(self, doc_id: str) -> bool:
        return self.store.get(reviewed_key(doc_id)) == _REVIEWED

    def get_reviewed_timestamp(self, doc_id: str) -> str | None:
        return self.store.get(reviewed_ts_key(doc_id))

    def set_reviewed(self, doc_id: str, reviewed: bool) -> ReviewState:
        """Write the disposition for *doc_id* and return the resulting state."""
        self.store.set(reviewed_key(doc_id), _REVIEWED if reviewed else _NOT_REVIEWED)
        if reviewed:
            self.store.set(reviewed_ts_key(doc_id), utc_timestamp(self._clock()))
        else:
            self.store.delete(reviewed_ts_key(doc_id))
        logger.info("Record %s marked %s", doc_id, "reviewed" if reviewed else "needs review")
        return self.get_state(doc_id)

    def toggle(self, doc_id: str) -> ReviewState:
        return self.set_reviewed(doc_id, not self.is_reviewed(doc_id))

    def get_state(self, doc_id: str) -> ReviewState:
        return ReviewState(
            doc_id=doc_id,
            reviewed=self.is_reviewed(doc_id),
            reviewed_at=self.get_reviewed_timestamp(doc_id),
        )
