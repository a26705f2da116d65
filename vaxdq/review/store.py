"""Key-value repositories for durable reviewed state.

The tracker only needs ``get``/``set``/``delete`` by string key, so the
durability mechanism is swappable: ``SqlReviewStore`` persists to the
``review_entries`` table, ``InMemoryReviewStore`` backs tests and scratch
sessions.
"""
from __future__ import annotations

from typing import Protocol

from sqlalchemy.orm import Session

from vaxdq.db.models import ReviewEntry


class ReviewStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryReviewStore:
    """Dict-backed store; lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class SqlReviewStore:
    """SQLAlchemy-backed store.

    Writes are flushed immediately so later reads in the same session see
    them; the caller owns the transaction boundary.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> str | None:
        entry = self.db.get(ReviewEntry, key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        entry = self.db.get(ReviewEntry, key)
        if entry is None:
            self.db.add(ReviewEntry(key=key, value=value))
        else:
            entry.value = value
        self.db.flush()

    def delete(self, key: str) -> None:
        entry = self.db.get(ReviewEntry, key)
        if entry is not None:
            self.db.delete(entry)
            self.db.flush()
