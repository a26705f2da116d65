from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from vaxdq.db.base import Base


class ReviewEntry(Base):
    """One durable key-value entry of reviewed state.

    Each record id owns up to two keys: the disposition flag
    (``resolved:<doc_id>``) and the reviewed timestamp
    (``resolved:<doc_id>:ts``).
    """

    __tablename__ = "review_entries"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
