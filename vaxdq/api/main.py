"""FastAPI application factory.

Loads the record collection once during startup, then assembles CORS and
all API routers.  This module is the authoritative app object;
vaxdq/main.py re-exports it.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vaxdq.api.routes.exports import router as exports_router
from vaxdq.api.routes.health import router as health_router
from vaxdq.api.routes.records import router as records_router
from vaxdq.api.routes.review import router as review_router
from vaxdq.core.logging import setup_logging
from vaxdq.core.settings import get_settings
from vaxdq.db.base import Base
from vaxdq.db.session import get_engine
from vaxdq.records.loader import RecordLoadError, fetch_records, index_by_doc_id

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    settings = get_settings()

    try:
        records = await fetch_records(
            settings.records_source,
            timeout_s=settings.records_fetch_timeout_s,
        )
    except RecordLoadError:
        logger.exception("Record collection failed to load; service cannot start")
        raise

    app.state.records = records
    app.state.records_by_id = index_by_doc_id(records)

    if settings.auto_create_schema:
        Base.metadata.create_all(bind=get_engine())

    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(records_router)
app.include_router(review_router)
app.include_router(exports_router)
