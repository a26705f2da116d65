"""Record source loading.

The record collection is a JSON array of objects.  It is read once at
startup, either from a local path or over HTTP(S) with ``httpx``.  Any
failure here is fatal for the service: without records there is nothing to
assess, so callers are expected to log and re-raise.
"""
from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from vaxdq.records.model import ImmunizationRecord

logger = logging.getLogger(__name__)


class RecordLoadError(RuntimeError):
    """Raised when the record collection cannot be obtained or parsed."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def parse_records(payload: Any) -> list[ImmunizationRecord]:
    """Validate a decoded JSON payload and build the record collection.

    Enforces that the payload is an array of objects, each with a
    ``doc_id``, and that ``doc_id`` is unique across the collection.
    Input order is preserved.
    """
    if not isinstance(payload, list):
        raise RecordLoadError(
            f"record source must be a JSON array; got {type(payload).__name__}"
        )

    records: list[ImmunizationRecord] = []
    seen: set[str] = set()
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise RecordLoadError(f"record at index {index} is not an object")
        try:
            record = ImmunizationRecord.from_dict(item)
        except (TypeError, ValueError) as exc:
            raise RecordLoadError(f"record at index {index} is invalid: {exc}") from exc
        if record.doc_id in seen:
            raise RecordLoadError(f"duplicate doc_id {record.doc_id!r} at index {index}")
        seen.add(record.doc_id)
        records.append(record)
    return records


def load_records_from_path(path: str | Path) -> list[ImmunizationRecord]:
    """Read and parse a JSON record file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise RecordLoadError(f"cannot read record source {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RecordLoadError(f"record source {path} is not valid JSON: {exc}") from exc
    records = parse_records(payload)
    logger.info("Loaded %d records from %s", len(records), path.name)
    return records


async def fetch_records(
    source: str,
    *,
    timeout_s: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ImmunizationRecord]:
    """Obtain the record collection from *source* (URL or local path).

    This is the one-shot asynchronous load awaited before the engine is
    usable.  Raises :class:`RecordLoadError` on transport or parse failure.
    """
    if not _is_url(source):
        return await asyncio.to_thread(load_records_from_path, source)

    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            response = await client.get(source)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPError as exc:
        raise RecordLoadError(f"cannot fetch record source {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RecordLoadError(f"record source {source} is not valid JSON: {exc}") from exc

    records = parse_records(payload)
    logger.info("Fetched %d records from %s", len(records), source)
    return records


def index_by_doc_id(records: Iterable[ImmunizationRecord]) -> dict[str, ImmunizationRecord]:
    return {record.doc_id: record for record in records}
