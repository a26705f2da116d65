"""CSV export of the date-filtered record collection.

One row per record in the *date-filtered* collection (not the further
narrowed display collection), with the readiness score and reviewed state
appended.  Values are written in the string forms the dashboard shows:
absent values are blank, integral numbers have no decimal part, booleans are
``true``/``false``.

Pure logic is separated from file IO so it can be unit-tested without a
filesystem.
"""
from __future__ import annotations

import csv
import io
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from vaxdq.quality.readiness import compute_readiness
from vaxdq.records.model import RECORD_FIELDS, ImmunizationRecord
from vaxdq.review.tracker import ReviewTracker

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EXPORT_FIELDS: list[str] = [
    *RECORD_FIELDS,
    "readiness_score",
    "reviewed",
    "reviewed_timestamp",
]

DEFAULT_EXPORT_FILENAME = "immunization_data_quality_export.csv"

NO_ROWS_MESSAGE = "No rows to export"


class EmptyExportError(ValueError):
    """Raised when there are no date-filtered rows to export."""

    def __init__(self) -> None:
        super().__init__(NO_ROWS_MESSAGE)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def _format_value(value: Any) -> str:
    """Convert a record value to its display string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)


def build_export_row(record: ImmunizationRecord, tracker: ReviewTracker) -> list[str]:
    values = [_format_value(record.get(name)) for name in RECORD_FIELDS]
    values.append(str(compute_readiness(record)))
    values.append("1" if tracker.is_reviewed(record.doc_id) else "0")
    values.append(tracker.get_reviewed_timestamp(record.doc_id) or "")
    return values


def build_csv_content(
    records: Sequence[ImmunizationRecord],
    tracker: ReviewTracker,
) -> str:
    """Build CSV content as a string.  Pure function, no file IO.

    Fields containing a comma, quote or newline are quoted with internal
    quotes doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(EXPORT_FIELDS)
    for record in records:
        writer.writerow(build_export_row(record, tracker))
    return buf.getvalue()


# ---------------------------------------------------------------------------
# File exporter
# ---------------------------------------------------------------------------


@dataclass
class ExportResult:
    file_path: Path
    row_count: int


class CSVExporter:
    """Writes the date-filtered collection to a CSV file.

    Usage::

        exporter = CSVExporter(tracker)
        result = exporter.run(date_filtered_records, Path("/tmp/exports"))
    """

    def __init__(self, tracker: ReviewTracker) -> None:
        self._tracker = tracker

    def render(self, records: Sequence[ImmunizationRecord]) -> str:
        """Return CSV text, refusing an empty collection."""
        if not records:
            raise EmptyExportError()
        return build_csv_content(records, self._tracker)

    def run(
        self,
        records: Sequence[ImmunizationRecord],
        output_dir: Path,
        *,
        file_name: str = DEFAULT_EXPORT_FILENAME,
    ) -> ExportResult:
        content = self.render(records)
        output_dir.mkdir(parents=True, exist_ok=True)
        file_path = output_dir / file_name
        file_path.write_text(content, encoding="utf-8")
        logger.info("Exported %d records to %s", len(records), file_path.name)
        return ExportResult(file_path=file_path, row_count=len(records))
