"""Stateful dashboard shell around the pure filter pipeline.

``DashboardSession`` owns everything mutable: the current ``FilterState``,
the cached date-filtered collection, the cached narrowed collection and the
debounced refresh.  Cache rules:

- changing the date range invalidates every stage and re-runs the chain;
- changing the missing-field selector or pinned severity re-runs stages 2-4
  from the cached date-filtered collection;
- toggling hide-reviewed or a reviewed disposition only re-runs stage 4.

Reviewed state is never cached here; the tracker's store is the source of
truth and ``toggle_reviewed`` is the only write path.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from vaxdq.core.settings import get_settings
from vaxdq.export.csv_exporter import CSVExporter, ExportResult
from vaxdq.filtering.dates import DEFAULT_QUICK_RANGE, QUICK_RANGE_CUSTOM, detect_quick_range, quick_range
from vaxdq.filtering.debounce import Debouncer
from vaxdq.filtering.pipeline import (
    apply_narrowing_filters,
    apply_view_filters,
    filter_by_date_range,
)
from vaxdq.filtering.state import FilterState
from vaxdq.quality.classifier import get_severity, risk_class_from_record
from vaxdq.quality.readiness import compute_readiness
from vaxdq.records.loader import index_by_doc_id
from vaxdq.records.model import ImmunizationRecord
from vaxdq.reporting.summary import QualitySummary, severity_counts, summarize_missing
from vaxdq.review.tracker import ReviewTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowView:
    """Everything the renderer needs to draw one table row."""

    record: ImmunizationRecord
    severity: str
    risk_class: str
    readiness_score: int
    reviewed: bool
    reviewed_at: str | None

    @property
    def css_classes(self) -> list[str]:
        classes: list[str] = []
        if self.severity != "clean":
            classes.append(self.severity)
        if self.risk_class and self.risk_class not in classes:
            classes.append(self.risk_class)
        if self.reviewed:
            classes.append("resolved")
        return classes

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "severity": self.severity,
            "risk_class": self.risk_class,
            "readiness_score": self.readiness_score,
            "reviewed": self.reviewed,
            "reviewed_timestamp": self.reviewed_at,
            "css_classes": self.css_classes,
        }


def build_row_view(record: ImmunizationRecord, tracker: ReviewTracker) -> RowView:
    return RowView(
        record=record,
        severity=get_severity(record),
        risk_class=risk_class_from_record(record),
        readiness_score=compute_readiness(record),
        reviewed=tracker.is_reviewed(record.doc_id),
        reviewed_at=tracker.get_reviewed_timestamp(record.doc_id),
    )


@dataclass(frozen=True)
class ToggleOutcome:
    """Row state after a reviewed toggle, for both call sites to sync."""

    row: RowView
    visible: bool
    display_count: int


class DashboardSession:
    """Mutable shell: filter state, stage caches and debounced refresh."""

    def __init__(
        self,
        records: Sequence[ImmunizationRecord],
        tracker: ReviewTracker,
        *,
        debounce_s: float | None = None,
        today: date | None = None,
    ) -> None:
        self._records = list(records)
        self._by_id = index_by_doc_id(self._records)
        self.tracker = tracker
        self._today = today
        self._state = FilterState()
        self._quick_range = QUICK_RANGE_CUSTOM
        self._date_filtered: list[ImmunizationRecord] | None = None
        self._narrowed: list[ImmunizationRecord] | None = None
        self._display: list[ImmunizationRecord] = []
        if debounce_s is None:
            debounce_s = get_settings().recompute_debounce_ms / 1000
        self._debouncer = Debouncer(self.refresh, delay_s=debounce_s)

    # -- state --------------------------------------------------------------

    @property
    def records(self) -> list[ImmunizationRecord]:
        return list(self._records)

    @property
    def filter_state(self) -> FilterState:
        return self._state

    @property
    def quick_range_name(self) -> str:
        return self._quick_range

    def update_filters(self, **changes) -> FilterState:
        """Replace filter values and invalidate the affected stage caches.

        Does not recompute; call :meth:`refresh` or :meth:`request_refresh`.
        """
        new_state = self._state.replace(**changes)
        if new_state.date_range_differs(self._state):
            self._date_filtered = None
            self._narrowed = None
            self._quick_range = (
                detect_quick_range(new_state.date_from, new_state.date_to, self._today)
                if new_state.has_date_range
                else QUICK_RANGE_CUSTOM
            )
        elif (new_state.missing, new_state.active_severity) != (
            self._state.missing,
            self._state.active_severity,
        ):
            self._narrowed = None
        self._state = new_state
        return new_state

    def set_date_range(self, date_from: str | None, date_to: str | None) -> FilterState:
        return self.update_filters(date_from=date_from, date_to=date_to)

    def apply_quick_range(self, name: str) -> FilterState:
        date_from, date_to = quick_range(name, self._today)
        state = self.set_date_range(date_from, date_to)
        self._quick_range = name
        return state

    def set_missing_filter(self, selector: str) -> FilterState:
        return self.update_filters(missing=selector)

    def pin_severity(self, severity: str | None) -> FilterState:
        """Pin *severity*; pinning the already-pinned tier clears it."""
        if severity is not None and severity == self._state.active_severity:
            severity = None
        return self.update_filters(active_severity=severity)

    def set_hide_reviewed(self, hide: bool) -> FilterState:
        return self.update_filters(hide_reviewed=hide)

    def reset(self) -> list[ImmunizationRecord]:
        """Restore the default view: last 7 days, no other filters."""
        self._state = FilterState()
        self._date_filtered = None
        self._narrowed = None
        self.apply_quick_range(DEFAULT_QUICK_RANGE)
        return self.refresh()

    # -- recompute ----------------------------------------------------------

    def refresh(self) -> list[ImmunizationRecord]:
        """Recompute the display collection from the current filter snapshot."""
        state = self._state
        if self._date_filtered is None:
            self._date_filtered = filter_by_date_range(self._records, state.date_from, state.date_to)
        if self._narrowed is None:
            self._narrowed = apply_narrowing_filters(self._date_filtered, state)
        self._display = apply_view_filters(self._narrowed, state, self.tracker.is_reviewed)
        logger.debug(
            "Recomputed display: %d date-filtered, %d displayed",
            len(self._date_filtered),
            len(self._display),
        )
        return list(self._display)

    def request_refresh(self):
        """Debounced :meth:`refresh`; must be called from a running event loop."""
        return self._debouncer.schedule()

    async def wait_for_refresh(self) -> None:
        await self._debouncer.wait()

    def cancel_refresh(self) -> None:
        self._debouncer.cancel()

    # -- views --------------------------------------------------------------

    @property
    def date_filtered(self) -> list[ImmunizationRecord]:
        if self._date_filtered is None:
            self.refresh()
        return list(self._date_filtered or [])

    @property
    def display(self) -> list[ImmunizationRecord]:
        return list(self._display)

    def rows(self) -> list[RowView]:
        return [build_row_view(record, self.tracker) for record in self._display]

    def severity_counts(self) -> dict[str, int]:
        return severity_counts(self._display)

    def summary(self) -> QualitySummary:
        return summarize_missing(self._display, self._state.date_from, self._state.date_to)

    def get_record(self, doc_id: str) -> ImmunizationRecord:
        try:
            return self._by_id[doc_id]
        except KeyError:
            raise KeyError(f"Record {doc_id} not found") from None

    # -- writes -------------------------------------------------------------

    def toggle_reviewed(self, doc_id: str, reviewed: bool | None = None) -> ToggleOutcome:
        """Set (or flip) the reviewed disposition and re-sync the view.

        Both the table checkbox and the guidance-panel button call this.
        """
        record = self.get_record(doc_id)
        target = (not self.tracker.is_reviewed(doc_id)) if reviewed is None else reviewed
        self.tracker.set_reviewed(doc_id, target)
        if self._narrowed is None:
            self.refresh()
        else:
            self._display = apply_view_filters(self._narrowed, self._state, self.tracker.is_reviewed)
        row = build_row_view(record, self.tracker)
        return ToggleOutcome(
            row=row,
            visible=any(r.doc_id == doc_id for r in self._display),
            display_count=len(self._display),
        )

    def export_csv(self, output_dir: Path, file_name: str | None = None) -> ExportResult:
        """Export the date-filtered collection; raises ``EmptyExportError`` if empty."""
        exporter = CSVExporter(self.tracker)
        if file_name is None:
            return exporter.run(self.date_filtered, output_dir)
        return exporter.run(self.date_filtered, output_dir, file_name=file_name)
