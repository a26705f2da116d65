"""Tests for vaxdq/dashboard/session.py."""
from __future__ import annotations

import asyncio
from datetime import date

import pytest

from vaxdq.core.settings import get_settings
from vaxdq.dashboard.session import DashboardSession
from vaxdq.export.csv_exporter import EmptyExportError
from vaxdq.review.store import InMemoryReviewStore
from vaxdq.review.tracker import ReviewTracker

TODAY = date(2024, 5, 7)


@pytest.fixture
def session(make_record):
    records = [
        make_record(doc_id="A", administered_date="2024-05-01"),
        make_record(doc_id="B", administered_date="2024-05-02", email=""),
        make_record(doc_id="C", administered_date="2024-05-03", mobile=""),
        make_record(doc_id="D", administered_date="2024-05-06", race=""),
        make_record(doc_id="E", administered_date="2024-04-01"),
    ]
    tracker = ReviewTracker(InMemoryReviewStore())
    return DashboardSession(records, tracker, debounce_s=0.005, today=TODAY)


def _ids(rows):
    return [r.doc_id for r in rows]


class TestDebounceWindow:
    def test_window_read_from_settings(self, make_record, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RECOMPUTE_DEBOUNCE_MS", "50")
        get_settings.cache_clear()
        try:
            session = DashboardSession([make_record()], ReviewTracker(InMemoryReviewStore()))
        finally:
            get_settings.cache_clear()
        assert session._debouncer.delay_s == pytest.approx(0.05)

    def test_explicit_window_wins(self, make_record):
        session = DashboardSession([make_record()], ReviewTracker(InMemoryReviewStore()), debounce_s=0.01)
        assert session._debouncer.delay_s == 0.01


class TestFiltering:
    def test_nothing_shown_before_range(self, session):
        assert session.refresh() == []

    def test_quick_range(self, session):
        session.apply_quick_range("last7")
        assert session.filter_state.date_from == "2024-05-01"
        assert session.quick_range_name == "last7"
        assert _ids(session.refresh()) == ["A", "B", "C", "D"]

    def test_manual_range_detects_quick_range(self, session):
        session.set_date_range("2024-05-07", "2024-05-07")
        assert session.quick_range_name == "today"
        session.set_date_range("2024-04-01", "2024-05-07")
        assert session.quick_range_name == "custom"

    def test_missing_filter_reuses_date_stage(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.refresh()
        cached = session.date_filtered
        session.set_missing_filter("contact")
        assert _ids(session.refresh()) == ["B", "C"]
        assert session.date_filtered == cached

    def test_pin_severity_toggles(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.pin_severity("low")
        assert _ids(session.refresh()) == ["B", "C"]
        session.pin_severity("low")
        assert session.filter_state.active_severity is None
        assert len(session.refresh()) == 4

    def test_reset(self, session):
        session.set_date_range("2024-04-01", "2024-04-01")
        session.set_missing_filter("vfc")
        session.set_hide_reviewed(True)
        rows = session.reset()
        assert session.filter_state.missing == "all"
        assert session.filter_state.hide_reviewed is False
        assert session.quick_range_name == "last7"
        assert _ids(rows) == ["A", "B", "C", "D"]

    def test_invalid_selector_leaves_state(self, session):
        with pytest.raises(ValueError):
            session.set_missing_filter("nope")
        assert session.filter_state.missing == "all"


class TestReviewToggle:
    def test_toggle_syncs_row_and_hides(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.set_hide_reviewed(True)
        session.refresh()

        outcome = session.toggle_reviewed("B")
        assert outcome.row.reviewed is True
        assert "resolved" in outcome.row.css_classes
        assert outcome.visible is False
        assert outcome.display_count == 3
        assert _ids(session.display) == ["A", "C", "D"]

        outcome = session.toggle_reviewed("B")
        assert outcome.row.reviewed is False
        assert outcome.row.reviewed_at is None
        assert outcome.visible is True
        assert outcome.display_count == 4

    def test_toggle_after_unrefreshed_filter_change(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.set_hide_reviewed(True)
        session.refresh()
        session.set_missing_filter("contact")

        outcome = session.toggle_reviewed("B")
        assert outcome.visible is False
        assert outcome.display_count == 1
        assert _ids(session.display) == ["C"]

    def test_explicit_value(self, session):
        assert session.toggle_reviewed("A", True).row.reviewed is True
        assert session.toggle_reviewed("A", True).row.reviewed is True

    def test_unknown_id(self, session):
        with pytest.raises(KeyError):
            session.toggle_reviewed("ZZZ")

    def test_rows_carry_both_tiers(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.refresh()
        row = {r.record.doc_id: r for r in session.rows()}["D"]
        assert row.severity == "medium"
        assert row.risk_class == "medium"
        assert row.readiness_score == 100
        assert row.css_classes == ["medium"]


class TestSummaryAndExport:
    def test_counts_follow_display(self, session):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.refresh()
        assert session.severity_counts() == {"high": 0, "medium": 1, "low": 2, "clean": 1}
        assert session.summary().total == 4

    def test_export_uses_date_filtered_collection(self, session, tmp_path):
        session.set_date_range("2024-05-01", "2024-05-07")
        session.set_missing_filter("contact")
        session.refresh()
        result = session.export_csv(tmp_path)
        assert result.row_count == 4

    def test_export_empty_refused(self, session, tmp_path):
        with pytest.raises(EmptyExportError):
            session.export_csv(tmp_path)


def test_debounced_refresh_coalesces(session):
    async def scenario():
        session.set_date_range("2024-05-01", "2024-05-07")
        session.request_refresh()
        session.set_missing_filter("contact")
        session.request_refresh()
        session.pin_severity("low")
        session.request_refresh()
        await session.wait_for_refresh()

    asyncio.run(scenario())
    assert _ids(session.display) == ["B", "C"]
