"""Tests for vaxdq/quality/classifier.py: structural and severity tiers."""
from __future__ import annotations

import pytest

from vaxdq.quality.classifier import (
    RISK_CLASSES,
    SEVERITY_TIERS,
    get_severity,
    risk_class_from_record,
)


class TestRiskClassFromRecord:
    def test_complete_record_has_no_risk(self, make_record):
        assert risk_class_from_record(make_record()) == ""

    @pytest.mark.parametrize(
        "field",
        ["vaccine_name", "quantity", "units", "ndc", "lot_number", "expiration_date"],
    )
    def test_required_field_missing_is_high(self, make_record, field):
        assert risk_class_from_record(make_record(**{field: ""})) == "high"

    def test_whitespace_only_counts_as_empty(self, make_record):
        assert risk_class_from_record(make_record(lot_number="   ")) == "high"

    def test_absent_counts_as_empty(self, make_record):
        assert risk_class_from_record(make_record(ndc=None)) == "high"

    def test_zero_quantity_is_not_empty(self, make_record):
        assert risk_class_from_record(make_record(quantity=0)) == ""

    @pytest.mark.parametrize("field", ["vfc_status", "funding_source", "race", "ethnicity"])
    def test_program_or_demographic_missing_is_medium(self, make_record, field):
        assert risk_class_from_record(make_record(**{field: ""})) == "medium"

    @pytest.mark.parametrize("field", ["mobile", "email"])
    def test_contact_missing_is_low(self, make_record, field):
        assert risk_class_from_record(make_record(**{field: ""})) == "low"

    def test_first_match_wins(self, make_record):
        record = make_record(lot_number="", race="", email="")
        assert risk_class_from_record(record) == "high"


class TestGetSeverity:
    def test_complete_record_is_clean(self, make_record):
        assert get_severity(make_record()) == "clean"

    def test_both_program_fields_missing_is_high(self, make_record):
        assert get_severity(make_record(vfc_status="", funding_source=None)) == "high"

    def test_single_program_field_missing_is_not_high(self, make_record):
        assert get_severity(make_record(vfc_status="")) == "clean"
        assert get_severity(make_record(funding_source="", email="")) == "low"

    @pytest.mark.parametrize("field", ["race", "ethnicity"])
    def test_demographic_missing_is_medium(self, make_record, field):
        assert get_severity(make_record(**{field: ""})) == "medium"

    @pytest.mark.parametrize("field", ["mobile", "email"])
    def test_contact_missing_is_low(self, make_record, field):
        assert get_severity(make_record(**{field: None})) == "low"

    def test_whitespace_is_not_falsy(self, make_record):
        assert get_severity(make_record(email="  ")) == "clean"

    def test_scenario_lot_and_email_missing(self, make_record):
        record = make_record(
            lot_number="",
            ndc="A1",
            vfc_status="V02",
            funding_source="VXC50",
            mobile="555-1234",
            email="",
        )
        assert get_severity(record) == "low"

    def test_scenario_demographics_unset_outrank_contact(self, make_record):
        record = make_record(race=None, ethnicity=None, email="")
        assert get_severity(record) == "medium"


class TestTiersAreIndependent:
    def test_tiers_disagree_on_missing_lot(self, make_record):
        record = make_record(lot_number="")
        assert risk_class_from_record(record) == "high"
        assert get_severity(record) == "clean"

    def test_tiers_disagree_on_single_program_field(self, make_record):
        record = make_record(funding_source="")
        assert risk_class_from_record(record) == "medium"
        assert get_severity(record) == "clean"

    def test_outputs_are_closed_enumerations(self, make_record):
        variants = [
            make_record(),
            make_record(ndc=""),
            make_record(race=""),
            make_record(mobile=""),
            make_record(vfc_status="", funding_source=""),
            make_record(vaccine_name=None, email=None, race=None),
        ]
        for record in variants:
            assert risk_class_from_record(record) in RISK_CLASSES
            assert get_severity(record) in SEVERITY_TIERS
            assert get_severity(record) == get_severity(record)
