"""Tests for vaxdq/quality/advisory.py, guidance.py and eligibility.py."""
from __future__ import annotations

import pytest

from vaxdq.quality.advisory import NO_GAPS_MESSAGE, generate_advisories
from vaxdq.quality.eligibility import is_child, is_public_funding, is_vfc_eligible
from vaxdq.quality.guidance import FIELD_GUIDANCE, GUIDANCE_SEVERITIES, get_guidance


class TestFieldGuidance:
    def test_every_entry_has_valid_severity(self):
        for entry in FIELD_GUIDANCE.values():
            assert entry.severity in GUIDANCE_SEVERITIES
            assert entry.label and entry.impact and entry.fix

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            FIELD_GUIDANCE["ndc"] = None  # type: ignore[index]

    def test_unknown_field(self):
        assert get_guidance("vaccine_name") is None


class TestGenerateAdvisories:
    def test_complete_record_has_no_entries(self, make_record):
        assert generate_advisories(make_record()) == []
        assert NO_GAPS_MESSAGE.startswith("No documentation gaps")

    def test_priority_order(self, make_record):
        record = make_record(
            email="",
            mobile="",
            ethnicity="",
            race="",
            funding_source="",
            vfc_status="",
        )
        fields = [entry.field for entry in generate_advisories(record)]
        assert fields == ["vfc_status", "funding_source", "race", "ethnicity", "mobile", "email"]

    def test_severities(self, make_record):
        record = make_record(vfc_status="", race="", email="")
        severities = [(e.field, e.severity) for e in generate_advisories(record)]
        assert severities == [("vfc_status", "high"), ("race", "medium"), ("email", "low")]

    def test_entries_carry_guidance_text(self, make_record):
        (entry,) = generate_advisories(make_record(funding_source=""))
        guidance = FIELD_GUIDANCE["funding_source"]
        assert entry.label == guidance.label
        assert entry.impact == guidance.impact
        assert entry.fix == guidance.fix
        assert entry.impact_label == "High impact"

    def test_independent_of_tiers(self, make_record):
        # lot_number drives the structural tier but is not an advisory check.
        assert generate_advisories(make_record(lot_number="")) == []

    def test_to_dict(self, make_record):
        (entry,) = generate_advisories(make_record(mobile=None))
        assert entry.to_dict()["field"] == "mobile"
        assert entry.to_dict()["impact_label"] == "Low impact"


class TestEligibility:
    @pytest.mark.parametrize("age,expected", [(4, True), ("18", True), (19, False), (None, False), ("", False), ("n/a", False)])
    def test_is_child(self, age, expected):
        assert is_child(age) is expected

    @pytest.mark.parametrize(
        "code,expected",
        [("V02", True), ("V05", True), ("V01", False), ("V22", False), ("", False), (None, False)],
    )
    def test_is_vfc_eligible(self, code, expected):
        assert is_vfc_eligible(code) is expected

    @pytest.mark.parametrize("code,expected", [("VXC50", True), ("VXC52", True), ("PHC70", False), (None, False)])
    def test_is_public_funding(self, code, expected):
        assert is_public_funding(code) is expected
