"""
Tests for double-entry verification.
"""

from ecasystem.verification import FORM_FIELDS, compare_entries, humanize_field


class TestCompareEntries:
    """Test field-by-field entry comparison."""

    def test_identical_entries(self, citizen_form):
        assert compare_entries(citizen_form, dict(citizen_form)) == []

    def test_reports_mismatches_in_form_order(self, citizen_form):
        second = dict(citizen_form, sex="Female", last_name="Dela Cruzz")
        assert compare_entries(citizen_form, second) == ["last_name", "sex"]

    def test_blank_values_equivalent(self, citizen_form):
        second = dict(citizen_form)
        second["extension_name"] = None
        second.pop("rrn", None)
        assert compare_entries(citizen_form, second) == []

    def test_surrounding_whitespace_ignored(self, citizen_form):
        second = dict(citizen_form, first_name=" Juan ")
        assert compare_entries(citizen_form, second) == []

    def test_case_sensitive(self, citizen_form):
        second = dict(citizen_form, first_name="JUAN")
        assert compare_entries(citizen_form, second) == ["first_name"]

    def test_fields_outside_form_ignored(self, citizen_form):
        second = dict(citizen_form, remarks="late registration")
        assert compare_entries(citizen_form, second) == []

    def test_form_covers_identity_fields(self):
        for field in ("last_name", "first_name", "middle_name", "extension_name", "birth_date"):
            assert field in FORM_FIELDS


class TestHumanizeField:

    def test_labels(self):
        assert humanize_field("last_name") == "Last Name"
        assert humanize_field("indigenous_people") == "Indigenous People"
        assert humanize_field("sex") == "Sex"
