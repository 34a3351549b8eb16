"""
Tests for per-field comparison rules.
"""

import pytest
from datetime import date

from pipelines.entity_resolution import FIELD_NAMES, MalformedRecord, PersonRecord
from pipelines.entity_resolution.features import (
    birth_parts,
    matched_fields,
    optional_strings_equal,
    strings_equal,
)


class TestOptionalStringsEqual:
    """Test the both-absent-counts-as-equal rule."""

    @pytest.mark.parametrize("a, b", [(None, None), ("", None), (None, ""), ("", "")])
    def test_both_absent_match(self, a, b):
        assert optional_strings_equal(a, b)

    def test_case_insensitive(self):
        assert optional_strings_equal("Santos", "SANTOS")

    @pytest.mark.parametrize("a, b", [("Jr.", None), (None, "Jr."), ("", "Sr.")])
    def test_one_absent_never_matches(self, a, b):
        assert not optional_strings_equal(a, b)

    def test_different_values(self):
        assert not optional_strings_equal("Jr.", "Sr.")


class TestStringsEqual:
    """Test required-name equality."""

    def test_case_insensitive_exact(self):
        assert strings_equal("dela cruz", "DELA CRUZ")

    def test_no_fuzzy_matching(self):
        assert not strings_equal("DELA CRUZ", "DELACRUZ")


class TestBirthParts:
    """Test birth date decomposition."""

    def test_decomposes_date(self, make_record):
        record = make_record(birth_date=date(1945, 2, 28))
        assert birth_parts(record) == (1945, 2, 28)

    def test_string_date_is_malformed(self, make_record):
        record = make_record(birth_date="1945-02-28")
        with pytest.raises(MalformedRecord) as exc:
            birth_parts(record)
        assert exc.value.record is record

    def test_missing_date_is_malformed(self, make_record):
        record = make_record(birth_date=None, record_id=77)
        with pytest.raises(MalformedRecord, match="77"):
            birth_parts(record)


class TestMatchedFields:
    """Test matched-field computation."""

    def test_exact_duplicate_matches_all_eight(self, make_record):
        a = make_record()
        b = make_record()
        assert matched_fields(a, b, FIELD_NAMES) == FIELD_NAMES

    def test_birth_subfields_independent_of_exact_date(self, make_record):
        a = make_record(birth_date=date(1940, 5, 12))
        b = make_record(birth_date=date(1942, 5, 12))
        result = matched_fields(a, b, ("birth_date", "birth_month", "birth_day", "birth_year"))
        assert result == ("birth_month", "birth_day")

    def test_transposed_day_and_month_keep_year(self, make_record):
        a = make_record(birth_date=date(1940, 5, 12))
        b = make_record(birth_date=date(1940, 12, 5))
        result = matched_fields(a, b, ("birth_date", "birth_month", "birth_day", "birth_year"))
        assert result == ("birth_year",)

    def test_only_requested_fields_compared(self, make_record):
        a = make_record()
        b = make_record()
        assert matched_fields(a, b, ("first_name", "birth_year")) == ("first_name", "birth_year")

    def test_name_only_fields_skip_date_check(self, make_record):
        a = make_record(birth_date=None)
        b = make_record(birth_date=None)
        assert matched_fields(a, b, ("last_name",)) == ("last_name",)

    def test_symmetric(self, make_record):
        a = make_record(middle_name=None, extension_name="Jr.", birth_date=date(1941, 5, 3))
        b = make_record(first_name="JUANITO", middle_name="", birth_date=date(1940, 5, 12))
        assert matched_fields(a, b, FIELD_NAMES) == matched_fields(b, a, FIELD_NAMES)

    def test_does_not_mutate_records(self, make_record):
        a = make_record(last_name="Dela Cruz")
        b = make_record()
        before = (a, b)
        matched_fields(a, b, FIELD_NAMES)
        assert (a, b) == before
        assert a.last_name == "Dela Cruz"
