"""
Tests for PersonRecord and FieldSelection.
"""

import pytest
from datetime import date

from pipelines.entity_resolution import (
    FIELD_NAMES,
    FieldSelection,
    InvalidArgument,
    MalformedRecord,
    PersonRecord,
)


class TestFieldSelection:
    """Test the closed field-selection configuration."""

    def test_default_all_enabled(self):
        assert FieldSelection().enabled() == FIELD_NAMES

    def test_from_mapping_none(self):
        assert FieldSelection.from_mapping(None) == FieldSelection()

    def test_from_mapping_camel_case(self):
        selection = FieldSelection.from_mapping({"birthYear": False, "extensionName": False})
        assert "birth_year" not in selection.enabled()
        assert "extension_name" not in selection.enabled()
        assert len(selection.enabled()) == 6

    def test_from_mapping_snake_case(self):
        selection = FieldSelection.from_mapping({"middle_name": False})
        assert selection.middle_name is False

    def test_omitted_keys_stay_enabled(self):
        selection = FieldSelection.from_mapping({"lastName": True})
        assert selection.enabled() == FIELD_NAMES

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidArgument, match="nickname"):
            FieldSelection.from_mapping({"nickname": True})

    def test_non_boolean_rejected(self):
        with pytest.raises(InvalidArgument):
            FieldSelection.from_mapping({"lastName": "yes"})

    def test_only(self):
        selection = FieldSelection.only("lastName", "first_name")
        assert selection.enabled() == ("last_name", "first_name")

    def test_without_returns_copy(self):
        base = FieldSelection()
        reduced = base.without("birth_date")
        assert base.birth_date is True
        assert reduced.birth_date is False

    def test_enabled_keeps_canonical_order(self):
        selection = FieldSelection.only("birth_year", "last_name")
        assert selection.enabled() == ("last_name", "birth_year")


class TestPersonRecord:
    """Test record construction."""

    def test_from_dict_snake_case(self):
        record = PersonRecord.from_dict({
            "id": 5,
            "last_name": "DELA CRUZ",
            "first_name": "JUAN",
            "birth_date": "1940-05-12",
        })
        assert record.birth_date == date(1940, 5, 12)
        assert record.record_id == 5
        assert record.middle_name is None

    def test_from_dict_camel_case(self):
        record = PersonRecord.from_dict({
            "lastName": "REYES",
            "firstName": "ANA",
            "middleName": "LOPEZ",
            "extensionName": "",
            "birthDate": date(1939, 1, 2),
        })
        assert record.last_name == "REYES"
        assert record.middle_name == "LOPEZ"
        assert record.birth_date == date(1939, 1, 2)

    def test_from_dict_bad_date(self):
        with pytest.raises(MalformedRecord):
            PersonRecord.from_dict({"last_name": "A", "first_name": "B", "birth_date": "1940-13-40"})

    def test_immutable(self, make_record):
        record = make_record()
        with pytest.raises(AttributeError):
            record.last_name = "OTHER"

    def test_record_id_not_part_of_equality(self, make_record):
        assert make_record(record_id=1) == make_record(record_id=2)
