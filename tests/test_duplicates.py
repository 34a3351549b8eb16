"""
Tests for duplicate scans over the database.
"""

import pytest
from datetime import date

from ecasystem.duplicates import load_person_records, scan_duplicates
from pipelines.entity_resolution import FieldSelection, InvalidArgument
from storage.repositories.citizens import CitizenRepository


@pytest.fixture
def seeded(db_session, citizen_values):
    repo = CitizenRepository(db_session)
    repo.create(citizen_values(last_name="SANTOS", first_name="PEDRO", middle_name=None,
                               extension_name="Jr.", birth_date=date(1931, 1, 1)))
    first = repo.create(citizen_values(status="Validated"))
    second = repo.create(citizen_values())
    db_session.commit()
    return first, second


class TestScanDuplicates:
    """Test scanning the stored population."""

    def test_loads_records_ordered(self, db_session, seeded):
        records = load_person_records(db_session)
        assert [r.last_name for r in records] == ["DELA CRUZ", "DELA CRUZ", "SANTOS"]
        assert all(r.record_id is not None for r in records)

    def test_finds_exact_duplicate(self, db_session, seeded):
        first, second = seeded
        matches = scan_duplicates(db_session)
        assert len(matches) == 1
        assert matches[0].confidence_score == pytest.approx(100.0)
        assert {matches[0].record_a.record_id, matches[0].record_b.record_id} == {first.id, second.id}

    def test_field_selection_lowers_score(self, db_session, seeded):
        matches = scan_duplicates(db_session, FieldSelection().without("birth_year"), min_confidence=0)
        assert matches[0].confidence_score == pytest.approx(87.5)

    def test_encoded_mode_compares_new_against_existing(self, db_session, seeded):
        first, second = seeded
        matches = scan_duplicates(db_session, mode="encoded")
        assert len(matches) == 1
        assert matches[0].record_a.record_id == second.id
        assert matches[0].record_b.record_id == first.id

    def test_records_metrics(self, db_session, seeded, quiet_logger):
        scan_duplicates(db_session)
        metrics = quiet_logger.get_metrics()
        assert metrics["scans"] == 1
        assert metrics["records_loaded"] == 3
        assert metrics["comparisons"] == 3
        assert metrics["matches_found"] == 1

    def test_invalid_threshold_logged_and_raised(self, db_session, seeded, quiet_logger):
        with pytest.raises(InvalidArgument):
            scan_duplicates(db_session, min_confidence=150)
        assert quiet_logger.get_metrics()["errors_by_type"] == {"InvalidArgument": 1}

    def test_unknown_mode(self, db_session):
        with pytest.raises(InvalidArgument):
            scan_duplicates(db_session, mode="fuzzy")

    def test_empty_database(self, db_session):
        assert scan_duplicates(db_session) == []
