"""
Pytest configuration and shared fixtures.
"""

import pytest
from datetime import date
from pathlib import Path
from typing import Dict, Any

from ecasystem.database import init_database, get_session
from ecasystem.logger import get_logger, reset_logger
from pipelines.entity_resolution import PersonRecord


@pytest.fixture(autouse=True)
def quiet_logger():
    """Global logger with no handlers so tests neither print nor write log files."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture
def make_record():
    """Factory for PersonRecord with sensible defaults."""
    counter = [0]

    def _make(
        last_name="DELA CRUZ",
        first_name="JUAN",
        middle_name="SANTOS",
        extension_name="",
        birth_date=date(1940, 5, 12),
        record_id=None,
    ):
        counter[0] += 1
        return PersonRecord(
            last_name=last_name,
            first_name=first_name,
            middle_name=middle_name,
            extension_name=extension_name,
            birth_date=birth_date,
            record_id=record_id if record_id is not None else counter[0],
        )

    return _make


@pytest.fixture
def citizen_form() -> Dict[str, Any]:
    """Valid registration form entry."""
    return {
        "last_name": "Dela Cruz",
        "first_name": "Juan",
        "middle_name": "Santos",
        "extension_name": "",
        "birth_date": "1940-05-12",
        "sex": "Male",
        "province_code": "0402100000",
        "lgu_code": "0402101000",
        "barangay_code": "0402101001",
        "osca_id": "OSCA-1001",
        "specimen": "signature",
        "disability": "no",
        "indigenous_people": "no",
    }


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Initialized SQLite database in a temp directory."""
    path = tmp_path / "eca.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on the temp database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def citizen_values():
    """Factory for citizen column values."""

    def _values(**overrides):
        values = {
            "last_name": "DELA CRUZ",
            "first_name": "JUAN",
            "middle_name": "SANTOS",
            "extension_name": None,
            "birth_date": date(1940, 5, 12),
            "sex": "Male",
            "province_code": "0402100000",
            "lgu_code": "0402101000",
            "barangay_code": "0402101001",
        }
        values.update(overrides)
        return values

    return _values
