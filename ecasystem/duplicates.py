"""
Duplicate scan over the stored citizen population.

Loads person-records from the database, hands them to the matching
engine and records scan metrics. Each call is a full recomputation.
"""

from typing import List

from pipelines.entity_resolution import (
    InvalidArgument,
    MalformedRecord,
    MatchResult,
    PersonRecord,
    find_cross_matches,
    find_matches,
)
from pipelines.entity_resolution.scoring import DEFAULT_MIN_CONFIDENCE
from storage.repositories.citizens import CitizenRepository
from .logger import get_logger

SCAN_MODES = ("all", "encoded")


def load_person_records(session) -> List[PersonRecord]:
    """Every stored citizen as a PersonRecord, ordered by last name."""
    return [PersonRecord.from_citizen(c) for c in CitizenRepository(session).list_all()]


def scan_duplicates(
    session,
    field_selection=None,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    mode: str = "all",
) -> List[MatchResult]:
    """
    Find likely duplicate citizens in the database.

    Args:
        session: SQLAlchemy session
        field_selection: FieldSelection or field -> bool mapping
        min_confidence: Threshold in [0, 100]
        mode: "all" compares every pair; "encoded" compares newly encoded
            citizens against all other statuses only

    Returns:
        Matches sorted by descending confidence
    """
    logger = get_logger()
    if mode not in SCAN_MODES:
        raise InvalidArgument(f"Unknown scan mode {mode!r}; expected one of {', '.join(SCAN_MODES)}")

    repo = CitizenRepository(session)
    try:
        if mode == "all":
            records = load_person_records(session)
            matches = find_matches(records, field_selection, min_confidence)
            total = len(records)
            comparisons = total * (total - 1) // 2
        else:
            encoded = [PersonRecord.from_citizen(c) for c in repo.list_by_status("Encoded")]
            existing = [PersonRecord.from_citizen(c) for c in repo.list_excluding_status("Encoded")]
            matches = find_cross_matches(encoded, existing, field_selection, min_confidence)
            total = len(encoded) + len(existing)
            comparisons = len(encoded) * len(existing)
    except (InvalidArgument, MalformedRecord) as e:
        logger.record_error(type(e).__name__)
        logger.error("Duplicate scan failed", mode=mode, error=str(e))
        raise

    logger.record_scan(total, comparisons, len(matches))
    logger.info(
        "Duplicate scan complete",
        mode=mode,
        records=total,
        comparisons=comparisons,
        matches=len(matches),
        min_confidence=min_confidence,
    )
    return matches
