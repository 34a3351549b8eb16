"""
Citizen registration with double-entry verification and duplicate check.

Flow: validate the first entry, require the second entry to match it
field by field, then check the stored population for likely duplicates
before saving. A flagged duplicate is returned to the operator, who
re-submits with a decision: create a new record anyway or update the
existing one.
"""

from typing import Any, Dict, Optional

from pipelines.entity_resolution import PersonRecord, find_entry_duplicates
from storage.repositories.citizens import CitizenRepository
from .logger import get_logger
from .normalize import to_citizen_values
from .resolution import CREATE_NEW, UPDATE_EXISTING, apply_resolution
from .schema import validate_citizen
from .verification import FORM_FIELDS, compare_entries, humanize_field

ENTRY_DECISIONS = (CREATE_NEW, UPDATE_EXISTING)


def check_entry_duplicates(session, values: Dict[str, Any]):
    """Stored citizens sharing at least two name fields with `values`."""
    entry = PersonRecord(
        last_name=values["last_name"],
        first_name=values["first_name"],
        middle_name=values.get("middle_name"),
        extension_name=values.get("extension_name"),
        birth_date=values["birth_date"],
    )
    candidates = CitizenRepository(session).find_by_names(
        values["last_name"], values["first_name"], values.get("middle_name")
    )
    return find_entry_duplicates(entry, [PersonRecord.from_citizen(c) for c in candidates])


def register_citizen(
    session,
    first: Dict[str, Any],
    second: Dict[str, Any],
    encoded_by: Optional[str] = None,
    decision: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Register a citizen from two independent entries of the same form.

    Args:
        session: SQLAlchemy session
        first: First entry (form field -> value)
        second: Second entry, must agree with the first
        encoded_by: Encoder name stored on new records and in the audit log
        decision: Operator's answer to a flagged duplicate (create_new or update_existing)

    Returns:
        Outcome dict; status is validation_error, mismatch, duplicate, created or updated
    """
    logger = get_logger()

    if decision is not None and decision not in ENTRY_DECISIONS:
        raise ValueError(f"Unknown decision {decision!r}; expected one of {', '.join(ENTRY_DECISIONS)}")

    errors = validate_citizen(first)
    if errors:
        logger.warning("Registration rejected by validation", errors=errors)
        return {"status": "validation_error", "record_id": None, "errors": errors}

    mismatches = compare_entries(first, second)
    if mismatches:
        logger.info("Double entry mismatch", fields=mismatches)
        return {
            "status": "mismatch",
            "record_id": None,
            "mismatches": mismatches,
            "labels": [humanize_field(f) for f in mismatches],
        }

    values = to_citizen_values({f: first[f] for f in FORM_FIELDS if f in first})

    hits = check_entry_duplicates(session, values)
    logger.record_duplicate_check(flagged=bool(hits))

    if hits and decision is None:
        hit = hits[0]
        logger.info(
            "Possible duplicate on entry",
            existing_id=hit.record.record_id,
            matched_fields=list(hit.matched_fields),
        )
        return {
            "status": "duplicate",
            "record_id": hit.record.record_id,
            "matched_fields": list(hit.matched_fields),
        }

    if hits and decision == UPDATE_EXISTING:
        return apply_resolution(
            session,
            UPDATE_EXISTING,
            target_id=hits[0].record.record_id,
            values=values,
            staff_id=encoded_by,
        )

    values["encoded_by"] = encoded_by
    return apply_resolution(session, CREATE_NEW, values=values, staff_id=encoded_by)
