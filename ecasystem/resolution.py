"""
Resolution of flagged duplicates.

Given an operator's choice on a flagged pair, either leave both records
untouched, overwrite an existing record with new values, or persist a
brand-new record. Every write is recorded in the audit log.
"""

from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from storage.repositories.audit import AuditRepository
from storage.repositories.citizens import CitizenRepository
from .logger import get_logger

KEEP_BOTH = "keep_both"
UPDATE_EXISTING = "update_existing"
CREATE_NEW = "create_new"
DECISIONS = (KEEP_BOTH, UPDATE_EXISTING, CREATE_NEW)

# Fields copied when one stored record overwrites another.
IDENTITY_FIELDS = ("last_name", "first_name", "middle_name", "extension_name", "birth_date")


def _jsonable(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in values.items()}


def apply_resolution(
    session,
    decision: str,
    target_id: Optional[int] = None,
    values: Optional[Dict[str, Any]] = None,
    source_id: Optional[int] = None,
    staff_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Apply an operator's decision on a flagged duplicate.

    Args:
        session: SQLAlchemy session; committed on success, rolled back on failure
        decision: keep_both, update_existing or create_new
        target_id: Existing record to update (update_existing)
        values: Column values to write (update_existing, create_new)
        source_id: Stored record whose identity fields overwrite the target,
            used by update_existing when `values` is not given
        staff_id: Operator recorded in the audit log

    Returns:
        Outcome dict with status (kept, updated, created) and record_id

    Raises:
        ValueError: Unknown decision, missing arguments, or unknown record ids
    """
    logger = get_logger()
    if decision not in DECISIONS:
        raise ValueError(f"Unknown decision {decision!r}; expected one of {', '.join(DECISIONS)}")

    if decision == KEEP_BOTH:
        logger.record_resolution(decision)
        logger.info("Duplicate kept as separate records", target_id=target_id, source_id=source_id)
        return {"status": "kept", "record_id": target_id}

    citizens = CitizenRepository(session)
    audit = AuditRepository(session)

    try:
        if decision == UPDATE_EXISTING:
            if target_id is None:
                raise ValueError("update_existing needs a target record id")
            target = citizens.get(target_id)
            if target is None:
                raise ValueError(f"Citizen {target_id} not found")
            if values is None:
                if source_id is None:
                    raise ValueError("update_existing needs either values or a source record id")
                source = citizens.get(source_id)
                if source is None:
                    raise ValueError(f"Citizen {source_id} not found")
                values = {name: getattr(source, name) for name in IDENTITY_FIELDS}

            old = target.to_dict()
            citizens.update(target, values)
            audit.log(
                "update",
                "citizens",
                target.id,
                details={"old": old, "new": _jsonable(values), "type": "Senior Citizen Update Record"},
                staff_id=staff_id,
            )
            session.commit()
            outcome = {"status": "updated", "record_id": target.id}
        else:
            if not values:
                raise ValueError("create_new needs column values")
            citizen = citizens.create(values)
            audit.log(
                "create",
                "citizens",
                citizen.id,
                details={"new": _jsonable(values), "type": "Senior Citizen Create Record"},
                staff_id=staff_id,
            )
            session.commit()
            outcome = {"status": "created", "record_id": citizen.id}
    except SQLAlchemyError as e:
        session.rollback()
        logger.record_error(type(e).__name__)
        logger.error("Resolution failed", decision=decision, target_id=target_id, error=str(e))
        raise

    logger.record_resolution(decision)
    logger.info("Duplicate resolved", decision=decision, record_id=outcome["record_id"])
    return outcome
