from datetime import date
from typing import Any, Dict, List, Tuple

from .database import STATUSES

REQUIRED_STR_FIELDS = ["last_name", "first_name", "birth_date", "sex"]
OPTIONAL_STR_FIELDS = [
    "middle_name",
    "extension_name",
    "province_code",
    "lgu_code",
    "barangay_code",
    "osca_id",
    "rrn",
    "validator",
    "validation_date",
    "specimen",
    "disability",
    "indigenous_people",
    "status",
    "remarks",
]
ADDRESS_FIELDS = ["province_code", "lgu_code", "barangay_code"]

EXTENSION_NAMES = ["Jr.", "Sr.", "I", "II", "III", "IV", "V"]
SEXES = ["Male", "Female"]
SPECIMENS = ["signature", "thumbmark"]
YES_NO = ["yes", "no"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_iso_date(v: str) -> bool:
    try:
        date.fromisoformat(v.strip())
        return True
    except ValueError:
        return False


def validate_citizen(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in ("birth_date", "validation_date"):
        if _is_non_empty_str(data.get(f)) and not _valid_iso_date(data[f]):
            errors.append(f"Field '{f}' must be a date in YYYY-MM-DD format")

    if _is_non_empty_str(data.get("birth_date")) and _valid_iso_date(data["birth_date"]):
        if date.fromisoformat(data["birth_date"].strip()) > date.today():
            errors.append("Field 'birth_date' cannot be in the future")

    if _is_non_empty_str(data.get("sex")) and data["sex"] not in SEXES:
        errors.append(f"Field 'sex' must be one of: {', '.join(SEXES)}")

    ext = data.get("extension_name")
    if _is_non_empty_str(ext) and ext not in EXTENSION_NAMES:
        errors.append(f"Field 'extension_name' must be one of: {', '.join(EXTENSION_NAMES)}")

    if _is_non_empty_str(data.get("specimen")) and data["specimen"] not in SPECIMENS:
        errors.append(f"Field 'specimen' must be one of: {', '.join(SPECIMENS)}")

    for f in ("disability", "indigenous_people"):
        if _is_non_empty_str(data.get(f)) and data[f] not in YES_NO:
            errors.append(f"Field '{f}' must be 'yes' or 'no'")

    return errors


def validate_citizen_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """
    Strict validation: also requires a known status and a complete address.

    Returns:
        (is_valid, errors)
    """
    errors = validate_citizen(data)

    status = data.get("status")
    if status is not None and status not in STATUSES:
        errors.append(f"Unknown status: {status}")

    for f in ADDRESS_FIELDS:
        if not _is_non_empty_str(data.get(f)):
            errors.append(f"Missing address field: {f}")

    return len(errors) == 0, errors
