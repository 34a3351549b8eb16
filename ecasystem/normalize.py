from datetime import date
from typing import Any, Dict, Optional

MILESTONE_AGES = (80, 85, 90, 95, 100)

DATE_FIELDS = ("birth_date", "validation_date", "payment_date")
NAME_FIELDS = ("last_name", "first_name", "middle_name", "extension_name")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().split())


def normalize_name(name: Optional[str]) -> Optional[str]:
    """Collapse whitespace and upper-case; empty names become None."""
    if name is None:
        return None
    cleaned = normalize_text(name).upper()
    return cleaned or None


def parse_date(value: Any) -> Optional[date]:
    """Accept a date or an ISO YYYY-MM-DD string. Raises ValueError otherwise."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError(f"Not a date: {value!r}")


def age_in_year(birth_date: date, calendar_year: int) -> int:
    return calendar_year - birth_date.year


def milestone_age(birth_date: date, calendar_year: int) -> Optional[int]:
    """The milestone age reached in `calendar_year`, if any."""
    age = age_in_year(birth_date, calendar_year)
    return age if age in MILESTONE_AGES else None


def next_milestone(birth_date: date, calendar_year: int) -> Optional[tuple]:
    """(age, year) of the first milestone reached in or after `calendar_year`."""
    for age in MILESTONE_AGES:
        year = birth_date.year + age
        if year >= calendar_year:
            return age, year
    return None


def to_citizen_values(form: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a validated registration form into citizen column values.

    Names are upper-cased, dates parsed, and missing OSCA id / RRN
    default to "N/A".
    """
    values: Dict[str, Any] = {}
    for key, value in form.items():
        if isinstance(value, str):
            value = value.strip() or None
        if key in NAME_FIELDS:
            value = normalize_name(value)
        elif key in DATE_FIELDS:
            value = parse_date(value)
        values[key] = value
    values["osca_id"] = values.get("osca_id") or "N/A"
    values["rrn"] = values.get("rrn") or "N/A"
    return values
