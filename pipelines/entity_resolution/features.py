"""
Feature Extraction for Entity Resolution.

Responsibilities:
- Apply the per-field equality rules to a pair of person-records.
- Decompose birth dates into year, month and day.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No persistence.

Invariant:
Field comparison is symmetric: matched_fields(a, b) == matched_fields(b, a).
"""

from datetime import date
from typing import Iterable, Optional, Tuple

from .errors import MalformedRecord


def _fold(value: Optional[str]) -> str:
    return (value or "").casefold()


def strings_equal(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive exact equality."""
    return _fold(a) == _fold(b)


def optional_strings_equal(a: Optional[str], b: Optional[str]) -> bool:
    """
    Case-insensitive equality where a missing value equals a missing value.

    None and "" are both treated as absent, so two absent middle names
    match, while an absent value never matches a present one.
    """
    if not a and not b:
        return True
    if not a or not b:
        return False
    return a.casefold() == b.casefold()


def birth_parts(record) -> Tuple[int, int, int]:
    """
    Return (year, month, day) for a record's birth date.

    Raises:
        MalformedRecord: If the birth date is missing or not a date
    """
    value = getattr(record, "birth_date", None)
    if not isinstance(value, date):
        raise MalformedRecord(record, f"birth date {value!r} is not a calendar date")
    return value.year, value.month, value.day


def _field_matches(name: str, a, b, parts_a, parts_b) -> bool:
    if name == "last_name":
        return strings_equal(a.last_name, b.last_name)
    if name == "first_name":
        return strings_equal(a.first_name, b.first_name)
    if name == "middle_name":
        return optional_strings_equal(a.middle_name, b.middle_name)
    if name == "extension_name":
        return optional_strings_equal(a.extension_name, b.extension_name)
    if name == "birth_date":
        return parts_a == parts_b
    if name == "birth_year":
        return parts_a[0] == parts_b[0]
    if name == "birth_month":
        return parts_a[1] == parts_b[1]
    if name == "birth_day":
        return parts_a[2] == parts_b[2]
    raise KeyError(name)


_BIRTH_FIELDS = {"birth_date", "birth_month", "birth_day", "birth_year"}


def matched_fields(a, b, fields: Iterable[str]) -> Tuple[str, ...]:
    """
    Fields among `fields` on which records `a` and `b` agree.

    `fields` must already be in canonical order; the result keeps it.
    Birth sub-fields are judged independently of the exact birth date,
    so a transposed year still earns month and day credit.
    """
    fields = tuple(fields)
    parts_a = parts_b = None
    if _BIRTH_FIELDS.intersection(fields):
        parts_a = birth_parts(a)
        parts_b = birth_parts(b)
    return tuple(name for name in fields if _field_matches(name, a, b, parts_a, parts_b))
