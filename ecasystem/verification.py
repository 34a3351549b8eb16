"""
Double-entry verification for citizen registration.

An encoder fills the registration form twice; the record is only saved
when both entries agree on every form field.
"""

from typing import Any, Dict, List

FORM_FIELDS = [
    "last_name",
    "first_name",
    "middle_name",
    "extension_name",
    "birth_date",
    "sex",
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
]


def _entry_value(entry: Dict[str, Any], field: str) -> str:
    value = entry.get(field)
    if value is None:
        return ""
    return str(value).strip()


def compare_entries(first: Dict[str, Any], second: Dict[str, Any]) -> List[str]:
    """
    Form fields on which the two entries disagree, in form order.

    A missing key, None and an empty string are the same blank value.
    """
    return [
        field for field in FORM_FIELDS
        if _entry_value(first, field) != _entry_value(second, field)
    ]


def humanize_field(field: str) -> str:
    """'last_name' -> 'Last Name'."""
    return " ".join(part.capitalize() for part in field.split("_"))
