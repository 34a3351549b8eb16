"""
Entity Resolution Models.

Responsibilities:
- Define the immutable person-record input.
- Define the closed field-selection configuration.
- Define match and entry-duplicate results.

Non-Responsibilities:
- No comparison logic.
- No persistence.

Invariant:
The engine never mutates a PersonRecord.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import date
from typing import Any, Mapping, Optional, Tuple

from .errors import InvalidArgument, MalformedRecord
from .scoring import confidence_label

# Canonical order; matched fields are always reported in this order.
FIELD_NAMES: Tuple[str, ...] = (
    "last_name",
    "first_name",
    "middle_name",
    "extension_name",
    "birth_date",
    "birth_month",
    "birth_day",
    "birth_year",
)

FIELD_ALIASES = {
    "lastName": "last_name",
    "firstName": "first_name",
    "middleName": "middle_name",
    "extensionName": "extension_name",
    "birthDate": "birth_date",
    "birthMonth": "birth_month",
    "birthDay": "birth_day",
    "birthYear": "birth_year",
}


def canonical_field(name: str) -> str:
    """Map a camelCase or snake_case field key to its canonical name."""
    canonical = FIELD_ALIASES.get(name, name)
    if canonical not in FIELD_NAMES:
        raise InvalidArgument(f"Unknown comparison field: {name!r}")
    return canonical


@dataclass(frozen=True)
class PersonRecord:
    """Identity tuple compared by the duplicate detector."""

    last_name: str
    first_name: str
    birth_date: date
    middle_name: Optional[str] = None
    extension_name: Optional[str] = None
    record_id: Optional[Any] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersonRecord":
        """
        Build a record from a mapping with snake_case or camelCase keys.

        Birth dates may be date objects or ISO strings (YYYY-MM-DD).

        Raises:
            MalformedRecord: If the birth date cannot be parsed
        """
        def pick(snake: str, camel: str):
            return data.get(snake, data.get(camel))

        raw_date = pick("birth_date", "birthDate")
        record_id = data.get("id", data.get("record_id"))
        if isinstance(raw_date, str):
            try:
                raw_date = date.fromisoformat(raw_date.strip())
            except ValueError:
                raise MalformedRecord(
                    {"id": record_id, "birth_date": raw_date},
                    f"unparseable birth date {raw_date!r}",
                )

        return cls(
            last_name=pick("last_name", "lastName") or "",
            first_name=pick("first_name", "firstName") or "",
            middle_name=pick("middle_name", "middleName"),
            extension_name=pick("extension_name", "extensionName"),
            birth_date=raw_date,
            record_id=record_id,
        )

    @classmethod
    def from_citizen(cls, citizen) -> "PersonRecord":
        """Build a record from a stored Citizen row."""
        return cls(
            last_name=citizen.last_name,
            first_name=citizen.first_name,
            middle_name=citizen.middle_name,
            extension_name=citizen.extension_name,
            birth_date=citizen.birth_date,
            record_id=citizen.id,
        )


@dataclass(frozen=True)
class FieldSelection:
    """Which fields take part in comparison. Every field is enabled by default."""

    last_name: bool = True
    first_name: bool = True
    middle_name: bool = True
    extension_name: bool = True
    birth_date: bool = True
    birth_month: bool = True
    birth_day: bool = True
    birth_year: bool = True

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "FieldSelection":
        """
        Build a selection from a field -> bool mapping.

        Omitted keys stay enabled. Unknown keys and non-boolean values
        are rejected.

        Raises:
            InvalidArgument: On an unknown key or a non-boolean flag
        """
        if mapping is None:
            return cls()
        flags = {}
        for key, value in mapping.items():
            name = canonical_field(key)
            if not isinstance(value, bool):
                raise InvalidArgument(f"Field selection for {key!r} must be a boolean, got {value!r}")
            flags[name] = value
        return cls(**flags)

    @classmethod
    def only(cls, *names: str) -> "FieldSelection":
        """Selection with just the named fields enabled."""
        wanted = {canonical_field(n) for n in names}
        return cls(**{name: name in wanted for name in FIELD_NAMES})

    def without(self, *names: str) -> "FieldSelection":
        """Copy of this selection with the named fields disabled."""
        return replace(self, **{canonical_field(n): False for n in names})

    def enabled(self) -> Tuple[str, ...]:
        """Enabled field names in canonical order."""
        return tuple(f.name for f in fields(self) if getattr(self, f.name))

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in FIELD_NAMES}


@dataclass(frozen=True)
class MatchResult:
    """A candidate duplicate pair with its matched fields and confidence."""

    record_a: PersonRecord
    record_b: PersonRecord
    matched_fields: Tuple[str, ...]
    confidence_score: float

    @property
    def matched_count(self) -> int:
        return len(self.matched_fields)

    @property
    def confidence_label(self) -> str:
        return confidence_label(self.confidence_score)


@dataclass(frozen=True)
class DuplicateHit:
    """An existing record that tripped the entry duplicate check."""

    record: PersonRecord
    matched_fields: Tuple[str, ...]
