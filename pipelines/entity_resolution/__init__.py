"""Duplicate detection over citizen person-records."""

from .errors import InvalidArgument, MalformedRecord
from .models import FIELD_NAMES, FieldSelection, MatchResult, PersonRecord, DuplicateHit
from .resolver import find_matches, find_cross_matches, find_entry_duplicates

__all__ = [
    "FIELD_NAMES",
    "FieldSelection",
    "MatchResult",
    "PersonRecord",
    "DuplicateHit",
    "InvalidArgument",
    "MalformedRecord",
    "find_matches",
    "find_cross_matches",
    "find_entry_duplicates",
]
