"""
Entity Resolution Orchestrator.

Responsibilities:
- Coordinate candidate selection.
- Invoke field comparison and scoring.
- Apply the emission minimum and the confidence threshold.
- Return matches ranked by confidence.

Non-Responsibilities:
- No database access.
- No logging or other I/O.
- No mutation of input records.

Invariant:
This module must be deterministic given the same inputs. Every call
recomputes from scratch; no state survives between calls.
"""

import math
from numbers import Real
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .candidate_selector import all_pairs, cross_pairs
from .errors import InvalidArgument
from .features import birth_parts, matched_fields
from .models import DuplicateHit, FieldSelection, MatchResult, PersonRecord
from .scoring import DEFAULT_MIN_CONFIDENCE, confidence_score, is_candidate

# Entry-time check compares names only and prompts on two matched fields.
ENTRY_CHECK_FIELDS = ("last_name", "first_name", "middle_name")
ENTRY_CHECK_MIN_MATCHED = 2

SelectionLike = Union[FieldSelection, Mapping[str, bool], None]


def _coerce_selection(selection: SelectionLike) -> FieldSelection:
    if isinstance(selection, FieldSelection):
        return selection
    return FieldSelection.from_mapping(selection)


def _check_threshold(min_confidence) -> float:
    if isinstance(min_confidence, bool) or not isinstance(min_confidence, Real):
        raise InvalidArgument(f"min_confidence must be a number, got {min_confidence!r}")
    value = float(min_confidence)
    if math.isnan(value) or not 0.0 <= value <= 100.0:
        raise InvalidArgument(f"min_confidence must be within [0, 100], got {min_confidence!r}")
    return value


def _check_dates(records: Iterable[PersonRecord], fields) -> None:
    if not {"birth_date", "birth_month", "birth_day", "birth_year"}.intersection(fields):
        return
    for record in records:
        birth_parts(record)


def _rank(pairs, fields, threshold: float) -> List[MatchResult]:
    results = []
    for _, _, a, b in pairs:
        matched = matched_fields(a, b, fields)
        if not is_candidate(len(matched)):
            continue
        score = confidence_score(len(matched))
        if score >= threshold:
            results.append(MatchResult(a, b, matched, score))
    # sorted() is stable with reverse=True, so ties keep enumeration order.
    return sorted(results, key=lambda m: m.confidence_score, reverse=True)


def find_matches(
    records: Sequence[PersonRecord],
    field_selection: SelectionLike = None,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> List[MatchResult]:
    """
    Find candidate duplicate pairs within a collection of person-records.

    Every unordered pair (i < j) is compared on the enabled fields. Pairs
    with at least two matched fields are scored as matched / 8 * 100,
    kept when the score reaches `min_confidence`, and returned highest
    score first. Input records are never deduplicated or modified.

    Args:
        records: Person-records to compare
        field_selection: FieldSelection or field -> bool mapping (default: all)
        min_confidence: Threshold in [0, 100]

    Returns:
        MatchResult list sorted by descending confidence

    Raises:
        InvalidArgument: Threshold out of range or bad field selection
        MalformedRecord: A record's birth date cannot be decomposed
    """
    threshold = _check_threshold(min_confidence)
    fields = _coerce_selection(field_selection).enabled()
    records = list(records)
    _check_dates(records, fields)
    return _rank(all_pairs(records), fields, threshold)


def find_cross_matches(
    new_records: Sequence[PersonRecord],
    existing_records: Sequence[PersonRecord],
    field_selection: SelectionLike = None,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> List[MatchResult]:
    """
    Compare each new record against each existing record.

    Same scoring and ordering as find_matches, but records within one
    group are never compared with each other. `record_a` is always the
    new record.
    """
    threshold = _check_threshold(min_confidence)
    fields = _coerce_selection(field_selection).enabled()
    new_records = list(new_records)
    existing_records = list(existing_records)
    _check_dates(new_records + existing_records, fields)
    return _rank(cross_pairs(new_records, existing_records), fields, threshold)


def find_entry_duplicates(
    entry: PersonRecord,
    existing_records: Iterable[PersonRecord],
    min_matched: int = ENTRY_CHECK_MIN_MATCHED,
) -> List[DuplicateHit]:
    """
    Existing records that share at least `min_matched` name fields with `entry`.

    Uses the same comparison primitive as find_matches restricted to
    last, first and middle name, with a count trigger instead of a
    confidence threshold. Hits are returned in input order.
    """
    fields = FieldSelection.only(*ENTRY_CHECK_FIELDS).enabled()
    hits = []
    for existing in existing_records:
        matched = matched_fields(entry, existing, fields)
        if len(matched) >= min_matched:
            hits.append(DuplicateHit(existing, matched))
    return hits
