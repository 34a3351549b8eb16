"""
Scoring Logic for Entity Resolution (v1).

Responsibilities:
- Turn a matched-field count into a deterministic confidence score.
- Band confidence scores into review labels.

Non-Responsibilities:
- No field comparison.
- No candidate selection.
- No threshold decisions.

Invariant:
Given identical inputs, this module must always return
the same score and label.
"""

# Fixed number of comparable field slots. The denominator does not shrink
# when fields are disabled, so disabling a field can only lower a score.
TOTAL_FIELD_SLOTS = 8

# Pairs with fewer matched fields are never emitted.
EMIT_MIN_MATCHED = 2

DEFAULT_MIN_CONFIDENCE = 50.0

CONFIDENCE_BANDS = (
    (90.0, "Very High"),
    (80.0, "High"),
    (70.0, "Medium"),
)


def confidence_score(matched_count: int) -> float:
    """Confidence (0-100) for a pair with `matched_count` matched fields."""
    return matched_count / TOTAL_FIELD_SLOTS * 100


def is_candidate(matched_count: int) -> bool:
    return matched_count >= EMIT_MIN_MATCHED


def confidence_label(score: float) -> str:
    for floor, label in CONFIDENCE_BANDS:
        if score >= floor:
            return label
    return "Low"
