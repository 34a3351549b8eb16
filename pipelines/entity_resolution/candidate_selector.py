"""
Candidate Selection Logic.

Responsibilities:
- Enumerate the record pairs that will be compared.
- Keep enumeration order deterministic so ties sort stably.

Non-Responsibilities:
- No scoring.
- No similarity computation.
- No resolution decisions.

Invariant:
Candidate selection must never exclude a valid match.
Every unordered pair is produced exactly once, and a record is never
paired with itself.
"""

from typing import Iterator, Sequence, Tuple, TypeVar

T = TypeVar("T")


def all_pairs(items: Sequence[T]) -> Iterator[Tuple[int, int, T, T]]:
    """
    Yield (i, j, items[i], items[j]) for every i < j.

    Produces n*(n-1)/2 pairs ordered by i, then j. No bucketing or
    indexing is applied; callers with very large populations should
    shard before calling.
    """
    n = len(items)
    for i in range(n):
        left = items[i]
        for j in range(i + 1, n):
            yield i, j, left, items[j]


def cross_pairs(left: Sequence[T], right: Sequence[T]) -> Iterator[Tuple[int, int, T, T]]:
    """
    Yield (i, j, left[i], right[j]) for every combination of the two groups.

    Used to compare newly encoded records against existing ones without
    comparing either group with itself.
    """
    for i, a in enumerate(left):
        for j, b in enumerate(right):
            yield i, j, a, b
