"""
Set algebra over key-ordered tables.

Each operation walks both tables once, in the manner of the merge step of a
merge sort, comparing the current heads by record key. Results are built in
key order and never need re-sorting. Inputs are not modified; results hold
copies of the contributing records.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from .model import Record, Table

SetOperation = Callable[[Table, Table], Table]


def _merge(
    first: Table,
    second: Table,
    *,
    keep_first_only: bool,
    keep_second_only: bool,
    keep_both: bool,
) -> Table:
    left: Sequence[Record] = first.records
    right: Sequence[Record] = second.records
    merged: List[Record] = []
    i = j = 0

    while i < len(left) and j < len(right):
        a, b = left[i], right[j]
        if a.key < b.key:
            if keep_first_only:
                merged.append(a.copy())
            i += 1
        elif b.key < a.key:
            if keep_second_only:
                merged.append(b.copy())
            j += 1
        else:
            # Same key in both tables: the first table's record survives.
            if keep_both:
                merged.append(a.copy())
            i += 1
            j += 1

    if keep_first_only:
        merged.extend(record.copy() for record in left[i:])
    if keep_second_only:
        merged.extend(record.copy() for record in right[j:])

    return Table.from_sorted(merged)


def union(first: Table, second: Table) -> Table:
    """Records whose key is in either table; ``first`` wins on shared keys."""

    return _merge(first, second, keep_first_only=True, keep_second_only=True, keep_both=True)


def difference(first: Table, second: Table) -> Table:
    """Records of ``first`` whose key does not appear in ``second``."""

    return _merge(first, second, keep_first_only=True, keep_second_only=False, keep_both=False)


def symmetric_difference(first: Table, second: Table) -> Table:
    """Records whose key appears in exactly one of the two tables."""

    return _merge(first, second, keep_first_only=True, keep_second_only=True, keep_both=False)


def intersection(first: Table, second: Table) -> Table:
    """Records of ``first`` whose key also appears in ``second``."""

    return _merge(first, second, keep_first_only=False, keep_second_only=False, keep_both=True)


SET_OPERATIONS: Tuple[Tuple[str, SetOperation], ...] = (
    ("Set Union", union),
    ("Set Difference", difference),
    ("Set Symmetric Difference", symmetric_difference),
    ("Set Intersection", intersection),
)
