from __future__ import annotations

import functools
from typing import Iterable


def parse_owner_sequence(text: str | None) -> list[str]:
    """Split a comma-separated owner list into trimmed, non-empty names."""
    if not text:
        return []
    return [token.strip() for token in text.split(",") if token.strip()]


def order_owners(owners_with_data: Iterable[str], preferred_sequence: list[str]) -> list[str]:
    """
    Merge owners that have tasks with the preferred sequence into one row order.

    Owners named in the sequence come first, in sequence order, whether or not
    they have tasks. Remaining owners follow alphabetically.
    """

    positions: dict[str, int] = {}
    for idx, owner in enumerate(preferred_sequence):
        positions.setdefault(owner, idx)

    owners = set(owners_with_data) | set(preferred_sequence)

    def compare(a: str, b: str) -> int:
        index_a = positions.get(a)
        index_b = positions.get(b)
        if index_a is not None and index_b is not None:
            return index_a - index_b
        if index_a is not None:
            return -1
        if index_b is not None:
            return 1
        return (a > b) - (a < b)

    return sorted(owners, key=functools.cmp_to_key(compare))
