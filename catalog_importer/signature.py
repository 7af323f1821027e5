from __future__ import annotations

from typing import AbstractSet, Iterable

from .models import Row
from .normalize import normalize_value
from .rules import SIGNATURE_DELIMITER


def build_signature(
    row: Row,
    excluded_columns: AbstractSet[str] = frozenset(),
    excluded_positions: AbstractSet[int] = frozenset(),
    keyed: bool = True,
    excluded_prefixes: Iterable[str] = (),
) -> str:
    """
    Canonical string for a row, used as the equality key for duplicates.

    Columns are dropped by name, by name prefix or by 0-based position, the
    rest are sorted by name (ordinal) so column order in the file does not
    matter, and each value is normalized before joining with "|".
    """
    prefixes = tuple(excluded_prefixes)

    kept = [
        (name, value)
        for position, (name, value) in enumerate(row.values.items())
        if position not in excluded_positions
        and name not in excluded_columns
        and not (prefixes and name.startswith(prefixes))
    ]
    kept.sort(key=lambda item: item[0])

    if keyed:
        parts = [f"{name}:{normalize_value(value)}" for name, value in kept]
    else:
        parts = [normalize_value(value) for _, value in kept]
    return SIGNATURE_DELIMITER.join(parts)
