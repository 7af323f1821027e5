from __future__ import annotations

from typing import Iterable, List


def format_ranges(rows: Iterable[int]) -> str:
    """
    Compress row numbers into text: [2, 3, 4, 7] -> "rows 2-4, row 7".

    Input order does not matter and repeated numbers are collapsed first.
    """
    numbers = sorted(set(rows))
    if not numbers:
        return ""

    runs: List[str] = []
    start = end = numbers[0]
    for number in numbers[1:]:
        if number == end + 1:
            end = number
            continue
        runs.append(_run_text(start, end))
        start = end = number
    runs.append(_run_text(start, end))
    return ", ".join(runs)


def _run_text(start: int, end: int) -> str:
    return f"row {start}" if start == end else f"rows {start}-{end}"


def format_row_list(rows: Iterable[int]) -> str:
    """Uncompressed style: the numbers as given, comma separated."""
    return ", ".join(str(n) for n in rows)
