"""
Duplicate detection by row signature.

Three comparisons are supported:
- within one import file (keyed signatures, folder columns ignored)
- import file against a library file (library's first column ignored)
- within one revised export (value-only signatures, any "Folder*" column ignored)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence

from .models import DuplicateGroup, Row
from .ranges import format_ranges, format_row_list
from .rules import FOLDER_COLUMNS, FOLDER_PREFIX
from .signature import build_signature

logger = logging.getLogger(__name__)

IN_FILE_TEMPLATE = (
    "The data in {ranges} represent the same item. "
    "Are you sure you want to import duplicates of this item?"
)
LIBRARY_TEMPLATE = (
    "The items in {ranges} from the import spreadsheet are already contained "
    "in your Library Spreadsheet. Uploading will duplicate these items."
)
REVISED_TEMPLATE = "Duplicate rows: {rows}."


def group_by_signature(rows: Sequence[Row], signature: Callable[[Row], str]) -> List[DuplicateGroup]:
    """Groups of rows sharing a signature, in order of first appearance; singletons dropped."""
    groups: Dict[str, List[int]] = {}
    for row in rows:
        groups.setdefault(signature(row), []).append(row.number)

    return [
        DuplicateGroup(signature=sig, rows=numbers)
        for sig, numbers in groups.items()
        if len(numbers) > 1
    ]


def _import_signature(row: Row) -> str:
    return build_signature(row, excluded_columns=FOLDER_COLUMNS, keyed=True)


def _library_signature(row: Row) -> str:
    return build_signature(row, excluded_columns=FOLDER_COLUMNS, excluded_positions={0}, keyed=True)


def _revised_signature(row: Row) -> str:
    """Values are normalized, so "1" and "1.00" in a revised export are the same value."""
    return build_signature(row, excluded_prefixes=(FOLDER_PREFIX,), keyed=False)


# --- within one import file ---

def find_duplicates_in_file(rows: Sequence[Row]) -> List[DuplicateGroup]:
    return group_by_signature(rows, _import_signature)


def in_file_duplicate_warnings(rows: Sequence[Row]) -> List[str]:
    return [
        IN_FILE_TEMPLATE.format(ranges=format_ranges(group.rows))
        for group in find_duplicates_in_file(rows)
    ]


# --- import file against library ---

def find_library_matches(import_rows: Sequence[Row], library_rows: Sequence[Row]) -> List[int]:
    """Import row numbers whose signature also occurs in the library."""
    library = {_library_signature(row) for row in library_rows}
    return [row.number for row in import_rows if _import_signature(row) in library]


def library_duplicate_warnings(import_rows: Sequence[Row], library_rows: Sequence[Row]) -> List[str]:
    logger.info(
        "Starting comparison: %d import rows vs %d library rows",
        len(import_rows),
        len(library_rows),
    )
    matches = find_library_matches(import_rows, library_rows)
    logger.info("Comparison completed. %d duplicates found.", len(matches))

    if not matches:
        return []
    return [LIBRARY_TEMPLATE.format(ranges=format_ranges(matches))]


# --- revised export ---

def find_revised_duplicates(rows: Sequence[Row]) -> List[DuplicateGroup]:
    return group_by_signature(rows, _revised_signature)


def revised_duplicate_warnings(rows: Sequence[Row]) -> List[str]:
    return [
        REVISED_TEMPLATE.format(rows=format_row_list(group.rows))
        for group in find_revised_duplicates(rows)
    ]
