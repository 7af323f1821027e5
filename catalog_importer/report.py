"""
Workflow entry points and report assembly.

Each operation takes a complete row sequence and returns either a result
model or a FatalError; nothing here raises for bad input.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .duplicates import in_file_duplicate_warnings, library_duplicate_warnings, revised_duplicate_warnings
from .models import (
    FileReport,
    LibraryComparison,
    MessageKind,
    RevisedComparison,
    RevisedOutcome,
    Row,
    ValidationMessage,
)
from .ranges import format_ranges
from .rules import PRIMARY_RULES
from .validate import check_revised_header, scan_replacement_characters, validate_revised_row, validate_row

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Collects messages into an errors list and a warnings list.

    Messages are merged on their rendered text: two violations that print the
    same text end up as one line with the union of their rows. Verbatim lines
    are kept as given and follow the merged lines of the same kind.
    """

    def __init__(self) -> None:
        self._merged: Dict[Tuple[MessageKind, str], Set[int]] = {}
        self._verbatim: Dict[MessageKind, List[str]] = {MessageKind.ERROR: [], MessageKind.WARNING: []}

    def add(self, message: ValidationMessage) -> None:
        self._merged.setdefault((message.kind, message.text), set()).update(message.rows)

    def add_all(self, messages: Iterable[ValidationMessage]) -> None:
        for message in messages:
            self.add(message)

    def add_verbatim(self, kind: MessageKind, lines: Iterable[str]) -> None:
        self._verbatim[kind].extend(lines)

    def render(self, kind: MessageKind) -> List[str]:
        lines = [
            f"{kind.value}: {text}. Location: {format_ranges(rows)}"
            for (message_kind, text), rows in self._merged.items()
            if message_kind == kind
        ]
        return lines + self._verbatim[kind]

    def build(self) -> FileReport:
        return FileReport(errors=self.render(MessageKind.ERROR), warnings=self.render(MessageKind.WARNING))


def validate_file(rows: Sequence[Row]) -> FileReport:
    """Primary import check: column rules, encoding damage and in-file duplicates."""
    assembler = ReportAssembler()
    for row in rows:
        assembler.add_all(validate_row(row, PRIMARY_RULES))
        assembler.add_all(scan_replacement_characters(row))
    assembler.add_verbatim(MessageKind.WARNING, in_file_duplicate_warnings(rows))

    report = assembler.build()
    if report.ok:
        logger.info("File validation succeeded. No issues found.")
    else:
        logger.info(
            "File validation found %d errors and %d warnings", len(report.errors), len(report.warnings)
        )
    return report


def compare_against_library(import_rows: Sequence[Row], library_rows: Sequence[Row]) -> LibraryComparison:
    return LibraryComparison(warnings=library_duplicate_warnings(import_rows, library_rows))


def validate_revised_file(rows: Sequence[Row], header: Optional[Sequence[str]] = None) -> RevisedOutcome:
    if header is None:
        header = rows[0].columns if rows else []

    fatal = check_revised_header(header)
    if fatal is not None:
        logger.warning("Revised file rejected: %s", fatal.message)
        return fatal

    errors: List[str] = []
    for row in rows:
        errors.extend(validate_revised_row(row))
    return FileReport(errors=errors, warnings=[])


def compare_revised_file(rows: Sequence[Row]) -> RevisedComparison:
    return RevisedComparison(compare_warnings=revised_duplicate_warnings(rows))
