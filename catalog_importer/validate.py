from __future__ import annotations

from typing import List, Optional, Sequence

from .models import ColumnRule, FatalError, MessageKind, Row, RuleKind, ValidationMessage
from .normalize import normalize_value, parse_decimal
from .rules import PRIMARY_RULES, REPLACEMENT_CHARACTERS, REVISED_HEADERS, REVISED_RULES

HEADER_MISMATCH = "The column headers in the first row do not match the expected format."

REPLACEMENT_WARNING = (
    "Unrecognized characters detected in row {row}. "
    "These may be due to encoding issues (e.g., \ufffd, \u25a1, etc.)."
)


def has_replacement_characters(value: Optional[str]) -> bool:
    if not value:
        return False
    return any(ch in value for ch in REPLACEMENT_CHARACTERS)


def _in_enum(rule: ColumnRule, value: str) -> bool:
    return value.lower() in {allowed.lower() for allowed in rule.allowed}


def _check(rule: ColumnRule, raw: str) -> List[str]:
    problems: List[str] = []
    value = raw.strip()

    if not normalize_value(raw):
        if rule.required:
            problems.append(f"{rule.name} is required but missing")
        return problems

    if rule.kind == RuleKind.MAX_LENGTH and rule.max_length is not None and len(value) > rule.max_length:
        problems.append(f"{rule.name} exceeds max length of {rule.max_length} characters")
    elif rule.kind == RuleKind.NUMERIC and parse_decimal(value) is None:
        problems.append(f"{rule.name} must be a numeric value")
    elif rule.kind == RuleKind.ENUM and not _in_enum(rule, value):
        problems.append(
            f"{rule.name} contains an invalid value. Must be one of: {', '.join(rule.allowed)}"
        )
    return problems


def validate_row(row: Row, rules: Sequence[ColumnRule] = PRIMARY_RULES) -> List[ValidationMessage]:
    """
    Check one row against a rule table.

    A rule whose column is not in the file at all is skipped, so files with
    a partial layout only get checked on the columns they carry.
    """
    messages: List[ValidationMessage] = []
    for rule in rules:
        if rule.name not in row.values:
            continue
        for text in _check(rule, row.values[rule.name]):
            messages.append(ValidationMessage(kind=MessageKind.ERROR, text=text, rows={row.number}))
    return messages


def scan_replacement_characters(row: Row) -> List[ValidationMessage]:
    if not any(has_replacement_characters(value) for value in row.values.values()):
        return []
    return [
        ValidationMessage(
            kind=MessageKind.WARNING,
            text=REPLACEMENT_WARNING.format(row=row.number),
            rows={row.number},
        )
    ]


# --- revised export ---

def check_revised_header(header: Sequence[str], expected: Sequence[str] = REVISED_HEADERS) -> Optional[FatalError]:
    if list(header) != list(expected):
        return FatalError(message=HEADER_MISMATCH)
    return None


def _revised_problem(rule: ColumnRule, value: str) -> Optional[str]:
    if rule.kind == RuleKind.REQUIRED and not value:
        return "Required field is empty."
    if rule.kind == RuleKind.ENUM and not _in_enum(rule, value):
        return "Invalid value."
    if rule.kind == RuleKind.NUMERIC and parse_decimal(value) is None:
        return "Must be a numeric value."
    return None


def validate_revised_row(row: Row, rules: Sequence[ColumnRule] = REVISED_RULES) -> List[str]:
    by_name = {rule.name: rule for rule in rules}
    errors: List[str] = []

    for column, raw in row.values.items():
        value = (raw or "").strip()
        prefix = f"Error in row {row.number}, {column}:"

        rule = by_name.get(column)
        if rule is not None:
            problem = _revised_problem(rule, value)
            if problem:
                errors.append(f"{prefix} {problem}")

        if "\r" in value or "\n" in value:
            errors.append(f"{prefix} Contains carriage returns.")

        if has_replacement_characters(value):
            errors.append(f"{prefix} Contains replacement symbols.")

    return errors
