"""
Reading uploaded CSV exports and normalizing cell values.

Responsibilities:
- encoding detection + decoding
- CSV parsing into numbered rows (header is row 1)
- cell normalization used for duplicate detection
- decimal parsing shared with the numeric validation rules
"""

from __future__ import annotations

import csv
import io
import logging
import re
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from charset_normalizer import from_bytes

from .models import FatalError, ParsedFile, ParseOutcome, Row
from .rules import INVISIBLE_CHARACTERS

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d[\d,]*(?:\.\d*)?|\.\d+)$", re.ASCII)
_TWO_PLACES = Decimal("0.01")


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse a plain base-10 number, or return None.

    Accepts an optional sign, comma group separators and a fractional part
    ("1,250.5", ".5", "5."). Exponents, NaN and Infinity are not numbers here.
    """
    if text is None:
        return None
    text = text.strip()
    if not _DECIMAL_RE.match(text):
        return None
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None


def format_decimal(value: Decimal) -> str:
    # wide enough for every integer digit plus two places
    context = Context(prec=max(28, value.adjusted() + 4))
    value = value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=context)
    if value.is_zero():
        value = abs(value)
    return format(value, "f")


def normalize_value(raw: Optional[str]) -> str:
    """
    Canonical form of a cell for equality checks.

    Rules:
    - None becomes "".
    - CR, LF, zero-width space and no-break space are removed, then the text is trimmed.
    - Anything that parses as a decimal is rendered with two fraction digits ("5" -> "5.00").
    """
    if raw is None:
        return ""

    value = str(raw).strip()
    for ch in INVISIBLE_CHARACTERS:
        value = value.replace(ch, "")
    value = value.strip()

    number = parse_decimal(value)
    if number is not None:
        return format_decimal(number)
    return value


def decode_csv_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text.

    Rules:
    - A UTF-8 BOM is dropped.
    - Strict UTF-8 is tried first, then charset-normalizer's best guess.
    - If both fail, decode UTF-8 with replacement characters so the
      replacement-character checks can report the damage.
    """
    detected = None
    decode_used = "utf-8-sig"
    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding
        try:
            if detected is None:
                raise LookupError("no encoding detected")
            decode_used = detected
            text = raw.decode(decode_used)
        except (LookupError, UnicodeDecodeError):
            decode_used = "utf-8"
            text = raw.decode(decode_used, errors="replace")
            decode_fallback = True

    info = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, info


def number_rows(records: Sequence[Dict[str, str]], start: int = FIRST_DATA_ROW) -> List[Row]:
    return [Row(number=start + i, values=dict(record)) for i, record in enumerate(records)]


def read_csv_rows(raw: bytes, name: str = "file") -> ParseOutcome:
    """
    Parse an uploaded CSV into a ParsedFile.

    Blank lines are skipped and not numbered. Short rows are padded to the
    header width. Anything that prevents a clean column mapping (no header,
    repeated header names, rows wider than the header, csv errors) is fatal.
    """
    if not raw:
        return FatalError(message=f"The {name} is empty.")

    text, enc = decode_csv_bytes(raw)
    if enc["decode_fallback"]:
        logger.warning("%s could not be decoded cleanly; using UTF-8 with replacement", name)
    elif enc["detected"]:
        logger.info("%s decoded as %s", name, enc["decode_used"])

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",")

    header: Optional[List[str]] = None
    records: List[Dict[str, str]] = []

    try:
        for line in reader:
            if not line:
                continue

            if header is None:
                header = list(line)
                header[0] = header[0].lstrip("\ufeff")
                seen = set()
                for column in header:
                    if column in seen:
                        return FatalError(
                            message=f"Error processing {name}.",
                            details=f"Duplicate column header '{column}'.",
                        )
                    seen.add(column)
                continue

            if len(line) > len(header):
                return FatalError(
                    message=f"Error processing {name}.",
                    details=f"Row {len(records) + FIRST_DATA_ROW} has {len(line)} fields; expected {len(header)}.",
                )
            if len(line) < len(header):
                line = line + [""] * (len(header) - len(line))

            records.append(dict(zip(header, line)))
    except csv.Error as exc:
        return FatalError(message=f"Error processing {name}.", details=str(exc))

    if header is None:
        return FatalError(message=f"The {name} has no header row.")

    return ParsedFile(header=header, rows=number_rows(records))
