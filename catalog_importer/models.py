from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Row(BaseModel):
    """One data row; `values` keeps the source column order."""

    number: int
    values: Dict[str, str] = Field(default_factory=dict)

    @property
    def columns(self) -> List[str]:
        return list(self.values)


class ParsedFile(BaseModel):
    header: List[str] = Field(default_factory=list)
    rows: List[Row] = Field(default_factory=list)


class RuleKind(str, Enum):
    REQUIRED = "required"
    MAX_LENGTH = "max_length"
    NUMERIC = "numeric"
    ENUM = "enum"


class ColumnRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: RuleKind
    required: bool = False
    max_length: Optional[int] = None
    allowed: Tuple[str, ...] = ()


class MessageKind(str, Enum):
    ERROR = "Error"
    WARNING = "Warning"


class ValidationMessage(BaseModel):
    kind: MessageKind
    text: str
    rows: Set[int] = Field(default_factory=set)


class DuplicateGroup(BaseModel):
    signature: str
    rows: List[int] = Field(default_factory=list)


# --- operation results ---

class FatalError(BaseModel):
    message: str
    details: Optional[str] = None


class FileReport(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and not self.warnings


class LibraryComparison(BaseModel):
    warnings: List[str] = Field(default_factory=list)


class RevisedComparison(BaseModel):
    compare_warnings: List[str] = Field(default_factory=list)


ParseOutcome = Union[ParsedFile, FatalError]
RevisedOutcome = Union[FileReport, FatalError]


# --- HTTP response envelopes ---

class UploadResponse(BaseModel):
    message: str
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class CompareResponse(BaseModel):
    warnings: List[str] = Field(default_factory=list)


class RevisedValidateResponse(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class RevisedCompareResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    compare_warnings: List[str] = Field(default_factory=list, alias="compareWarnings")


class HealthResponse(BaseModel):
    ok: bool = True
