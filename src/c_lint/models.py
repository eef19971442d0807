from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class Range(BaseModel):
    """A span inside one specific text buffer (raw source or realigned text)."""

    model_config = ConfigDict(frozen=True)

    start_byte: int
    end_byte: int
    start_point: Position
    end_point: Position

    @property
    def line_span(self) -> int:
        return self.end_point.row - self.start_point.row + 1


class Lint(BaseModel):
    """A single finding.

    Aggregate findings carry their itemized contributions in ``sublints``; each
    contribution records its cost in ``lines``.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    text: str
    range: Range
    file: Path
    sublints: list["Lint"] | None = None
    lines: int | None = None


Lint.model_rebuild()  # necessary for recursive types


class IdentifierCase(str, Enum):
    LOWER_SNAKE = "lower_snake"
    CAMEL = "camel"


class Identifier(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: Path
    range: Range
    case: IdentifierCase
    text: str


class FileError(BaseModel):
    """An error that prevented some checks from completing for one file."""

    model_config = ConfigDict(frozen=True)

    file: Path
    message: str


class LintResult(BaseModel):
    lints: list[Lint]
    errors: list[FileError]
    files: list[Path]
