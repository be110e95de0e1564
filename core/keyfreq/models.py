"""Data models for positions, lexemes and parsed frequency records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Position:
    """Snapshot of a reader location. Row and column are zero-indexed."""

    byte_offset: int = 0
    row: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f":{self.row}:{self.column} ({self.byte_offset})"


class TokenKind(Enum):
    """Closed set of lexical categories."""

    OPEN_PAREN = "OPAREN"
    CLOSE_PAREN = "CPAREN"
    DOT = "DOT"
    IDENTIFIER = "IDENT"
    NUMBER = "NUMBER"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Lexeme:
    """One classified run of source text.

    `start` is the position before the first consumed character and `end`
    the position after the last one.
    """

    kind: TokenKind
    text: str
    start: Position
    end: Position


@dataclass(frozen=True)
class ModeFunction:
    """A `(mode . function)` pair read from one record."""

    mode: str
    function: str


@dataclass
class FrequencyTables:
    """Running per-mode and per-function totals for one parse pass."""

    modes: dict[str, int] = field(default_factory=dict)
    functions: dict[str, int] = field(default_factory=dict)
    records: int = 0

    def add(self, pair: ModeFunction, count: int) -> None:
        self.modes[pair.mode] = self.modes.get(pair.mode, 0) + count
        self.functions[pair.function] = self.functions.get(pair.function, 0) + count
        self.records += 1
