"""Custom exceptions for core logic."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.keyfreq.models import Lexeme, Position, TokenKind


class PositionedError(Exception):
    """Raised when input fails at a known row/column/offset."""

    def __init__(self, message: str, *, position: Position) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f":{self.position.row}:{self.position.column} {self.message}"


class StreamReadError(PositionedError):
    """Raised when the underlying stream fails for a reason other than EOF."""


class GrammarError(PositionedError):
    """Raised when the parser expected one token kind and found another."""

    def __init__(
        self,
        message: str,
        *,
        position: Position,
        expected: TokenKind,
        actual: Lexeme | None = None,
    ) -> None:
        super().__init__(message, position=position)
        self.expected = expected
        self.actual = actual


class CountConversionError(PositionedError):
    """Raised when a count does not fit an unsigned 64-bit integer."""

    def __init__(self, message: str, *, position: Position, text: str) -> None:
        super().__init__(message, position=position)
        self.text = text


class ConfigurationError(Exception):
    """Raised when a command-line or environment setting is invalid."""


class InputFileError(Exception):
    """Raised when the frequency file cannot be opened."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path
