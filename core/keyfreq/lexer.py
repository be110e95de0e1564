"""Tokenizer for keyfreq frequency files.

Rules, tried in order after skipping whitespace:
- `(`, `)` and `.` are single-rune tokens.
- A maximal run of numeric runes is a NUMBER.
- A maximal run of letters, numeric runes and `- + : * & /` is an IDENT.

Since numbers are matched first, `12ab` yields NUMBER `12` then IDENT `ab`.
A rune matching no rule ends the token stream without raising; it is kept
in `unexpected` so callers can report it.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable

from core.keyfreq.models import Lexeme, Position, TokenKind
from core.keyfreq.position_reader import PositionReader, RuneSource
from core.utils.errors import StreamReadError

_SINGLE_RUNE_TOKENS: tuple[tuple[str, TokenKind], ...] = (
    ("(", TokenKind.OPEN_PAREN),
    (")", TokenKind.CLOSE_PAREN),
    (".", TokenKind.DOT),
)
_IDENTIFIER_PUNCTUATION = frozenset("-+:*&/")
# ASCII information separators do not count as whitespace.
_NON_SPACE_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_space_rune(rune: str) -> bool:
    return rune.isspace() and rune not in _NON_SPACE_SEPARATORS


def is_number_rune(rune: str) -> bool:
    return unicodedata.category(rune).startswith("N")


def is_identifier_rune(rune: str) -> bool:
    return rune.isalpha() or is_number_rune(rune) or rune in _IDENTIFIER_PUNCTUATION


_RUN_TOKENS: tuple[tuple[Callable[[str], bool], TokenKind], ...] = (
    (is_number_rune, TokenKind.NUMBER),
    (is_identifier_rune, TokenKind.IDENTIFIER),
)


class Lexer:
    """Pull-style tokenizer: call `advance()`, then read `current`."""

    def __init__(self, stream: RuneSource) -> None:
        self._reader = PositionReader(stream)
        self._started = False
        self.current: Lexeme | None = None
        self.unexpected: str | None = None
        self.unexpected_position: Position | None = None

    @property
    def error(self) -> StreamReadError | None:
        return self._reader.error

    @property
    def position(self) -> Position:
        return self._reader.position

    def advance(self) -> bool:
        """Scan the next lexeme into `current`.

        Returns False at end of input, on an unrecognized rune, or after a
        stream error (see `error`). `current` keeps the last lexeme scanned.
        """

        reader = self._reader
        if not self._started:
            self._started = True
            reader.advance()

        while reader.current is not None and is_space_rune(reader.current):
            reader.advance()
        if reader.error is not None or reader.current is None:
            return False

        start = reader.position
        rune = reader.current

        for literal, kind in _SINGLE_RUNE_TOKENS:
            if rune == literal:
                reader.advance()
                return self._emit(kind, rune, start)

        for accepts, kind in _RUN_TOKENS:
            if accepts(rune):
                return self._emit(kind, self._consume_run(accepts), start)

        self.unexpected = rune
        self.unexpected_position = start
        return False

    def _consume_run(self, accepts: Callable[[str], bool]) -> str:
        reader = self._reader
        chars: list[str] = []
        while reader.current is not None and accepts(reader.current):
            chars.append(reader.current)
            reader.advance()
        return "".join(chars)

    def _emit(self, kind: TokenKind, text: str, start: Position) -> bool:
        if self._reader.error is not None:
            return False
        self.current = Lexeme(kind=kind, text=text, start=start, end=self._reader.position)
        return True
