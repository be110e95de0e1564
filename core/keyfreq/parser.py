"""Recursive-descent parser that validates a keyfreq file and sums counts.

Grammar:

    root   := '(' record* ')'
    record := '(' pair '.' NUMBER ')'
    pair   := '(' IDENT '.' IDENT ')'

Parsing is fail-fast: the first violation raises and nothing is recovered.
A record only reaches the frequency tables once its closing parenthesis has
been read.
"""

from __future__ import annotations

from core.keyfreq.lexer import Lexer
from core.keyfreq.models import FrequencyTables, Lexeme, ModeFunction, Position, TokenKind
from core.keyfreq.position_reader import RuneSource
from core.utils.errors import CountConversionError, GrammarError

MAX_COUNT = 2**64 - 1

_EXPECTED_LABELS: dict[TokenKind, str] = {
    TokenKind.OPEN_PAREN: "symbol '('",
    TokenKind.CLOSE_PAREN: "symbol ')'",
    TokenKind.DOT: "symbol '.'",
    TokenKind.IDENTIFIER: "IDENT",
    TokenKind.NUMBER: "number",
}


class Parser:
    """Single-pass parser owning the frequency tables it fills."""

    def __init__(self, stream: RuneSource) -> None:
        self._lexer = Lexer(stream)
        self._token: Lexeme | None = None
        self.tables = FrequencyTables()

    def parse_root(self) -> FrequencyTables:
        self._expect(TokenKind.OPEN_PAREN, "root")
        while self.parse_record():
            pass
        # The token that ended the repetition must close the root.
        self._require(self._token, TokenKind.CLOSE_PAREN, "root")
        return self.tables

    def parse_record(self) -> bool:
        """Parse one `((mode . function) . count)` record.

        Returns False without consuming anything further when the next
        token does not open a record.
        """

        token = self._next()
        if token is None or token.kind is not TokenKind.OPEN_PAREN:
            return False

        pair = self.parse_mode_function()
        self._expect(TokenKind.DOT, "record")
        count = parse_count(self._expect(TokenKind.NUMBER, "record"))
        self._expect(TokenKind.CLOSE_PAREN, "record")

        self.tables.add(pair, count)
        return True

    def parse_mode_function(self) -> ModeFunction:
        self._expect(TokenKind.OPEN_PAREN, "pair")
        mode = self._expect(TokenKind.IDENTIFIER, "pair")
        self._expect(TokenKind.DOT, "pair")
        function = self._expect(TokenKind.IDENTIFIER, "pair")
        self._expect(TokenKind.CLOSE_PAREN, "pair")
        return ModeFunction(mode=mode.text, function=function.text)

    def _next(self) -> Lexeme | None:
        if self._lexer.advance():
            self._token = self._lexer.current
        else:
            if self._lexer.error is not None:
                raise self._lexer.error
            self._token = None
        return self._token

    def _expect(self, kind: TokenKind, rule: str) -> Lexeme:
        return self._require(self._next(), kind, rule)

    def _require(self, token: Lexeme | None, kind: TokenKind, rule: str) -> Lexeme:
        if token is not None and token.kind is kind:
            return token

        position: Position
        if token is not None:
            actual = f"'{token.text}'"
            position = token.start
        elif self._lexer.unexpected is not None and self._lexer.unexpected_position is not None:
            actual = f"unexpected character '{self._lexer.unexpected}'"
            position = self._lexer.unexpected_position
        else:
            actual = "end of input"
            position = self._lexer.position

        raise GrammarError(
            f"expected {_EXPECTED_LABELS[kind]} in {rule} but got {actual}",
            position=position,
            expected=kind,
            actual=token,
        )


def parse_count(lexeme: Lexeme) -> int:
    """Convert a NUMBER lexeme to an unsigned 64-bit count."""

    text = lexeme.text
    if not (text.isascii() and text.isdigit()):
        raise CountConversionError(
            f"can't convert count '{text}' to unsigned integer: not a decimal number",
            position=lexeme.start,
            text=text,
        )

    value = int(text)
    if value > MAX_COUNT:
        raise CountConversionError(
            f"can't convert count '{text}' to unsigned integer: value out of range",
            position=lexeme.start,
            text=text,
        )
    return value


def parse_frequencies(stream: RuneSource) -> FrequencyTables:
    """Parse a whole keyfreq stream and return its per-mode/per-function totals."""

    return Parser(stream).parse_root()
