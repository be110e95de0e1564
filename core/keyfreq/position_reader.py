"""Rune-at-a-time reader that tracks byte offset, row and column.

The reported `position` is always the location of the rune currently held
in `current`, so it trails the stream by one rune: advancing moves the
position past the *previous* rune before the next one is loaded. Once the
stream is exhausted the position sits just past the final rune and
`current` is None.

Columns count runes, not bytes or display cells. Only `\\n` starts a new
row; `\\r` is an ordinary rune.

Byte streams are decoded as UTF-8 one rune at a time, so an invalid byte
fails at its own offset. Text streams are consumed as already decoded.
"""

from __future__ import annotations

import codecs
from typing import BinaryIO, TextIO

from core.keyfreq.models import Position
from core.utils.errors import StreamReadError

RuneSource = TextIO | BinaryIO

_CHUNK_SIZE = 4096


class PositionReader:
    """Wrap a byte or text stream and expose one rune at a time with its position."""

    def __init__(self, stream: RuneSource, chunk_size: int = _CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer: str | bytes = ""
        self._index = 0
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._width = 0
        self.position = Position()
        self.current: str | None = None
        self.eof = False
        self.error: StreamReadError | None = None

    def advance(self) -> bool:
        """Load the next rune.

        Returns False at end of stream or when reading failed; a failure is
        stored in `error` for the caller to check and never raised here.
        """

        if self.eof or self.error is not None:
            return False

        try:
            rune = self._read_rune()
        except (OSError, UnicodeDecodeError) as exc:
            self._step()
            self.current = None
            self.error = StreamReadError(
                f"error while reading from stream: {exc}", position=self.position
            )
            return False

        self._step()
        self.current = rune
        if rune is None:
            self.eof = True
            return False

        self._width = len(rune.encode("utf-8", "surrogatepass"))
        return True

    def _step(self) -> None:
        previous = self.current
        position = self.position
        if previous is None:
            return
        if previous == "\n":
            self.position = Position(position.byte_offset + self._width, position.row + 1, 0)
        else:
            self.position = Position(
                position.byte_offset + self._width, position.row, position.column + 1
            )
        self._width = 0

    def _read_rune(self) -> str | None:
        while True:
            if self._index >= len(self._buffer):
                chunk = self._stream.read(self._chunk_size)
                if not chunk:
                    # Raises on a truncated multi-byte sequence at end of stream.
                    tail = self._decoder.decode(b"", final=True)
                    return tail or None
                self._buffer = chunk
                self._index = 0

            if isinstance(self._buffer, str):
                rune = self._buffer[self._index]
                self._index += 1
                return rune

            octet = self._buffer[self._index : self._index + 1]
            self._index += 1
            decoded = self._decoder.decode(octet)
            if decoded:
                return decoded
