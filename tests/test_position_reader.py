from __future__ import annotations

import io

from core.keyfreq.models import Position
from core.keyfreq.position_reader import PositionReader
from core.utils.errors import StreamReadError


class _FailingStream(io.StringIO):
    def read(self, size: int | None = -1) -> str:
        raise OSError("disk on fire")


class _FailingAfterFirstRead(io.StringIO):
    def __init__(self, text: str) -> None:
        super().__init__(text)
        self._reads = 0

    def read(self, size: int | None = -1) -> str:
        self._reads += 1
        if self._reads > 1:
            raise OSError("disk on fire")
        return super().read(size)


def _collect(text: str) -> list[tuple[str, Position]]:
    reader = PositionReader(io.StringIO(text))
    seen: list[tuple[str, Position]] = []
    while reader.advance():
        assert reader.current is not None
        seen.append((reader.current, reader.position))
    return seen


def test_position_reader_reports_position_of_held_rune() -> None:
    assert _collect("Test") == [
        ("T", Position(byte_offset=0, row=0, column=0)),
        ("e", Position(byte_offset=1, row=0, column=1)),
        ("s", Position(byte_offset=2, row=0, column=2)),
        ("t", Position(byte_offset=3, row=0, column=3)),
    ]


def test_position_reader_moves_past_last_rune_at_eof() -> None:
    reader = PositionReader(io.StringIO("ab"))
    while reader.advance():
        pass

    assert reader.eof is True
    assert reader.error is None
    assert reader.current is None
    assert reader.position == Position(byte_offset=2, row=0, column=2)
    assert reader.advance() is False


def test_position_reader_starts_new_row_after_newline() -> None:
    seen = dict(_collect("ab\ncd"))

    assert seen["a"] == Position(byte_offset=0, row=0, column=0)
    assert seen["\n"] == Position(byte_offset=2, row=0, column=2)
    assert seen["c"] == Position(byte_offset=3, row=1, column=0)
    assert seen["d"] == Position(byte_offset=4, row=1, column=1)


def test_position_reader_does_not_special_case_carriage_return() -> None:
    seen = _collect("a\r\nb")

    assert seen[-1] == ("b", Position(byte_offset=3, row=1, column=0))
    assert seen[1] == ("\r", Position(byte_offset=1, row=0, column=1))


def test_position_reader_counts_bytes_but_one_column_per_rune() -> None:
    seen = _collect("éx")

    assert seen[1] == ("x", Position(byte_offset=2, row=0, column=1))


def test_position_reader_handles_runes_across_chunks() -> None:
    reader = PositionReader(io.StringIO("abcdef"), chunk_size=2)
    runes: list[str] = []
    while reader.advance():
        assert reader.current is not None
        runes.append(reader.current)

    assert "".join(runes) == "abcdef"
    assert reader.position.byte_offset == 6


def test_position_reader_records_stream_error_without_raising() -> None:
    reader = PositionReader(_FailingStream())

    assert reader.advance() is False
    assert reader.eof is False
    assert isinstance(reader.error, StreamReadError)
    assert "error while reading from stream: disk on fire" in str(reader.error)
    assert reader.error.position == Position()
    assert reader.advance() is False


def test_position_reader_wraps_decode_errors() -> None:
    stream = io.TextIOWrapper(io.BytesIO(b"(ab\xff)"), encoding="utf-8")
    reader = PositionReader(stream)

    assert reader.advance() is False
    assert isinstance(reader.error, StreamReadError)
    assert "codec can't decode" in reader.error.message


def test_position_reader_read_error_after_consumed_input_points_past_last_rune() -> None:
    reader = PositionReader(_FailingAfterFirstRead("a\nbc"), chunk_size=2)

    assert reader.advance() is True
    assert reader.advance() is True
    assert reader.current == "\n"
    assert reader.advance() is False
    assert isinstance(reader.error, StreamReadError)
    assert reader.error.position == Position(byte_offset=2, row=1, column=0)
    assert reader.position == Position(byte_offset=2, row=1, column=0)


def test_position_reader_decodes_bytes_one_rune_at_a_time() -> None:
    reader = PositionReader(io.BytesIO("ab\néx".encode("utf-8")), chunk_size=3)
    seen: list[tuple[str, Position]] = []
    while reader.advance():
        assert reader.current is not None
        seen.append((reader.current, reader.position))

    assert reader.error is None
    assert seen[-2:] == [
        ("é", Position(byte_offset=3, row=1, column=0)),
        ("x", Position(byte_offset=5, row=1, column=1)),
    ]
    assert reader.position == Position(byte_offset=6, row=1, column=2)


def test_position_reader_invalid_byte_is_reported_at_its_offset() -> None:
    payload = ("(" + "((a . b) . 1)\n" * 400).encode("utf-8") + b"\xff)"
    reader = PositionReader(io.BytesIO(payload))
    while reader.advance():
        pass

    assert isinstance(reader.error, StreamReadError)
    assert reader.error.position == Position(byte_offset=5601, row=400, column=0)
    assert "can't decode byte 0xff" in reader.error.message


def test_position_reader_truncated_sequence_at_eof_is_stream_error() -> None:
    reader = PositionReader(io.BytesIO(b"a\xc3"))

    assert reader.advance() is True
    assert reader.advance() is False
    assert reader.eof is False
    assert isinstance(reader.error, StreamReadError)
    assert reader.error.position == Position(byte_offset=1, row=0, column=1)
