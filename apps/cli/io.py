"""CLI I/O helpers for reading the frequency file and serializing reports."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from core.keyfreq.models import FrequencyTables
from core.keyfreq.parser import parse_frequencies
from core.report.models import FrequencyReport
from core.utils.errors import InputFileError


@contextmanager
def open_frequency_file(path: Path) -> Iterator[BinaryIO]:
    """Open the input file as bytes; the handle is closed on every exit path.

    Decoding happens rune by rune in the reader so invalid UTF-8 is reported
    at its own offset.
    """

    try:
        handle = path.open("rb")
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise InputFileError(f"cannot open input file {path}: {reason}", path=path) from exc

    with handle:
        yield handle


def read_frequency_file(path: Path) -> FrequencyTables:
    with open_frequency_file(path) as handle:
        return parse_frequencies(handle)


def dump_report_json(report: FrequencyReport) -> str:
    payload = report.model_dump(mode="json", exclude_none=True)
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
