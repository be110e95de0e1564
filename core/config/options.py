"""Command-line option normalization and environment-derived defaults."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, cast

from core.utils.errors import ConfigurationError

OutputMode = Literal["all", "modes", "functions"]
OutputFormat = Literal["csv", "json"]

DEFAULT_INPUT_NAME = ".emacs.keyfreq"
LOG_LEVEL_ENV = "KEYFREQ_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_OUTPUT_MODES: tuple[OutputMode, ...] = ("all", "modes", "functions")
_OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("csv", "json")


def parse_output_mode(value: str) -> OutputMode:
    normalized = value.lower().strip()
    if normalized not in _OUTPUT_MODES:
        raise ConfigurationError(
            f"don't know mode '{value}'. Valid values are 'all', 'modes', 'functions'"
        )
    return cast(OutputMode, normalized)


def parse_output_format(value: str) -> OutputFormat:
    normalized = value.lower().strip()
    if normalized not in _OUTPUT_FORMATS:
        raise ConfigurationError(f"don't know format '{value}'. Valid values are 'csv', 'json'")
    return cast(OutputFormat, normalized)


def default_input_path() -> Path:
    """Return `$HOME/.emacs.keyfreq`, or a relative path when HOME is unset."""

    return Path(os.getenv("HOME", "")) / DEFAULT_INPUT_NAME


def resolve_log_level() -> int:
    raw = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"{LOG_LEVEL_ENV} must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    return level
