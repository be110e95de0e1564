"""Data models for ranked frequency reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RankedEntry(BaseModel):
    """One key with its total count and share of the table total."""

    model_config = ConfigDict(extra="forbid")

    key: str
    count: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)


class FrequencyReport(BaseModel):
    """Ranked sections selected for output.

    Rules:
    - entries are ordered by count descending, then key ascending
    - a section is None when the output mode does not select it
    """

    model_config = ConfigDict(extra="forbid")

    functions: list[RankedEntry] | None = None
    modes: list[RankedEntry] | None = None
