"""Turn frequency tables into ranked report sections."""

from __future__ import annotations

from collections.abc import Mapping

from core.config.options import OutputMode
from core.keyfreq.models import FrequencyTables
from core.report.models import FrequencyReport, RankedEntry


def rank_entries(table: Mapping[str, int]) -> list[RankedEntry]:
    """Sort a table by count descending (ties by key) and attach percentages.

    A table whose counts sum to zero reports every entry at 0%.
    """

    total = sum(table.values())
    ordered = sorted(table.items(), key=lambda item: (-item[1], item[0]))
    return [
        RankedEntry(key=key, count=count, percentage=_percentage(count, total))
        for key, count in ordered
    ]


def build_report(tables: FrequencyTables, mode: OutputMode = "all") -> FrequencyReport:
    if mode not in {"all", "modes", "functions"}:
        raise ValueError(f"Unsupported output mode: {mode}")

    report = FrequencyReport()
    if mode in {"all", "functions"}:
        report.functions = rank_entries(tables.functions)
    if mode in {"all", "modes"}:
        report.modes = rank_entries(tables.modes)
    return report


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return 100.0 * count / total
