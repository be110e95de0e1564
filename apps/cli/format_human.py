"""Human-readable CSV-like rendering of report sections."""

from __future__ import annotations

from core.report.models import FrequencyReport, RankedEntry


def render_section(title: str, entries: list[RankedEntry]) -> str:
    """Render a titled section with one `key,count,percentage` row per entry."""

    lines: list[str] = [title, "-" * len(title)]
    for entry in entries:
        lines.append(f"{entry.key},{entry.count},{entry.percentage:f}")
    return "\n".join(lines)


def render_report(report: FrequencyReport) -> str:
    sections: list[str] = []
    if report.functions is not None:
        sections.append(render_section("Functions", report.functions))
    if report.modes is not None:
        sections.append(render_section("Modes", report.modes))
    return "\n\n".join(sections)
