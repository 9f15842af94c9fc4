"""Plain-text rendering of scan results for the CLI."""

from __future__ import annotations

from typing import List

from geokit.analyzers.insights import CATEGORY_LABELS
from geokit.scanner.models import ScanResult, ScoreDetail

_IMPACT_ICONS = {"positive": "+", "neutral": "~", "negative": "-"}


def _bar(percentage: int, width: int = 20) -> str:
    filled = round(percentage / 100 * width)
    return "█" * filled + "░" * (width - filled)


def _render_category(label: str, detail: ScoreDetail) -> List[str]:
    lines = [f"{label:<20} {_bar(detail.percentage)} {detail.percentage:>3}%  {detail.label}"]
    for factor in detail.factors:
        icon = _IMPACT_ICONS[factor.impact]
        lines.append(f"    [{icon}] {factor.name}: {factor.value}")
    return lines


def render_report(result: ScanResult) -> str:
    """Render *result* as a human-readable multi-line report."""
    lines = [
        f"{result.title}",
        f"{result.url}",
        "",
        f"AI visibility score: {result.overall_score}/100",
        f"Words: {result.content.word_count}  (~{result.content.reading_time} min read)",
        "",
    ]

    for category, detail in result.scores.items():
        lines.extend(_render_category(CATEGORY_LABELS[category], detail))
        lines.append("")

    if result.insights:
        lines.append("Insights:")
        for number, insight in enumerate(result.insights, start=1):
            lines.append(f"  {number:>2}. [{insight.type}/{insight.impact}] {insight.title}")
            lines.append(f"      {insight.description}")
            if insight.action:
                lines.append(f"      → {insight.action}")

    return "\n".join(lines).rstrip() + "\n"
