"""Narrative reports: LLM-written when possible, template-built otherwise.

The scoring engine never depends on this module.  :func:`generate_report`
hands the model the raw answers plus the computed statistics and returns its
text.  If the provider is unavailable or slow, the caller still gets
:func:`render_summary`, a deterministic Markdown summary built only from
``statistics`` and ``reliability``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Literal

from ceai.config import CeaiSettings
from ceai.errors import ExternalServiceError
from ceai.ingest import SurveyTable
from ceai.instrument import STRONG_THRESHOLD, WEAK_THRESHOLD, Dimension
from ceai.models import AnalysisReport
from ceai.scoring.models import AnalysisResult
from ceai.scoring.reliability import interpret_alpha

logger = logging.getLogger(__name__)

_RECOMMENDATIONS: dict[Dimension, tuple[str, tuple[str, ...]]] = {
    Dimension.MANAGEMENT_SUPPORT: (
        "Strengthen Management Support",
        (
            "Provide leadership training focused on supporting entrepreneurial initiatives",
            "Establish clear channels for idea submission and feedback",
            "Recognise and celebrate innovative efforts, even when they don't succeed",
        ),
    ),
    Dimension.WORK_DISCRETION: (
        "Enhance Employee Autonomy",
        (
            "Empower employees to make more decisions without excessive oversight",
            "Create opportunities for self-directed work",
            "Reduce approval layers for innovative ideas",
        ),
    ),
    Dimension.REWARDS: (
        "Improve Reward Systems",
        (
            "Develop recognition programmes specifically for innovative contributions",
            "Align performance metrics with entrepreneurial behaviours",
            "Consider both financial and non-financial rewards for innovation",
        ),
    ),
    Dimension.TIME_AVAILABILITY: (
        "Optimise Time Management",
        (
            "Evaluate workload distribution across teams",
            "Allocate dedicated time for innovative activities",
            "Consider implementing 'innovation time' policies",
        ),
    ),
    Dimension.ORGANIZATIONAL_BOUNDARIES: (
        "Reduce Organisational Barriers",
        (
            "Review and streamline standard operating procedures",
            "Create more cross-functional collaboration opportunities",
            "Reduce bureaucratic barriers to innovation",
        ),
    ),
}


@dataclass
class NarrativeReport:
    """Report text and where it came from."""

    text: str
    source: Literal["llm", "template"]
    note: str | None = None  # why the template was used


# ---------------------------------------------------------------------------
# Context for the model
# ---------------------------------------------------------------------------


def format_analysis_context(table: SurveyTable, result: AnalysisResult) -> str:
    """Raw answers as tab-separated text followed by the computed statistics."""
    lines = ["\t".join(table.question_columns)]
    lines.extend("\t".join(cell or "" for cell in row) for row in table.rows)

    report = AnalysisReport.from_result(result)
    context = report.model_dump(
        include={
            "dimension_scores",
            "statistics",
            "reliability",
            "department_breakdown",
            "diagnostics",
        }
    )
    return (
        "\n".join(lines)
        + "\n\nPROCESSED_DATA_CONTEXT:\n"
        + json.dumps(context, indent=2)
    )


# ---------------------------------------------------------------------------
# Template summary
# ---------------------------------------------------------------------------


def _overall_assessment(overall: float) -> str:
    if overall > 4.0:
        return "highly supportive environment for entrepreneurship"
    if overall > 3.5:
        return "moderately supportive environment for entrepreneurship"
    if overall > 2.5:
        return (
            "somewhat supportive environment for entrepreneurship "
            "with significant room for improvement"
        )
    return "challenging environment for entrepreneurship that requires substantial improvement"


def render_summary(result: AnalysisResult) -> str:
    """Markdown summary derived only from the computed statistics."""
    stats = result.statistics
    means = {d: m for d, m in stats.means.items() if m is not None}
    if not means:
        return (
            "# CEAI Survey Analysis Report\n\n"
            "No dimension could be scored: every question column lacked valid answers."
        )

    overall = sum(means.values()) / len(means)
    ranked = sorted(means.items(), key=lambda item: item[1], reverse=True)
    strong = stats.strong_dimensions
    weak = stats.weak_dimensions

    parts: list[str] = ["# CEAI Survey Analysis Report", "", "## Executive Summary", ""]
    summary = (
        f"Across {result.respondent_count} respondent(s), the results indicate a "
        f"**{_overall_assessment(overall)}** (overall mean {overall:.2f})."
    )
    if strong:
        summary += f" Notable strengths include {', '.join(d.label for d in strong)}."
    if weak:
        summary += f" Areas requiring immediate attention include {', '.join(d.label for d in weak)}."
    parts += [summary, "", "## Overall Dimension Averages", ""]

    for dim, score in ranked:
        marker = ""
        if score > STRONG_THRESHOLD:
            marker = " (Strong)"
        elif score < WEAK_THRESHOLD:
            marker = " (Weak)"
        summary_row = stats.summaries[dim]
        parts.append(
            f"* **{dim.label}**: {score:.2f}{marker} "
            f"(median {summary_row.median:.2f}, SD {summary_row.std_dev:.2f})"
        )

    parts += ["", "## Reliability Analysis", ""]
    for dim, rel in result.reliability.items():
        if rel.alpha is None:
            parts.append(f"* **{dim.label}**: insufficient data ({rel.reason})")
        else:
            parts.append(f"* **{dim.label}**: {rel.alpha:.3f} ({interpret_alpha(rel.alpha)})")

    parts += ["", "## Strengths and Weaknesses", "", "### Strengths"]
    if strong:
        parts += [
            f"* **{d.label}** stands out as a strength with a score of {means[d]:.2f}"
            for d in strong
        ]
    else:
        top, top_score = ranked[0]
        parts.append(
            f"* **{top.label}** is the highest scoring dimension at {top_score:.2f}, "
            f"though it doesn't reach the threshold for a strong dimension (>{STRONG_THRESHOLD})"
        )

    parts += ["", "### Areas for Improvement"]
    if weak:
        parts += [
            f"* **{d.label}** is a critical area for improvement with a low score of {means[d]:.2f}"
            for d in weak
        ]
    else:
        bottom, bottom_score = ranked[-1]
        parts.append(
            f"* **{bottom.label}** is the lowest scoring dimension at {bottom_score:.2f}, "
            f"though it doesn't fall below the threshold for a weak dimension (<{WEAK_THRESHOLD})"
        )

    if result.department_breakdown:
        parts += ["", "## Department Comparison", ""]
        for name, group in result.department_breakdown.items():
            scored = [m for m in group.means.values() if m is not None]
            avg = sum(scored) / len(scored)
            parts.append(f"* **{name}** ({group.respondents} respondent(s)): mean {avg:.2f}")

    parts += ["", "## Recommendations", "", _recommendations(ranked, strong)]
    return "\n".join(parts) + "\n"


def _recommendations(
    ranked: list[tuple[Dimension, float]], strong: list[Dimension]
) -> str:
    """Advice for the three lowest dimensions, plus one to keep the top strength."""
    items: list[tuple[str, tuple[str, ...]]] = [
        _RECOMMENDATIONS[dim] for dim, _ in ranked[-3:]
    ]
    if strong:
        label = strong[0].label
        items.append((
            f"Maintain Strength in {label}",
            (
                f"Continue practices that have led to high scores in {label}",
                "Document and share successful strategies across the organisation",
                "Use this dimension as a model for improving other areas",
            ),
        ))
    blocks = []
    for n, (title, bullets) in enumerate(items, start=1):
        body = "\n".join(f"   * {b}" for b in bullets)
        blocks.append(f"{n}. **{title}**\n{body}")
    return "\n\n".join(blocks)


# ---------------------------------------------------------------------------
# LLM report with fallback
# ---------------------------------------------------------------------------


async def generate_report(
    table: SurveyTable,
    result: AnalysisResult,
    settings: CeaiSettings,
    client: object | None = None,
) -> NarrativeReport:
    """Ask the configured LLM for a report; fall back to :func:`render_summary`.

    *client* defaults to a new :class:`~ceai.llm.client.LLMClient`; tests pass
    a stub.  The call is bounded by ``settings.llm_timeout_seconds``.
    """
    from ceai.llm.client import LLMClient
    from ceai.llm.prompts import get_prompt

    prompt = get_prompt("ceai-report")
    user_prompt = prompt.render(survey_data=format_analysis_context(table, result))

    try:
        llm = client if client is not None else LLMClient(settings)
        text = await asyncio.wait_for(
            llm.generate(prompt.system, user_prompt),  # type: ignore[attr-defined]
            timeout=settings.llm_timeout_seconds,
        )
    except ExternalServiceError as exc:
        logger.warning("LLM report failed, using template summary: %s", exc)
        return NarrativeReport(
            text=render_summary(result),
            source="template",
            note=f"Generated using local analysis due to API error: {exc}",
        )
    except asyncio.TimeoutError:
        logger.warning(
            "LLM report timed out after %.0fs, using template summary",
            settings.llm_timeout_seconds,
        )
        return NarrativeReport(
            text=render_summary(result),
            source="template",
            note="Generated using local analysis because the LLM request timed out",
        )

    return NarrativeReport(text=text, source="llm")
