"""AnalysisFormatter — human-readable reports for an Analysis.

format_plain() is deterministic and always available; the API uses it.
format() optionally asks an LLM to rephrase the same report into prose.
The LLM sees only the plain report, so it cannot add facts the engine
did not produce, and any LLM failure falls back to the plain report.

Usage:
    formatter = AnalysisFormatter(llm_factory)
    text = formatter.format(analysis)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable

from swan_engine.config import settings
from swan_engine.core.aggregation import risk_band
from swan_engine.domain.analysis import Analysis

logger = logging.getLogger(__name__)

LLMFactory = Callable[[], Any]

TOP_SIGNALS = 5

_FORMAT_PROMPT = """You are a risk briefing editor.  Rephrase the following
systemic-risk report into a short briefing for a non-technical reader.

STRICT RULES:
- Use ONLY the information in the report
- Do NOT add events, numbers, places or forecasts that are not present
- Keep the hypothesis title verbatim
- Keep tone neutral and factual
- Use short paragraphs

Report:
{report}

Produce 2-5 paragraphs.  Start with the global score and trend."""


def gemini_llm_factory():
    """Create a Gemini chat model from environment config."""
    from langchain_google_genai import ChatGoogleGenerativeAI

    api_key = os.environ.get("GOOGLE_API_KEY") or os.environ.get("SWAN_GEMINI_API_KEY")
    if not api_key:
        raise RuntimeError(
            "Gemini API key not found. Set GOOGLE_API_KEY or SWAN_GEMINI_API_KEY "
            "in your environment variables."
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=api_key,
        temperature=settings.gemini_temperature,
        max_output_tokens=settings.gemini_max_output_tokens,
    )


class AnalysisFormatter:
    """Plain-text report builder with optional LLM phrasing."""

    def __init__(self, llm_factory: LLMFactory | None = None) -> None:
        self._llm_factory = llm_factory or gemini_llm_factory

    def format(self, analysis: Analysis) -> str:
        """Rephrase the report through the LLM, or return it plain on failure."""
        report = self.format_plain(analysis)
        try:
            llm = self._llm_factory()
            response = llm.invoke(_FORMAT_PROMPT.format(report=report))
        except Exception as exc:
            logger.warning("LLM formatting failed: %s — using plain report", exc)
            return report
        text = response.content if hasattr(response, "content") else str(response)
        return text.strip() or report

    @staticmethod
    def format_plain(analysis: Analysis) -> str:
        """Deterministic report suitable for logs, APIs, or debugging."""
        score = analysis.global_risk_score
        hypothesis = analysis.hypothesis

        lines = ["Systemic risk assessment"]
        lines.append("=" * 50)
        lines.append(f"Global risk: {score:.0f} ({risk_band(score).value.upper()})")
        lines.append(f"Trend: {analysis.trend_direction.value.upper()}")
        lines.append(f"Confidence: {hypothesis.confidence * 100:.1f}%")
        lines.append("")

        lines.append(f"--- {hypothesis.title} ---")
        lines.append(hypothesis.summary)
        lines.append(hypothesis.commentary)
        for line in hypothesis.reasoning:
            lines.append(f"  • {line}")
        lines.append("")

        metrics = analysis.martingale_metrics
        lines.append(
            f"Accumulation {metrics.accumulation_rate:.2f}x | "
            f"decay {metrics.decay_factor:.2f} | "
            f"compounded {metrics.compounded_risk:.0f}"
        )
        lines.append("")

        lines.append(f"--- Narratives ({len(analysis.narratives)} clusters) ---")
        for narrative in analysis.narratives:
            lines.append(
                f"  • {narrative.title}: risk {narrative.aggregate_risk:.1f}, "
                f"velocity {narrative.momentum:.1f}x, {len(narrative.signals)} signals"
            )
        lines.append("")

        lines.append(f"--- Signals ({len(analysis.signals)} detected) ---")
        for signal in analysis.signals[:TOP_SIGNALS]:
            lines.append(
                f"  • [{signal.signal_type.value.upper()}] {signal.expected_risk:.0f} "
                f"centrality {signal.centrality * 100:.0f}%: {signal.description}"
            )

        if analysis.high_risk_regions:
            lines.append("")
            lines.append("--- High-risk regions ---")
            for region in analysis.high_risk_regions:
                lines.append(
                    f"  • {region.name} ({region.lat:.1f}, {region.lon:.1f}): "
                    f"{region.risk_score:.0f} {region.primary_threat}"
                )

        return "\n".join(lines)
