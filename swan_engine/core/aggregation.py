"""Risk aggregation and hypothesis synthesis.

Turns scored signals and narratives into the global assessment:

    global score   mean over narratives of aggregate_risk × (1 + momentum),
                   capped at 100; 0 without narratives
    trend          escalating above 40, else stable
    hypothesis     one of three fixed tiers (> 75, > 40, else)
    confidence     min(0.4 + score / 150, 0.95)
    regions        located signals with severity > 30, by severity × probability

The correlation matrix is a placeholder: a 6×6 grid of independent
uniform draws scaled by score / 100, kept because the cube visualization
expects that shape.  It does not measure correlation between dimensions.
"""

from __future__ import annotations

import random

from swan_engine.domain.analysis import (
    HighRiskRegion,
    Hypothesis,
    MartingaleMetrics,
    RiskMatrix,
)
from swan_engine.domain.enums import HypothesisTier, RiskBand, Trend
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal

DIMENSION_LABELS: tuple[str, ...] = ("Econ", "Seis", "Soc", "Cyber", "Geo", "Mil")

ESCALATION_THRESHOLD = 40.0
COLLAPSE_THRESHOLD = 75.0
REGION_SEVERITY_FLOOR = 30.0
IMPACT_FLOOR = 50.0
MAX_CONFIDENCE = 0.95
DECAY_FACTOR = 0.95

BASELINE_REASONING = "Baseline volatility observed in all dimensions."

_TIER_TEXT: dict[HypothesisTier, tuple[str, str, str]] = {
    HypothesisTier.SYSTEMIC_COLLAPSE: (
        "SYSTEMIC COLLAPSE CONVERGENCE",
        'Multiple independent tail events are correlating. This is a "Perfect Storm" signature.',
        "Standard predictive models are currently invalid as cross-dimensional narratives begin to merge.",
    ),
    HypothesisTier.STRUCTURAL_FRAGILITY: (
        "STRUCTURAL FRAGILITY ALERT",
        "The global system has entered a state of negative convexity.",
        "The system is highly sensitive to further perturbations.",
    ),
    HypothesisTier.STOCHASTIC_STABILITY: (
        "STOCHASTIC STABILITY",
        "Current indicators are within expected variance bounds.",
        "The system shows resilience. While minor anomalies exist, they lack cross-dimensional correlation.",
    ),
}


def rank_signals(signals: list[RiskSignal]) -> list[RiskSignal]:
    """Signals by severity × probability × (1 + centrality), highest first."""
    return sorted(signals, key=lambda s: s.rank_score, reverse=True)


def global_risk_score(narratives: list[RiskNarrative]) -> float:
    if not narratives:
        return 0.0
    total = sum(n.aggregate_risk * (1.0 + n.momentum) for n in narratives)
    return min(total / len(narratives), 100.0)


def trend_direction(score: float) -> Trend:
    # DEESCALATING has no trigger on this path; it needs a previous score to compare against
    return Trend.ESCALATING if score > ESCALATION_THRESHOLD else Trend.STABLE


def hypothesis_tier(score: float) -> HypothesisTier:
    if score > COLLAPSE_THRESHOLD:
        return HypothesisTier.SYSTEMIC_COLLAPSE
    if score > ESCALATION_THRESHOLD:
        return HypothesisTier.STRUCTURAL_FRAGILITY
    return HypothesisTier.STOCHASTIC_STABILITY


def synthesize_hypothesis(
    signals: list[RiskSignal],
    narratives: list[RiskNarrative],
    score: float,
) -> Hypothesis:
    """Build the qualitative hypothesis for a global score.

    *narratives* must already be sorted; the first one is reported as the
    primary risk narrative.
    """
    tier = hypothesis_tier(score)
    title, summary, commentary = _TIER_TEXT[tier]

    reasoning = [BASELINE_REASONING]
    if narratives:
        top = narratives[0]
        reasoning.append(
            f"Primary risk narrative: {top.title} (Aggregate Risk: {top.aggregate_risk:.1f})"
        )

    impact = max([s.impact for s in signals] + [IMPACT_FLOOR])
    return Hypothesis(
        tier=tier,
        title=title,
        summary=summary,
        commentary=commentary,
        reasoning=reasoning,
        confidence=min(0.4 + score / 150.0, MAX_CONFIDENCE),
        risk_matrix=RiskMatrix(probability=score / 100.0, impact=impact / 100.0),
    )


def martingale_metrics(narratives: list[RiskNarrative], score: float) -> MartingaleMetrics:
    return MartingaleMetrics(
        accumulation_rate=1.0 + len(narratives) * 0.1,
        decay_factor=DECAY_FACTOR,
        compounded_risk=score,
    )


def high_risk_regions(signals: list[RiskSignal]) -> list[HighRiskRegion]:
    regions = [
        HighRiskRegion(
            name=s.location.name,
            lat=s.location.lat,
            lon=s.location.lon,
            risk_score=s.expected_risk,
            primary_threat=s.signal_type.value,
        )
        for s in signals
        if s.location is not None and s.severity > REGION_SEVERITY_FLOOR
    ]
    return sorted(regions, key=lambda r: r.risk_score, reverse=True)


def correlation_matrix(score: float, rng: random.Random) -> list[list[float]]:
    """Placeholder 6×6 fill; see module docstring."""
    size = len(DIMENSION_LABELS)
    scale = score / 100.0
    return [[rng.random() * scale for _ in range(size)] for _ in range(size)]


def risk_band(score: float) -> RiskBand:
    """Display band used by the panel for any 0–100 score."""
    if score >= 75:
        return RiskBand.CRITICAL
    if score >= 50:
        return RiskBand.HIGH
    if score >= 25:
        return RiskBand.MEDIUM
    return RiskBand.LOW
