"""Numeric primitives shared by the extraction rules."""

from __future__ import annotations

from collections.abc import Sequence

EVIDENCE_FLOOR = 0.001
SHOCK_THRESHOLD = 50.0
SHOCK_MULTIPLIER = 1.2


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def bayesian_update(prior: float, likelihood: float, evidence: float) -> float:
    """Single-step posterior: likelihood × prior / evidence.

    Evidence is floored at 0.001 so a zero never divides.  The result is
    not clamped; callers that need a probability clamp it themselves.
    """
    return (likelihood * prior) / max(evidence, EVIDENCE_FLOOR)


def martingale_risk(values: Sequence[float], decay: float = 0.95) -> float:
    """Compounding risk score over an ordered series, most recent last.

    Walks the series from the most recent value to the oldest with a
    running multiplier starting at 1.  Each value adds value × multiplier
    to the score.  A value above 50 is a shock and multiplies the weight
    of everything older by 1.2; every step then discounts by *decay*.

    >>> round(martingale_risk([10, 60]), 6)
    71.4

    The score is clamped to [0, 100].  An empty series scores 0.
    """
    score = 0.0
    multiplier = 1.0
    for value in reversed(values):
        score += value * multiplier
        if value > SHOCK_THRESHOLD:
            multiplier *= SHOCK_MULTIPLIER
        multiplier *= decay
    return clamp(score, 0.0, 100.0)
