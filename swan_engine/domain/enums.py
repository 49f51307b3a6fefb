"""Controlled enumerations for the swan-engine domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


class SignalType(str, Enum):
    """Risk dimension a detected signal belongs to."""

    GEOPOLITICAL = "geopolitical"
    ECONOMIC = "economic"
    ENVIRONMENTAL = "environmental"
    CYBER = "cyber"
    SOCIAL = "social"
    MILITARY = "military"
    INFRASTRUCTURE = "infrastructure"
    NARRATIVE = "narrative"


class Trend(str, Enum):
    """Direction of the global risk score.

    DEESCALATING is part of the output vocabulary consumed by the panel,
    but the aggregation path never emits it.
    """

    ESCALATING = "escalating"
    STABLE = "stable"
    DEESCALATING = "de-escalating"


class HypothesisTier(str, Enum):
    """Qualitative tier selected from the global risk score."""

    STOCHASTIC_STABILITY = "stochastic_stability"
    STRUCTURAL_FRAGILITY = "structural_fragility"
    SYSTEMIC_COLLAPSE = "systemic_collapse"


class RiskBand(str, Enum):
    """Display band for a 0–100 risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
