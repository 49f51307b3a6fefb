"""Analysis domain models — the output contract of one engine run.

Everything here is produced and consumed within a single analyze() call.
Models serialize with camelCase aliases because the consuming
visualization reads ``globalRiskScore``, ``riskMatrix`` and friends.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swan_engine.domain.enums import HypothesisTier, Trend
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal

_OUTPUT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class RiskMatrix(BaseModel):
    probability: float = Field(..., ge=0.0, le=1.0)
    impact: float = Field(..., ge=0.0, le=1.0)

    model_config = _OUTPUT_CONFIG


class Hypothesis(BaseModel):
    """Qualitative reading of the global risk state.

    The three tiers are fixed texts selected by score thresholds; only
    the reasoning lines and the numeric fields vary between runs.
    """

    tier: HypothesisTier
    title: str
    summary: str
    commentary: str
    reasoning: list[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=0.95)
    risk_matrix: RiskMatrix

    model_config = _OUTPUT_CONFIG


class MartingaleMetrics(BaseModel):
    accumulation_rate: float
    decay_factor: float
    compounded_risk: float = Field(..., description="Mirrors global_risk_score")

    model_config = _OUTPUT_CONFIG


class HighRiskRegion(BaseModel):
    name: str
    lat: float
    lon: float
    risk_score: float = Field(..., description="severity × probability of the source signal")
    primary_threat: str

    model_config = _OUTPUT_CONFIG


class Analysis(BaseModel):
    """Final ranked, clustered and narrated assessment."""

    signals: list[RiskSignal]
    narratives: list[RiskNarrative]
    global_risk_score: float = Field(..., ge=0.0, le=100.0)
    trend_direction: Trend
    hypothesis: Hypothesis
    martingale_metrics: MartingaleMetrics
    high_risk_regions: list[HighRiskRegion]
    correlation_matrix: list[list[float]]
    dimension_labels: list[str]
    timestamp: datetime

    model_config = _OUTPUT_CONFIG
