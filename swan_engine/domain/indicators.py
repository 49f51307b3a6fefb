"""Rule indicators — the explainability payload attached to each signal.

Each rule firing records the intermediate values it computed.  Instead of
a free-form dict, every rule has its own model tagged by ``rule``, and
RiskSignal.indicators is the discriminated union of all seven.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Indicators(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MilitaryIndicators(_Indicators):
    rule: Literal["military_convergence"] = "military_convergence"
    vessels: int
    flights: int
    predictions: int = Field(..., description="Prediction markets priced above 0.6")
    mil_activity: int


class MarketIndicators(_Indicators):
    rule: Literal["market_fracture"] = "market_fracture"
    market_change: float = Field(..., description="Mean absolute market move (%)")
    sector_divergence: int
    economic_risk: float
    vix: Optional[float] = None


class SentimentIndicators(_Indicators):
    rule: Literal["sentiment_shock"] = "sentiment_shock"
    oil: bool
    gold: bool
    crypto_vol: int


class UnrestIndicators(_Indicators):
    rule: Literal["social_unrest"] = "social_unrest"
    martingale_risk: float
    count: int


class EnvironmentalIndicators(_Indicators):
    rule: Literal["environmental_stress"] = "environmental_stress"
    max_magnitude: float
    weather_alerts: int
    earthquakes: int


class InfrastructureIndicators(_Indicators):
    rule: Literal["infrastructure_disruption"] = "infrastructure_disruption"
    count: int


class AlertDensityIndicators(_Indicators):
    rule: Literal["alert_density"] = "alert_density"
    total_alerts: float


RuleIndicators = Annotated[
    Union[
        MilitaryIndicators,
        MarketIndicators,
        SentimentIndicators,
        UnrestIndicators,
        EnvironmentalIndicators,
        InfrastructureIndicators,
        AlertDensityIndicators,
    ],
    Field(discriminator="rule"),
]
