"""RiskSignal — one detected systemic-risk indicator.

A signal is produced once per rule firing and is immutable afterwards,
with two exceptions that later pipeline stages fill in:

    cluster_id   set by narrative clustering
    centrality   set by the centrality engine

Any other assignment raises AttributeError.  Assignments to the two
deferred fields are validated against their ranges.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import RuleIndicators

_DEFERRED_FIELDS = frozenset({"cluster_id", "centrality"})


# ── Location ─────────────────────────────────────────────────────────────────

class Location(BaseModel):
    """Named point a signal is anchored to."""

    lat: float
    lon: float
    name: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class Correlation(BaseModel):
    """Reference from a signal to a correlated risk dimension."""

    type: str
    correlation: float = Field(..., ge=-1.0, le=1.0)

    model_config = {"frozen": True}


# ── Signal ───────────────────────────────────────────────────────────────────

class RiskSignal(BaseModel):
    """A detected risk indicator emitted by one extraction rule."""

    signal_id: str = Field(..., min_length=1, serialization_alias="id")
    signal_type: SignalType = Field(..., serialization_alias="type")
    severity: float = Field(..., ge=0.0, le=100.0)
    probability: float = Field(..., ge=0.0, le=1.0)
    impact: float = Field(..., ge=0.0, le=100.0)
    centrality: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Relative systemic influence; 0 until the centrality stage runs",
    )
    description: str
    location: Optional[Location] = None
    correlations: list[Correlation] = Field(default_factory=list)
    cluster_id: Optional[str] = Field(
        default=None,
        description="Narrative id; None until clustering runs",
    )
    indicators: RuleIndicators
    timestamp: datetime

    model_config = ConfigDict(
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in _DEFERRED_FIELDS:
            raise AttributeError(f"RiskSignal.{name} is read-only after extraction")
        super().__setattr__(name, value)

    @property
    def rank_score(self) -> float:
        """Final ranking key: severity × probability × (1 + centrality)."""
        return self.severity * self.probability * (1.0 + self.centrality)

    @property
    def expected_risk(self) -> float:
        """severity × probability, the per-signal risk used by narratives and regions."""
        return self.severity * self.probability
