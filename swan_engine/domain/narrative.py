"""RiskNarrative — a community of related signals.

Narratives hold references to the very RiskSignal objects produced by
extraction; they never copy them.  A narrative is built once per
clustering pass and is not modified afterwards.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swan_engine.domain.enums import SignalType
from swan_engine.domain.signal import RiskSignal


class RiskNarrative(BaseModel):
    narrative_id: str = Field(..., serialization_alias="id")
    title: str
    signals: list[RiskSignal] = Field(..., min_length=1)
    aggregate_risk: float = Field(..., description="Mean of severity × probability over members")
    momentum: float = Field(..., description="member_count × aggregate_risk / 100")
    primary_dimension: SignalType

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_members(
        cls,
        narrative_id: str,
        members: list[RiskSignal],
        title: str,
    ) -> RiskNarrative:
        """Derive aggregate metrics from *members*; the first member is the anchor."""
        aggregate = sum(s.expected_risk for s in members) / len(members)
        return cls(
            narrative_id=narrative_id,
            title=title,
            signals=members,
            aggregate_risk=aggregate,
            momentum=len(members) * (aggregate / 100.0),
            primary_dimension=members[0].signal_type,
        )

    @property
    def signal_ids(self) -> list[str]:
        return [s.signal_id for s in self.signals]
