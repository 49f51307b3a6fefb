"""Geopolitical rules: kinetic/military convergence and news alert density."""

from __future__ import annotations

from datetime import datetime

from swan_engine.core.primitives import bayesian_update, clamp
from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import AlertDensityIndicators, MilitaryIndicators
from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.rules.base import SignalRule


class MilitaryConvergenceRule(SignalRule):
    """Military deployments overlapping with stressed prediction markets.

    milActivity = vessels × 2 + flights × 5
    predictionStress = predictions priced above 0.6

    The probability is the one Bayesian update in the rule set: prior 0.1,
    evidence 0.2, likelihood 0.9 when milActivity > 30, else 0.4.
    """

    VESSEL_WEIGHT = 2
    FLIGHT_WEIGHT = 5
    STRESSED_PRICE = 0.6
    STRESS_WEIGHT = 15
    PRIOR = 0.1
    EVIDENCE = 0.2

    @property
    def name(self) -> str:
        return "military_convergence"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        vessels = len(snapshot.vessels)
        flights = len(snapshot.flights)
        mil_activity = vessels * self.VESSEL_WEIGHT + flights * self.FLIGHT_WEIGHT
        stress = sum(1 for p in snapshot.predictions if p.yes_price > self.STRESSED_PRICE)

        if not (mil_activity > 10 or stress > 2):
            return None

        likelihood = 0.9 if mil_activity > 30 else 0.4
        return RiskSignal(
            signal_id="geopolitical-clash",
            signal_type=SignalType.MILITARY,
            severity=min(mil_activity + stress * self.STRESS_WEIGHT, 100),
            probability=clamp(bayesian_update(self.PRIOR, likelihood, self.EVIDENCE), 0.0, 1.0),
            impact=95,
            description=(
                "Kinetic-geopolitical convergence: elevated military deployments "
                "overlap with prediction market stress."
            ),
            indicators=MilitaryIndicators(
                vessels=vessels,
                flights=flights,
                predictions=stress,
                mil_activity=mil_activity,
            ),
            timestamp=now,
        )


class AlertDensityRule(SignalRule):
    """Density of alert keywords across news categories."""

    @property
    def name(self) -> str:
        return "alert_density"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        total = sum(c.alert_count for c in snapshot.alert_counts)
        if total <= 10:
            return None

        return RiskSignal(
            signal_id="narrative-stress",
            signal_type=SignalType.GEOPOLITICAL,
            severity=min(total * 3, 100),
            probability=0.2,
            impact=60,
            description=(
                f"Elevated alert keyword density in global news streams "
                f"({total:g} critical markers)."
            ),
            indicators=AlertDensityIndicators(total_alerts=total),
            timestamp=now,
        )
