"""Social unrest rule — Martingale accumulation over protest fatalities."""

from __future__ import annotations

from datetime import datetime

from swan_engine.core.primitives import martingale_risk
from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import UnrestIndicators
from swan_engine.domain.signal import Location, RiskSignal
from swan_engine.domain.snapshot import DataSnapshot, ProtestEvent
from swan_engine.rules.base import SignalRule

FATALITY_WEIGHT = 5
FIRING_THRESHOLD = 20.0


def _deadliest_location(protests: list[ProtestEvent]) -> Location | None:
    located = [
        p for p in protests
        if p.lat is not None and p.lon is not None and p.place_name
    ]
    if not located:
        return None
    worst = max(located, key=lambda p: p.fatalities)
    return Location(lat=worst.lat, lon=worst.lon, name=worst.place_name)


class SocialUnrestRule(SignalRule):
    """Fires when compounded protest fatalities exceed the unrest threshold.

    Protests are taken in snapshot order, the last one being the most
    recent.  Each contributes fatalities × 5 to the Martingale series.
    """

    def __init__(self, decay: float = 0.95) -> None:
        self._decay = decay

    @property
    def name(self) -> str:
        return "social_unrest"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        protests = snapshot.protests
        if not protests:
            return None

        series = [p.fatalities * FATALITY_WEIGHT for p in protests]
        risk = martingale_risk(series, decay=self._decay)
        if risk <= FIRING_THRESHOLD:
            return None

        return RiskSignal(
            signal_id="social-unrest",
            signal_type=SignalType.SOCIAL,
            severity=risk,
            probability=0.55,
            impact=75,
            description=f"Social unrest escalation detected across {len(protests)} events.",
            location=_deadliest_location(protests),
            indicators=UnrestIndicators(martingale_risk=risk, count=len(protests)),
            timestamp=now,
        )
