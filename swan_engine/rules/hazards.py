"""Hazard rules: seismic/weather stress and infrastructure outages."""

from __future__ import annotations

from datetime import datetime

from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import EnvironmentalIndicators, InfrastructureIndicators
from swan_engine.domain.signal import Location, RiskSignal
from swan_engine.domain.snapshot import DataSnapshot, Earthquake
from swan_engine.rules.base import SignalRule

MAJOR_OUTAGE_SEVERITIES = frozenset({"total", "major"})


def _epicenter(quake: Earthquake) -> Location | None:
    if quake.lat is None or quake.lon is None or not quake.place:
        return None
    return Location(lat=quake.lat, lon=quake.lon, name=quake.place)


class EnvironmentalStressRule(SignalRule):
    """Strong earthquakes or a pile-up of severe weather alerts.

    The signal is anchored at the strongest earthquake when that record
    carries coordinates and a place name.
    """

    @property
    def name(self) -> str:
        return "environmental_stress"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        strongest = max(snapshot.earthquakes, key=lambda e: e.magnitude, default=None)
        max_magnitude = strongest.magnitude if strongest is not None else 0.0
        weather_alerts = len(snapshot.weather)

        if not (max_magnitude > 5.0 or weather_alerts > 10):
            return None

        return RiskSignal(
            signal_id="environmental-stress",
            signal_type=SignalType.ENVIRONMENTAL,
            severity=min(max_magnitude * 12 + weather_alerts * 2, 100),
            probability=0.4,
            impact=70,
            description=(
                f"Natural system stress: {len(snapshot.earthquakes)} seismic events and "
                f"{weather_alerts} severe weather alerts active."
            ),
            location=_epicenter(strongest) if strongest is not None else None,
            indicators=EnvironmentalIndicators(
                max_magnitude=max_magnitude,
                weather_alerts=weather_alerts,
                earthquakes=len(snapshot.earthquakes),
            ),
            timestamp=now,
        )


class InfrastructureDisruptionRule(SignalRule):
    """Total or major internet outages."""

    @property
    def name(self) -> str:
        return "infrastructure_disruption"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        count = sum(1 for o in snapshot.outages if o.severity in MAJOR_OUTAGE_SEVERITIES)
        if count == 0:
            return None

        return RiskSignal(
            signal_id="infrastructure-disruption",
            signal_type=SignalType.INFRASTRUCTURE,
            severity=min(count * 30, 100),
            probability=0.3,
            impact=80,
            description=f"Critical infrastructure disruption: {count} major outages detected.",
            indicators=InfrastructureIndicators(count=count),
            timestamp=now,
        )
