"""Tests for the RiskSignal and RiskNarrative models."""

from datetime import datetime, timedelta, timezone

import pytest

from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import InfrastructureIndicators, MilitaryIndicators
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import Location, RiskSignal

_BASE = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _signal(
    signal_id: str = "sig-a",
    signal_type: SignalType = SignalType.ECONOMIC,
    severity: float = 50.0,
    probability: float = 0.5,
    location: Location | None = None,
    offset: timedelta = timedelta(0),
    **kw,
) -> RiskSignal:
    """Build a valid signal, with optional overrides."""
    return RiskSignal(
        signal_id=signal_id,
        signal_type=signal_type,
        severity=severity,
        probability=probability,
        impact=kw.pop("impact", 60.0),
        description=kw.pop("description", "test signal"),
        location=location,
        indicators=kw.pop("indicators", InfrastructureIndicators(count=1)),
        timestamp=_BASE + offset,
        **kw,
    )


class TestSignalValidation:
    def test_valid_signal_defaults(self) -> None:
        sig = _signal()
        assert sig.centrality == 0.0
        assert sig.cluster_id is None
        assert sig.correlations == []

    def test_severity_out_of_range_rejected(self) -> None:
        with pytest.raises(Exception):
            _signal(severity=120.0)

    def test_probability_out_of_range_rejected(self) -> None:
        with pytest.raises(Exception):
            _signal(probability=1.2)

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(Exception):
            _signal(signal_type="volcanic")

    def test_naive_timestamp_gets_utc(self) -> None:
        sig = RiskSignal(
            signal_id="naive",
            signal_type=SignalType.SOCIAL,
            severity=10,
            probability=0.1,
            impact=10,
            description="naive",
            indicators=InfrastructureIndicators(count=1),
            timestamp=datetime(2026, 1, 1, 12, 0, 0),
        )
        assert sig.timestamp.tzinfo is not None

    def test_indicators_parsed_by_rule_tag(self) -> None:
        sig = _signal(indicators={"rule": "military_convergence", "vessels": 1,
                                  "flights": 2, "predictions": 0, "mil_activity": 12})
        assert isinstance(sig.indicators, MilitaryIndicators)
        assert sig.indicators.mil_activity == 12

    def test_rank_score(self) -> None:
        sig = _signal(severity=40.0, probability=0.5)
        sig.centrality = 0.5
        assert sig.rank_score == pytest.approx(30.0)
        assert sig.expected_risk == pytest.approx(20.0)


class TestSignalMutability:
    def test_core_fields_are_read_only(self) -> None:
        sig = _signal()
        with pytest.raises(AttributeError):
            sig.severity = 10.0
        with pytest.raises(AttributeError):
            sig.description = "changed"

    def test_deferred_fields_can_be_set(self) -> None:
        sig = _signal()
        sig.cluster_id = "narrative-0"
        sig.centrality = 0.25
        assert sig.cluster_id == "narrative-0"
        assert sig.centrality == 0.25

    def test_centrality_assignment_is_validated(self) -> None:
        sig = _signal()
        with pytest.raises(Exception):
            sig.centrality = 1.5


class TestSignalSerialization:
    def test_output_uses_consumer_field_names(self) -> None:
        sig = _signal(location=Location(lat=1.0, lon=2.0, name="Port"))
        sig.cluster_id = "narrative-0"
        data = sig.model_dump(mode="json", by_alias=True)
        assert data["id"] == "sig-a"
        assert data["type"] == "economic"
        assert data["clusterId"] == "narrative-0"
        assert data["indicators"]["rule"] == "infrastructure_disruption"
        assert data["location"] == {"lat": 1.0, "lon": 2.0, "name": "Port"}


class TestRiskNarrative:
    def test_from_members_aggregates(self) -> None:
        a = _signal("a", severity=80.0, probability=0.5)
        b = _signal("b", signal_type=SignalType.SOCIAL, severity=20.0, probability=1.0)
        narrative = RiskNarrative.from_members("narrative-0", [a, b], "title")
        assert narrative.aggregate_risk == pytest.approx(30.0)
        assert narrative.momentum == pytest.approx(2 * 0.30)
        assert narrative.primary_dimension == SignalType.ECONOMIC
        assert narrative.signal_ids == ["a", "b"]

    def test_members_are_shared_not_copied(self) -> None:
        a = _signal("a")
        narrative = RiskNarrative.from_members("narrative-0", [a], "title")
        assert narrative.signals[0] is a
        a.centrality = 0.7
        assert narrative.signals[0].centrality == 0.7

    def test_empty_narrative_rejected(self) -> None:
        with pytest.raises(Exception):
            RiskNarrative(
                narrative_id="narrative-0",
                title="empty",
                signals=[],
                aggregate_risk=0.0,
                momentum=0.0,
                primary_dimension=SignalType.ECONOMIC,
            )
