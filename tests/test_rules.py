"""Tests for the seven extraction rules and the rule registry."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from swan_engine.domain.enums import SignalType
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.rules.geopolitical import AlertDensityRule, MilitaryConvergenceRule
from swan_engine.rules.hazards import EnvironmentalStressRule, InfrastructureDisruptionRule
from swan_engine.rules.markets import MarketFractureRule, SentimentShockRule
from swan_engine.rules.registry import DuplicateRuleError, RuleRegistry, default_registry
from swan_engine.rules.social import SocialUnrestRule

from tests.test_snapshot import _snapshot

_NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _vessels(n: int) -> list[dict]:
    return [{"name": f"vessel-{i}"} for i in range(n)]


def _flights(n: int) -> list[dict]:
    return [{"callsign": f"RCH{i}"} for i in range(n)]


# ── Military / geopolitical ──────────────────────────────────────────────────


class TestMilitaryConvergence:
    rule = MilitaryConvergenceRule()

    def test_two_vessels_six_flights(self) -> None:
        snap = _snapshot(vessels=_vessels(2), flights=_flights(6))
        sig = self.rule.evaluate(snap, _NOW)
        assert sig is not None
        assert sig.signal_id == "geopolitical-clash"
        assert sig.signal_type == SignalType.MILITARY
        assert sig.indicators.mil_activity == 34
        assert sig.severity == 34
        assert sig.probability == pytest.approx(0.45)
        assert sig.impact == 95
        assert sig.timestamp == _NOW

    def test_low_activity_uses_weak_likelihood(self) -> None:
        snap = _snapshot(vessels=_vessels(1), flights=_flights(2))  # 12
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.probability == pytest.approx(0.2)

    def test_quiet_theatre_does_not_fire(self) -> None:
        snap = _snapshot(vessels=_vessels(5))  # exactly 10
        assert self.rule.evaluate(snap, _NOW) is None

    def test_prediction_stress_alone_fires(self) -> None:
        snap = _snapshot(predictions=[{"yesPrice": 0.7}, {"yesPrice": 0.8}, {"yesPrice": 0.65}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig is not None
        assert sig.severity == 45
        assert sig.indicators.predictions == 3

    def test_severity_capped(self) -> None:
        snap = _snapshot(flights=_flights(30))
        assert self.rule.evaluate(snap, _NOW).severity == 100


class TestAlertDensity:
    rule = AlertDensityRule()

    def test_fires_above_ten_alerts(self) -> None:
        snap = _snapshot(alertCounts=[{"category": "conflict", "alertCount": 8},
                                      {"category": "cyber", "alertCount": 5}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "narrative-stress"
        assert sig.signal_type == SignalType.GEOPOLITICAL
        assert sig.severity == 39
        assert sig.probability == 0.2
        assert sig.impact == 60

    def test_ten_alerts_do_not_fire(self) -> None:
        snap = _snapshot(alertCounts=[{"alertCount": 10}])
        assert self.rule.evaluate(snap, _NOW) is None


# ── Markets ──────────────────────────────────────────────────────────────────


class TestMarketFracture:
    rule = MarketFractureRule()

    def test_mean_absolute_move_fires(self) -> None:
        snap = _snapshot(markets=[{"change": 2.0}, {"change": -1.0}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "market-fracture"
        assert sig.indicators.market_change == pytest.approx(1.5)
        assert sig.severity == pytest.approx(37.5)
        assert sig.probability == 0.45
        assert sig.impact == 85

    def test_sector_divergence_fires(self) -> None:
        snap = _snapshot(sectors=[{"change": 3.5}, {"change": -4}, {"change": 5}, {"change": 1}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.indicators.sector_divergence == 3
        assert sig.severity == pytest.approx(30.0)

    def test_macro_stress_series(self) -> None:
        snap = _snapshot(economic=[
            {"id": "VIXCLS", "value": 28},
            {"id": "T10Y2Y", "value": -0.3},
            {"id": "UNRATE", "value": 4.4, "change": 0.3},
        ])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.indicators.economic_risk == 45
        assert sig.indicators.vix == 28
        assert sig.severity == 45

    def test_vix_alone_fires(self) -> None:
        snap = _snapshot(economic=[{"id": "VIXCLS", "value": 40}])
        assert self.rule.evaluate(snap, _NOW).severity == 20

    def test_unemployment_rise_alone_is_not_enough(self) -> None:
        snap = _snapshot(economic=[{"id": "UNRATE", "value": 4.4, "change": 0.3}])
        assert self.rule.evaluate(snap, _NOW) is None

    def test_calm_markets_do_not_fire(self) -> None:
        snap = _snapshot(markets=[{"change": 0.8}])
        assert self.rule.evaluate(snap, _NOW) is None


class TestSentimentShock:
    rule = SentimentShockRule()

    def test_oil_spike(self) -> None:
        snap = _snapshot(commodities=[{"symbol": "CL=F", "change": 3.5}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "sentiment-shock"
        assert sig.indicators.oil is True
        assert sig.severity == 60

    def test_gold_spike(self) -> None:
        snap = _snapshot(commodities=[{"symbol": "GC=F", "change": 1.6}])
        assert self.rule.evaluate(snap, _NOW).indicators.gold is True

    def test_crypto_volatility_needs_two_assets(self) -> None:
        one = _snapshot(crypto=[{"symbol": "BTC", "change": -12}])
        assert self.rule.evaluate(one, _NOW) is None
        two = _snapshot(crypto=[{"symbol": "BTC", "change": -12}, {"symbol": "ETH", "change": 15}])
        sig = self.rule.evaluate(two, _NOW)
        assert sig.severity == 70
        assert sig.probability == 0.4
        assert sig.impact == 50

    def test_other_symbols_ignored(self) -> None:
        snap = _snapshot(commodities=[{"symbol": "SI=F", "change": 9}])
        assert self.rule.evaluate(snap, _NOW) is None


# ── Social ───────────────────────────────────────────────────────────────────


class TestSocialUnrest:
    rule = SocialUnrestRule()

    def test_martingale_over_fatalities(self) -> None:
        snap = _snapshot(protests=[
            {"fatalities": 2},
            {"fatalities": 12, "city": "Lagos", "lat": 6.5, "lon": 3.4},
        ])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "social-unrest"
        assert sig.severity == pytest.approx(71.4)
        assert sig.indicators.count == 2
        assert sig.probability == 0.55
        assert sig.impact == 75
        assert sig.location.name == "Lagos"

    def test_below_threshold_does_not_fire(self) -> None:
        snap = _snapshot(protests=[{"fatalities": 4}])  # 20, not above
        assert self.rule.evaluate(snap, _NOW) is None

    def test_no_protests(self) -> None:
        assert self.rule.evaluate(DataSnapshot(), _NOW) is None

    def test_unlocated_protests_leave_signal_unlocated(self) -> None:
        snap = _snapshot(protests=[{"fatalities": 10}])
        assert self.rule.evaluate(snap, _NOW).location is None

    def test_custom_decay(self) -> None:
        snap = _snapshot(protests=[{"fatalities": 4}, {"fatalities": 4}])
        sig = SocialUnrestRule(decay=0.5).evaluate(snap, _NOW)
        assert sig.severity == pytest.approx(30.0)


# ── Hazards ──────────────────────────────────────────────────────────────────


class TestEnvironmentalStress:
    rule = EnvironmentalStressRule()

    def test_strong_quake_fires_with_epicenter(self) -> None:
        snap = _snapshot(earthquakes=[
            {"magnitude": 4.1, "place": "Inland", "lat": 0, "lon": 0},
            {"magnitude": 6.5, "place": "Offshore Honshu", "lat": 38.3, "lon": 142.4},
        ])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "environmental-stress"
        assert sig.severity == pytest.approx(78.0)
        assert sig.location.name == "Offshore Honshu"
        assert sig.indicators.earthquakes == 2

    def test_weather_pile_up_fires(self) -> None:
        snap = _snapshot(weather=[{"event": "Flood"}] * 11)
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.severity == 22
        assert sig.location is None

    def test_moderate_quake_does_not_fire(self) -> None:
        snap = _snapshot(earthquakes=[{"magnitude": 5.0}], weather=[{"event": "Heat"}] * 10)
        assert self.rule.evaluate(snap, _NOW) is None


class TestInfrastructureDisruption:
    rule = InfrastructureDisruptionRule()

    def test_counts_major_and_total(self) -> None:
        snap = _snapshot(outages=[{"severity": "major"}, {"severity": "total"}, {"severity": "partial"}])
        sig = self.rule.evaluate(snap, _NOW)
        assert sig.signal_id == "infrastructure-disruption"
        assert sig.severity == 60
        assert sig.probability == 0.3
        assert sig.impact == 80

    def test_severity_capped(self) -> None:
        snap = _snapshot(outages=[{"severity": "total"}] * 5)
        assert self.rule.evaluate(snap, _NOW).severity == 100

    def test_partial_outages_do_not_fire(self) -> None:
        snap = _snapshot(outages=[{"severity": "partial"}])
        assert self.rule.evaluate(snap, _NOW) is None


# ── Registry ─────────────────────────────────────────────────────────────────


class TestRuleRegistry:
    def test_default_order(self) -> None:
        assert default_registry().rule_names == [
            "military_convergence",
            "market_fracture",
            "sentiment_shock",
            "social_unrest",
            "environmental_stress",
            "infrastructure_disruption",
            "alert_density",
        ]

    def test_duplicate_rule_rejected(self) -> None:
        registry = RuleRegistry()
        registry.register(AlertDensityRule())
        with pytest.raises(DuplicateRuleError):
            registry.register(AlertDensityRule())

    def test_extract_preserves_registration_order(self) -> None:
        registry = RuleRegistry()
        registry.register(InfrastructureDisruptionRule())
        registry.register(MilitaryConvergenceRule())
        snap = _snapshot(outages=[{"severity": "total"}], flights=_flights(3))
        ids = [s.signal_id for s in registry.extract(snap, _NOW)]
        assert ids == ["infrastructure-disruption", "geopolitical-clash"]

    def test_stats_track_evaluations_and_firings(self) -> None:
        registry = default_registry()
        registry.extract(_snapshot(flights=_flights(3)), _NOW)
        registry.extract(DataSnapshot(), _NOW)
        stats = {s["rule_name"]: s for s in registry.stats}
        assert stats["military_convergence"] == {
            "rule_name": "military_convergence", "evaluated_count": 2, "fired_count": 1,
        }
        assert stats["alert_density"]["fired_count"] == 0
        assert registry.total_fired == 1

    def test_empty_snapshot_fires_nothing(self) -> None:
        assert default_registry().extract(DataSnapshot(), _NOW) == []
