"""Rule Registry — holds the extraction rules and runs them in order.

The registry keeps rules in registration order.  extract() evaluates
every rule against the same snapshot and "now", collecting the signals
of the rules that fire.  Per-rule counters are kept for the health
endpoint.
"""

from __future__ import annotations

import logging
from datetime import datetime

from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.rules.base import SignalRule
from swan_engine.rules.geopolitical import AlertDensityRule, MilitaryConvergenceRule
from swan_engine.rules.hazards import EnvironmentalStressRule, InfrastructureDisruptionRule
from swan_engine.rules.markets import MarketFractureRule, SentimentShockRule
from swan_engine.rules.social import SocialUnrestRule

logger = logging.getLogger(__name__)


class RuleStats:
    """Per-rule evaluation statistics for observability."""

    __slots__ = ("rule_name", "evaluated_count", "fired_count")

    def __init__(self, rule_name: str) -> None:
        self.rule_name = rule_name
        self.evaluated_count: int = 0
        self.fired_count: int = 0

    def to_dict(self) -> dict:
        return {
            "rule_name": self.rule_name,
            "evaluated_count": self.evaluated_count,
            "fired_count": self.fired_count,
        }


class DuplicateRuleError(Exception):
    """Raised when a rule name is registered twice."""


class RuleRegistry:
    """Ordered registry of signal rules with stats tracking.

    Usage:
        registry = RuleRegistry()
        registry.register(MilitaryConvergenceRule())
        registry.register(MarketFractureRule())

        signals = registry.extract(candidates, now)
    """

    def __init__(self) -> None:
        self._rules: list[SignalRule] = []
        self._stats: dict[str, RuleStats] = {}

    def register(self, rule: SignalRule) -> None:
        """Append a rule; names must be unique."""
        if rule.name in self._stats:
            raise DuplicateRuleError(f"Rule '{rule.name}' is already registered")
        self._rules.append(rule)
        self._stats[rule.name] = RuleStats(rule.name)
        logger.info("Registered rule: %s", rule.name)

    def extract(self, snapshot: DataSnapshot, now: datetime) -> list[RiskSignal]:
        """Evaluate every rule and return fired signals in registration order."""
        signals: list[RiskSignal] = []
        for rule in self._rules:
            stats = self._stats[rule.name]
            stats.evaluated_count += 1
            signal = rule.evaluate(snapshot, now)
            if signal is None:
                logger.debug("Rule '%s' did not fire", rule.name)
                continue
            stats.fired_count += 1
            logger.debug(
                "Rule '%s' fired → %s (severity=%.1f, probability=%.2f)",
                rule.name, signal.signal_id, signal.severity, signal.probability,
            )
            signals.append(signal)
        return signals

    @property
    def rule_names(self) -> list[str]:
        """Registered rule names in registration order."""
        return [r.name for r in self._rules]

    @property
    def stats(self) -> list[dict]:
        return [s.to_dict() for s in self._stats.values()]

    @property
    def total_fired(self) -> int:
        return sum(s.fired_count for s in self._stats.values())


def default_registry(martingale_decay: float = 0.95) -> RuleRegistry:
    """Registry with the seven standard rules in their canonical order."""
    registry = RuleRegistry()
    registry.register(MilitaryConvergenceRule())
    registry.register(MarketFractureRule())
    registry.register(SentimentShockRule())
    registry.register(SocialUnrestRule(decay=martingale_decay))
    registry.register(EnvironmentalStressRule())
    registry.register(InfrastructureDisruptionRule())
    registry.register(AlertDensityRule())
    return registry
