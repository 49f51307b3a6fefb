"""Abstract base for signal extraction rules.

A rule reads the candidate snapshot and either emits one RiskSignal or
nothing.

Architectural rules:
    1. Rules must NOT mutate the snapshot.
    2. evaluate() is pure given the snapshot and the supplied "now".
    3. Rules are independent of each other; registration order only
       fixes the order of the emitted signals.
    4. Absent data counts as zero; a rule never raises on a valid snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot


class SignalRule(ABC):
    """Base class for rules turning snapshot data into a typed risk signal."""

    @abstractmethod
    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        """Return a signal if the rule fires on *snapshot*, else None."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable rule name, used for registration and stats."""
        ...
