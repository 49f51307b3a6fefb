"""Centrality engine — systemic influence of each signal.

A personalised authority-score variant of PageRank over the implicit
graph where two signals are linked when they share a type or a cluster
id.  Runs after clustering.

    w₀(j)      = 1 / N
    next(j)    = (1 - d) / N + Σ_{i≠j, related(i,j)} d · w(i) · severity(i) / 100
    w(j)       = next(j) / Σ next

repeated for a fixed number of iterations.  The final vector sums to 1
and is written to each signal's ``centrality``.

Cost is O(iterations × N²).  N is a handful of signals per analysis;
a large signal population needs a sparse-adjacency variant instead of
more iterations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from swan_engine.domain.signal import RiskSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CentralityConfig:
    """Propagation parameters."""

    iterations: int = 5
    damping: float = 0.85


def _linked(a: RiskSignal, b: RiskSignal) -> bool:
    return a.signal_type == b.signal_type or a.cluster_id == b.cluster_id


def propagate(signals: list[RiskSignal], config: CentralityConfig | None = None) -> list[float]:
    """Return the centrality vector for *signals* without assigning it."""
    config = config or CentralityConfig()
    n = len(signals)
    if n == 0:
        return []

    damping = config.damping
    weights = [1.0 / n] * n
    for _ in range(config.iterations):
        next_weights = [(1.0 - damping) / n] * n
        for i, source in enumerate(signals):
            push = damping * weights[i] * (source.severity / 100.0)
            for j, target in enumerate(signals):
                if i != j and _linked(source, target):
                    next_weights[j] += push
        total = sum(next_weights)
        if total > 0:
            weights = [w / total for w in next_weights]
    return weights


def compute_centrality(signals: list[RiskSignal], config: CentralityConfig | None = None) -> None:
    """Assign ``centrality`` on every signal in place."""
    weights = propagate(signals, config)
    for signal, weight in zip(signals, weights):
        # Float renormalisation can land a hair above 1.0 for a single signal
        signal.centrality = min(weight, 1.0)
    if weights:
        logger.debug(
            "Centrality over %d signals: max=%.4f min=%.4f",
            len(weights), max(weights), min(weights),
        )
