"""Narrative clustering — grouping signals into risk narratives.

Two signals are related when they share a type, share a named location,
or were observed within the clustering window of each other.  A
ClusteringStrategy turns that predicate into a partition; swap
implementations to change grouping without touching the engine.

GreedyClustering (default):
    Single pass in extraction order.  Each still-unassigned signal becomes
    an anchor and claims every unassigned signal related to *it*.  Signals
    are only compared with the anchor, so the partition depends on input
    order.  Downstream consumers rely on this exact grouping.

UnionFindClustering:
    Connected components of the same predicate.  Order-independent
    membership; groups are numbered by their first member.

Both strategies stamp ``cluster_id`` on every signal, so every signal
ends up in exactly one narrative (unrelated signals form singletons).
Narratives are returned sorted by aggregate risk, highest first.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Protocol

from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(hours=1)


def are_related(a: RiskSignal, b: RiskSignal, window: timedelta = DEFAULT_WINDOW) -> bool:
    """Adjacency predicate shared by all strategies."""
    if a.signal_type == b.signal_type:
        return True
    if a.location is not None and b.location is not None and a.location.name == b.location.name:
        return True
    return abs(a.timestamp - b.timestamp) < window


def narrative_title(members: list[RiskSignal]) -> str:
    types = list(dict.fromkeys(s.signal_type.value for s in members))
    locations = list(dict.fromkeys(s.location.name for s in members if s.location is not None))
    if locations:
        return f"{types[0].upper()} instability in {locations[0]}"
    return f"Coordinated {'/'.join(types)} volatility"


def build_narratives(groups: list[list[RiskSignal]]) -> list[RiskNarrative]:
    """Assign cluster ids to *groups* and wrap them as sorted narratives."""
    narratives: list[RiskNarrative] = []
    for index, members in enumerate(groups):
        narrative_id = f"narrative-{index}"
        for signal in members:
            signal.cluster_id = narrative_id
        narratives.append(
            RiskNarrative.from_members(narrative_id, members, narrative_title(members))
        )
    return sorted(narratives, key=lambda n: n.aggregate_risk, reverse=True)


class ClusteringStrategy(Protocol):
    """Protocol for signal-to-narrative grouping."""

    def cluster(self, signals: list[RiskSignal]) -> list[RiskNarrative]:
        """Partition *signals* into narratives, stamping cluster ids."""
        ...


class GreedyClustering:
    """Anchor-based single pass; see module docstring."""

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self._window = window

    def cluster(self, signals: list[RiskSignal]) -> list[RiskNarrative]:
        assigned: set[int] = set()
        groups: list[list[RiskSignal]] = []

        for anchor_index, anchor in enumerate(signals):
            if anchor_index in assigned:
                continue
            members = []
            for index, candidate in enumerate(signals):
                if index in assigned:
                    continue
                if index == anchor_index or are_related(anchor, candidate, self._window):
                    members.append(candidate)
                    assigned.add(index)
            groups.append(members)

        narratives = build_narratives(groups)
        logger.debug("Greedy clustering: %d signals → %d narratives", len(signals), len(narratives))
        return narratives


class UnionFindClustering:
    """Connected components over the relatedness predicate."""

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        self._window = window

    def cluster(self, signals: list[RiskSignal]) -> list[RiskNarrative]:
        parent = list(range(len(signals)))

        def find(i: int) -> int:
            while parent[i] != i:
                parent[i] = parent[parent[i]]
                i = parent[i]
            return i

        for i in range(len(signals)):
            for j in range(i + 1, len(signals)):
                if are_related(signals[i], signals[j], self._window):
                    root_i, root_j = find(i), find(j)
                    if root_i != root_j:
                        # Keep the earliest index as root so groups order by first member
                        parent[max(root_i, root_j)] = min(root_i, root_j)

        by_root: dict[int, list[RiskSignal]] = {}
        for index, signal in enumerate(signals):
            by_root.setdefault(find(index), []).append(signal)

        narratives = build_narratives(list(by_root.values()))
        logger.debug("Union-find clustering: %d signals → %d narratives", len(signals), len(narratives))
        return narratives


_STRATEGIES = {
    "greedy": GreedyClustering,
    "union_find": UnionFindClustering,
}


def get_clustering_strategy(name: str, window: timedelta = DEFAULT_WINDOW) -> ClusteringStrategy:
    """Look up a strategy by its config name."""
    try:
        factory = _STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown clustering strategy '{name}' (expected one of {sorted(_STRATEGIES)})"
        ) from None
    return factory(window=window)
