"""RiskEngine — the deterministic systemic-risk pipeline.

Design principles:
    1. Pure given its inputs: a snapshot, an injected clock and an
       injected random source.
    2. No I/O, no shared state between calls; every analyze() builds
       fresh signals and returns a freshly owned Analysis.
    3. Never raises on a valid DataSnapshot; sparse data degrades to a
       lower-information result.

Stages, strictly in order:

    1. source     candidate sourcing (filter raw arrays)
    2. extract    seven independent rules → signals
    3. cluster    signals → narratives (stamps cluster_id)
    4. score      centrality propagation (needs cluster_id)
    5. aggregate  ranking, global score, hypothesis, regions
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from swan_engine.config import settings
from swan_engine.core import aggregation
from swan_engine.core.centrality import CentralityConfig, compute_centrality
from swan_engine.core.clustering import (
    ClusteringStrategy,
    GreedyClustering,
    get_clustering_strategy,
)
from swan_engine.core.sourcing import source_candidates
from swan_engine.domain.analysis import Analysis
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.foundation.clock import Clock, utc_now
from swan_engine.foundation.entropy import make_rng
from swan_engine.rules.registry import RuleRegistry, default_registry

logger = logging.getLogger(__name__)


class RiskEngine:
    """Stateless apart from its configuration, rule stats and RNG."""

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        clustering: ClusteringStrategy | None = None,
        centrality: CentralityConfig | None = None,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._clustering = clustering or GreedyClustering()
        self._centrality = centrality or CentralityConfig()
        self._clock = clock
        self._rng = rng or make_rng()

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def clustering(self) -> ClusteringStrategy:
        return self._clustering

    # ── Public API ───────────────────────────────────────────────────────

    def now(self) -> datetime:
        """One reading of the injected clock."""
        return self._clock()

    def analyze(self, snapshot: DataSnapshot) -> Analysis:
        """Run the full pipeline over *snapshot*."""
        now = self.now()
        candidates = self.source(snapshot)
        signals = self.extract(candidates, now)
        narratives = self.cluster(signals)
        self.score(signals)
        analysis = self.aggregate(signals, narratives, now)

        logger.info(
            "Analysis complete: signals=%d narratives=%d score=%.1f trend=%s",
            len(analysis.signals),
            len(analysis.narratives),
            analysis.global_risk_score,
            analysis.trend_direction.value,
        )
        return analysis

    # ── Stages ───────────────────────────────────────────────────────────

    def source(self, snapshot: DataSnapshot) -> DataSnapshot:
        return source_candidates(snapshot)

    def extract(self, candidates: DataSnapshot, now: datetime) -> list[RiskSignal]:
        return self._registry.extract(candidates, now)

    def cluster(self, signals: list[RiskSignal]) -> list[RiskNarrative]:
        return self._clustering.cluster(signals)

    def score(self, signals: list[RiskSignal]) -> None:
        compute_centrality(signals, self._centrality)

    def aggregate(
        self,
        signals: list[RiskSignal],
        narratives: list[RiskNarrative],
        now: datetime,
    ) -> Analysis:
        score = aggregation.global_risk_score(narratives)
        return Analysis(
            signals=aggregation.rank_signals(signals),
            narratives=narratives,
            global_risk_score=score,
            trend_direction=aggregation.trend_direction(score),
            hypothesis=aggregation.synthesize_hypothesis(signals, narratives, score),
            martingale_metrics=aggregation.martingale_metrics(narratives, score),
            high_risk_regions=aggregation.high_risk_regions(signals),
            correlation_matrix=aggregation.correlation_matrix(score, self._rng),
            dimension_labels=list(aggregation.DIMENSION_LABELS),
            timestamp=now,
        )


def build_engine_from_settings(clock: Clock = utc_now) -> RiskEngine:
    """Wire a RiskEngine from the process Settings."""
    return RiskEngine(
        registry=default_registry(martingale_decay=settings.martingale_decay),
        clustering=get_clustering_strategy(
            settings.clustering_strategy,
            window=timedelta(minutes=settings.cluster_window_minutes),
        ),
        centrality=CentralityConfig(
            iterations=settings.centrality_iterations,
            damping=settings.centrality_damping,
        ),
        clock=clock,
        rng=make_rng(settings.correlation_seed),
    )
