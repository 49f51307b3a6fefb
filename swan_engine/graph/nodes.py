"""LangGraph nodes — one per pipeline stage.

Each node is a closure over a RiskEngine and delegates to the matching
stage method, so the graph and RiskEngine.analyze() share one
implementation of every stage.
"""

from __future__ import annotations

import logging
from typing import Callable

from swan_engine.core.engine import RiskEngine
from swan_engine.graph.state import AnalysisState

logger = logging.getLogger(__name__)

Node = Callable[[AnalysisState], dict]


def make_nodes(engine: RiskEngine) -> dict[str, Node]:
    """Build the stage nodes, keyed by node name, in pipeline order."""

    def source_candidates(state: AnalysisState) -> dict:
        return {"candidates": engine.source(state["snapshot"])}

    def extract_signals(state: AnalysisState) -> dict:
        signals = engine.extract(state["candidates"], state["now"])
        logger.debug("extract_signals: %d signals", len(signals))
        return {"signals": signals}

    def cluster_narratives(state: AnalysisState) -> dict:
        narratives = engine.cluster(state["signals"])
        logger.debug("cluster_narratives: %d narratives", len(narratives))
        return {"narratives": narratives}

    def score_centrality(state: AnalysisState) -> dict:
        engine.score(state["signals"])
        return {"signals": state["signals"]}

    def aggregate_risk(state: AnalysisState) -> dict:
        analysis = engine.aggregate(state["signals"], state["narratives"], state["now"])
        return {"analysis": analysis}

    return {
        "source_candidates": source_candidates,
        "extract_signals": extract_signals,
        "cluster_narratives": cluster_narratives,
        "score_centrality": score_centrality,
        "aggregate_risk": aggregate_risk,
    }
