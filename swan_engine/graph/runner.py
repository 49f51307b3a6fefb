"""Graph runner — clean interface for invoking the analysis graph.

Usage:
    from swan_engine.graph.runner import run_analysis

    analysis = run_analysis(snapshot, engine=engine)

The runner compiles the graph, seeds the initial state with the snapshot
and a single clock reading, invokes LangGraph and returns the Analysis.
"""

from __future__ import annotations

import logging

from swan_engine.core.engine import RiskEngine, build_engine_from_settings
from swan_engine.domain.analysis import Analysis
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.graph.builder import build_analysis_graph
from swan_engine.graph.state import AnalysisState

logger = logging.getLogger(__name__)


def run_analysis(snapshot: DataSnapshot, *, engine: RiskEngine | None = None) -> Analysis:
    """Run the five-stage pipeline over *snapshot* through LangGraph.

    Args:
        snapshot: Complete input for this run.
        engine: Engine providing the stages; wired from Settings when omitted.

    Returns:
        The final Analysis.
    """
    engine = engine or build_engine_from_settings()
    initial_state: AnalysisState = {
        "snapshot": snapshot,
        "now": engine.now(),
    }

    compiled_graph = build_analysis_graph(engine)
    final_state = compiled_graph.invoke(initial_state)
    analysis = final_state["analysis"]

    logger.info(
        "Analysis graph complete: signals=%d narratives=%d score=%.1f trend=%s",
        len(analysis.signals),
        len(analysis.narratives),
        analysis.global_risk_score,
        analysis.trend_direction.value,
    )
    return analysis
