"""Graph builder — constructs the LangGraph analysis topology.

Topology:

    START → source_candidates → extract_signals → cluster_narratives
          → score_centrality → aggregate_risk → END

Linear on purpose: centrality needs cluster ids, and aggregation needs
both.  The graph is compiled once per engine and can be invoked many
times.
"""

from __future__ import annotations

from langgraph.graph import END, START, StateGraph

from swan_engine.core.engine import RiskEngine
from swan_engine.graph.nodes import make_nodes
from swan_engine.graph.state import AnalysisState


def build_analysis_graph(engine: RiskEngine):
    """Construct and compile the analysis graph around *engine*."""
    graph = StateGraph(AnalysisState)

    # ── Register nodes ───────────────────────────────────────────────────
    nodes = make_nodes(engine)
    for name, node in nodes.items():
        graph.add_node(name, node)

    # ── Edges ────────────────────────────────────────────────────────────
    order = list(nodes)
    graph.add_edge(START, order[0])
    for upstream, downstream in zip(order, order[1:]):
        graph.add_edge(upstream, downstream)
    graph.add_edge(order[-1], END)

    return graph.compile()
