"""AnalysisState — the state object threaded through the analysis graph.

Every node receives the full state and returns a partial update.  Nodes
never reach outside this state except through the RiskEngine they were
built around.
"""

from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from swan_engine.domain.analysis import Analysis
from swan_engine.domain.narrative import RiskNarrative
from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot


class AnalysisState(TypedDict, total=False):
    """LangGraph state for one analysis run.

    Fields:
        snapshot: The raw DataSnapshot supplied by the caller.
        now: Clock reading shared by every stage of the run.
        candidates: Snapshot after candidate sourcing.
        signals: Extracted signals, in extraction order.
        narratives: Clustered narratives, highest aggregate risk first.
        analysis: Final Analysis, set by the last node.
    """

    snapshot: DataSnapshot
    now: datetime
    candidates: DataSnapshot
    signals: list[RiskSignal]
    narratives: list[RiskNarrative]
    analysis: Analysis
