"""REST endpoints for systemic-risk analysis.

Paths:
    POST /api/analyze      run the pipeline over a DataSnapshot body
    GET  /api/dimensions   labels of the correlation matrix axes

The analysis is executed through the LangGraph runner and returned in
the camelCase shape the visualization consumes, together with the risk
band and a deterministic human-readable report.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from swan_engine.core.aggregation import DIMENSION_LABELS, risk_band
from swan_engine.core.engine import RiskEngine
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.explain.formatter import AnalysisFormatter
from swan_engine.graph.runner import run_analysis

logger = logging.getLogger(__name__)


def create_analyze_router(engine: RiskEngine) -> APIRouter:
    """Factory that wires the analysis endpoints to *engine*."""

    router = APIRouter(prefix="/api", tags=["analysis"])

    @router.post("/analyze")
    async def analyze(snapshot: DataSnapshot) -> dict[str, Any]:
        """Full analysis of one snapshot."""
        analysis = run_analysis(snapshot, engine=engine)
        return {
            "analysis": analysis.model_dump(mode="json", by_alias=True),
            "riskBand": risk_band(analysis.global_risk_score).value,
            "humanReadable": AnalysisFormatter.format_plain(analysis),
        }

    @router.get("/dimensions")
    async def dimensions() -> dict[str, Any]:
        return {"labels": list(DIMENSION_LABELS)}

    return router
