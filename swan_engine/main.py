"""swan-engine — Systemic risk analysis service.

This is the application entry point.  It wires the RiskEngine (rules,
clustering strategy, centrality and random source from Settings) to the
REST endpoints.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from swan_engine.api.analyze import create_analyze_router
from swan_engine.config import settings
from swan_engine.core.engine import build_engine_from_settings

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── Engine ───────────────────────────────────────────────────────────────────

engine = build_engine_from_settings()

# ── App ──────────────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    description="Candidate sourcing, signal extraction, narrative clustering & risk synthesis",
    version="0.2.0",
    debug=settings.debug,
)

# ── Routes ───────────────────────────────────────────────────────────────────

app.include_router(create_analyze_router(engine))


# ── Health ───────────────────────────────────────────────────────────────────

@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "clustering_strategy": settings.clustering_strategy,
        "centrality_iterations": settings.centrality_iterations,
        "rules": engine.registry.rule_names,
        "rule_stats": engine.registry.stats,
        "total_fired": engine.registry.total_fired,
    }
