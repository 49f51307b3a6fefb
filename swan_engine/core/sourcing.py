"""Candidate sourcing — light ranking ahead of signal extraction.

Narrows each snapshot array independently to its high-signal subset and
passes every other array through untouched.  The input snapshot is never
mutated; a new snapshot is returned.

Thresholds:
    markets       |change| > 0.5
    earthquakes   magnitude > 3.0
    protests      fatalities > 0, or "violence" in event type / summary
    outages       severity != "minor"
    predictions   0.05 < yes_price < 0.95
    vessels, flights pass through (military activity is always high signal)
"""

from __future__ import annotations

import logging

from swan_engine.domain.snapshot import DataSnapshot, ProtestEvent

logger = logging.getLogger(__name__)

MARKET_MOVE_FLOOR = 0.5
MAGNITUDE_FLOOR = 3.0
PREDICTION_PRICE_BOUNDS = (0.05, 0.95)
VIOLENCE_KEYWORD = "violence"


def _is_violent(protest: ProtestEvent) -> bool:
    if protest.fatalities > 0:
        return True
    return (
        VIOLENCE_KEYWORD in protest.event_type.lower()
        or VIOLENCE_KEYWORD in protest.summary.lower()
    )


def source_candidates(snapshot: DataSnapshot) -> DataSnapshot:
    """Return a copy of *snapshot* with low-signal records removed."""
    low, high = PREDICTION_PRICE_BOUNDS
    candidates = snapshot.model_copy(update={
        "markets": [m for m in snapshot.markets if abs(m.change) > MARKET_MOVE_FLOOR],
        "earthquakes": [e for e in snapshot.earthquakes if e.magnitude > MAGNITUDE_FLOOR],
        "protests": [p for p in snapshot.protests if _is_violent(p)],
        "outages": [o for o in snapshot.outages if o.severity != "minor"],
        "predictions": [p for p in snapshot.predictions if low < p.yes_price < high],
    })

    logger.debug(
        "Candidate sourcing: markets %d→%d, earthquakes %d→%d, protests %d→%d, "
        "outages %d→%d, predictions %d→%d",
        len(snapshot.markets), len(candidates.markets),
        len(snapshot.earthquakes), len(candidates.earthquakes),
        len(snapshot.protests), len(candidates.protests),
        len(snapshot.outages), len(candidates.outages),
        len(snapshot.predictions), len(candidates.predictions),
    )
    return candidates
