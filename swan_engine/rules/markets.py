"""Market rules: cross-market fracture and fear-gauge sentiment shocks."""

from __future__ import annotations

from datetime import datetime

from swan_engine.domain.enums import SignalType
from swan_engine.domain.indicators import MarketIndicators, SentimentIndicators
from swan_engine.domain.signal import RiskSignal
from swan_engine.domain.snapshot import DataSnapshot
from swan_engine.rules.base import SignalRule

VIX_SERIES = "VIXCLS"
YIELD_SPREAD_SERIES = "T10Y2Y"
UNEMPLOYMENT_SERIES = "UNRATE"

OIL_SYMBOL = "CL=F"
GOLD_SYMBOL = "GC=F"


class MarketFractureRule(SignalRule):
    """Broad market volatility, sector outliers and macro stress series.

    economicRisk adds 20 for VIX > 25, 15 for an inverted 10Y-2Y spread
    and 10 for an unemployment rise above 0.2.
    """

    @property
    def name(self) -> str:
        return "market_fracture"

    @staticmethod
    def _economic_risk(snapshot: DataSnapshot) -> tuple[float, float | None]:
        vix = snapshot.economic_series(VIX_SERIES)
        spread = snapshot.economic_series(YIELD_SPREAD_SERIES)
        unemployment = snapshot.economic_series(UNEMPLOYMENT_SERIES)

        risk = 0.0
        if vix is not None and vix.value > 25:
            risk += 20
        if spread is not None and spread.value < 0:
            risk += 15
        if unemployment is not None and unemployment.change > 0.2:
            risk += 10
        return risk, (vix.value if vix is not None else None)

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        markets = snapshot.markets
        market_change = sum(abs(m.change) for m in markets) / (len(markets) or 1)
        divergence = sum(1 for s in snapshot.sectors if abs(s.change) > 3)
        economic_risk, vix = self._economic_risk(snapshot)

        if not (market_change > 1.2 or divergence > 2 or economic_risk > 10):
            return None

        return RiskSignal(
            signal_id="market-fracture",
            signal_type=SignalType.ECONOMIC,
            severity=min(market_change * 25 + divergence * 10 + economic_risk, 100),
            probability=0.45,
            impact=85,
            description=(
                f"Economic instability: market volatility cross-referenced with "
                f"{divergence} outlier sectors and systemic yield signals."
            ),
            indicators=MarketIndicators(
                market_change=market_change,
                sector_divergence=divergence,
                economic_risk=economic_risk,
                vix=vix,
            ),
            timestamp=now,
        )


class SentimentShockRule(SignalRule):
    """Safe-haven and speculative assets as fear proxies."""

    @property
    def name(self) -> str:
        return "sentiment_shock"

    def evaluate(self, snapshot: DataSnapshot, now: datetime) -> RiskSignal | None:
        oil_spike = any(c.symbol == OIL_SYMBOL and c.change > 3 for c in snapshot.commodities)
        gold_spike = any(c.symbol == GOLD_SYMBOL and c.change > 1.5 for c in snapshot.commodities)
        crypto_vol = sum(1 for c in snapshot.crypto if abs(c.change) > 10)

        if not (oil_spike or gold_spike or crypto_vol > 1):
            return None

        return RiskSignal(
            signal_id="sentiment-shock",
            signal_type=SignalType.ECONOMIC,
            severity=min(60 + crypto_vol * 5, 100),
            probability=0.4,
            impact=50,
            description="Fear index spike: rapid gold/oil moves or extreme crypto volatility.",
            indicators=SentimentIndicators(oil=oil_spike, gold=gold_spike, crypto_vol=crypto_vol),
            timestamp=now,
        )
