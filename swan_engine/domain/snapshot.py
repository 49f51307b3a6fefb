"""DataSnapshot — the complete external input to one analysis call.

A snapshot is supplied whole by upstream data-acquisition collaborators
(feed pollers, caches) and is never mutated by the engine.  Records are
parsed leniently: every numeric field passes through a sanitizer that
maps missing, non-numeric, NaN and infinite values to 0.0, so a bad
upstream value degrades a single derived number instead of failing the
whole analysis.

Upstream feeds speak camelCase (``yesPrice``, ``alertCount``); both
spellings are accepted.  Unknown keys are kept on the record.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _sanitize_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _sanitize_optional_number(value: Any) -> float | None:
    if value is None:
        return None
    return _sanitize_number(value)


SafeFloat = Annotated[float, BeforeValidator(_sanitize_number)]
SafeStr = Annotated[str, BeforeValidator(lambda v: "" if v is None else str(v))]
OptionalSafeFloat = Annotated[Optional[float], BeforeValidator(_sanitize_optional_number)]


class _Record(BaseModel):
    """Base for all snapshot records."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── Markets ──────────────────────────────────────────────────────────────────

class MarketQuote(_Record):
    """Index, sector or commodity quote.  ``change`` is a percent move."""

    symbol: SafeStr = ""
    name: SafeStr = ""
    price: SafeFloat = 0.0
    change: SafeFloat = 0.0


class CryptoQuote(_Record):
    symbol: SafeStr = ""
    name: SafeStr = ""
    price: SafeFloat = 0.0
    change: SafeFloat = 0.0


class EconomicIndicator(_Record):
    """A single economic series observation, keyed by its series id (e.g. VIXCLS)."""

    id: SafeStr = ""
    value: SafeFloat = 0.0
    change: SafeFloat = 0.0


class PredictionMarket(_Record):
    title: SafeStr = ""
    yes_price: SafeFloat = 0.0
    volume: SafeFloat = 0.0


# ── Events ───────────────────────────────────────────────────────────────────

class Earthquake(_Record):
    magnitude: SafeFloat = 0.0
    place: SafeStr = ""
    lat: OptionalSafeFloat = None
    lon: OptionalSafeFloat = None


class ProtestEvent(_Record):
    event_type: SafeStr = ""
    summary: SafeStr = ""
    fatalities: SafeFloat = 0.0
    country: SafeStr = ""
    city: SafeStr = ""
    lat: OptionalSafeFloat = None
    lon: OptionalSafeFloat = None

    @property
    def place_name(self) -> str:
        return self.city or self.country


class Outage(_Record):
    """Internet outage; severity is one of minor / partial / major / total."""

    severity: SafeStr = ""
    country: SafeStr = ""


class MilitaryVessel(_Record):
    name: SafeStr = ""
    lat: OptionalSafeFloat = None
    lon: OptionalSafeFloat = None


class MilitaryFlight(_Record):
    callsign: SafeStr = ""
    lat: OptionalSafeFloat = None
    lon: OptionalSafeFloat = None


class WeatherAlert(_Record):
    event: SafeStr = ""
    severity: SafeStr = ""


class NewsItem(_Record):
    title: SafeStr = ""
    source: SafeStr = ""


class AlertCount(_Record):
    category: SafeStr = ""
    alert_count: SafeFloat = 0.0


# ── Snapshot ─────────────────────────────────────────────────────────────────

class DataSnapshot(BaseModel):
    """Named arrays of domain records for one analysis invocation."""

    markets: list[MarketQuote] = Field(default_factory=list)
    sectors: list[MarketQuote] = Field(default_factory=list)
    commodities: list[MarketQuote] = Field(default_factory=list)
    crypto: list[CryptoQuote] = Field(default_factory=list)
    economic: list[EconomicIndicator] = Field(default_factory=list)
    predictions: list[PredictionMarket] = Field(default_factory=list)
    earthquakes: list[Earthquake] = Field(default_factory=list)
    protests: list[ProtestEvent] = Field(default_factory=list)
    outages: list[Outage] = Field(default_factory=list)
    vessels: list[MilitaryVessel] = Field(default_factory=list)
    flights: list[MilitaryFlight] = Field(default_factory=list)
    weather: list[WeatherAlert] = Field(default_factory=list)
    news: list[NewsItem] = Field(default_factory=list)
    alert_counts: list[AlertCount] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def missing_list_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def economic_series(self, series_id: str) -> EconomicIndicator | None:
        """Return the first economic observation with *series_id*, if any."""
        for indicator in self.economic:
            if indicator.id == series_id:
                return indicator
        return None
