from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.domain.indices import IndexDescriptor

NOTE_ALL_REAL = "All data is real-time"
NOTE_PARTIAL_SIMULATED = "Some data is simulated due to API limitations"
NOTE_ALL_SIMULATED = "All data is simulated due to API limitations"

# Synthetic moves are drawn on a 0.01% grid in [-2.00, +2.00).
_SYNTHETIC_PERCENT_STEPS = 200


class Quote(BaseModel):
    """Quote card served to the dashboard (camelCase on the wire)."""

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    currency: str
    last_update: datetime
    is_real_data: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class AggregateResponse(BaseModel):
    """Envelope returned by ``GET /api/indices``."""

    success: bool
    data: list[Quote] = Field(default_factory=list)
    timestamp: datetime | None = None
    note: str | None = None
    error: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderQuote(BaseModel):
    """Quote fields reported by an upstream provider."""

    symbol: str
    price: float = Field(gt=0)
    change: float | None = None
    change_percent: float | None = None
    currency: str | None = None
    market_time: datetime | None = None

    model_config = ConfigDict(allow_inf_nan=False)


@dataclass(frozen=True)
class SyntheticValues:
    price: float
    change: float
    change_percent: float


def generate_synthetic_values(base_price: float, rng: random.Random | None = None) -> SyntheticValues:
    """Random move of [-2%, +2%) around ``base_price``, rounded to cents."""
    source = rng or random
    change_percent = source.randrange(-_SYNTHETIC_PERCENT_STEPS, _SYNTHETIC_PERCENT_STEPS) / 100  # noqa: S311
    change = base_price * change_percent / 100
    price = base_price + change
    return SyntheticValues(
        price=round(price, 2),
        change=round(change, 2),
        change_percent=round(change_percent, 2),
    )


@dataclass(frozen=True)
class LiveQuote:
    descriptor: IndexDescriptor
    price: float
    change: float
    change_percent: float
    currency: str
    last_update: datetime


@dataclass(frozen=True)
class SyntheticQuote:
    descriptor: IndexDescriptor
    values: SyntheticValues
    last_update: datetime

    @classmethod
    def generate(
        cls,
        descriptor: IndexDescriptor,
        *,
        rng: random.Random | None = None,
        now: datetime | None = None,
    ) -> SyntheticQuote:
        return cls(
            descriptor=descriptor,
            values=generate_synthetic_values(descriptor.base_price, rng),
            last_update=now or datetime.now(UTC),
        )


QuoteResult = LiveQuote | SyntheticQuote


def to_quote(result: QuoteResult) -> Quote:
    descriptor = result.descriptor
    if isinstance(result, LiveQuote):
        return Quote(
            symbol=descriptor.symbol,
            name=descriptor.name,
            price=result.price,
            change=round(result.change, 2),
            change_percent=round(result.change_percent, 2),
            currency=result.currency,
            last_update=result.last_update,
            is_real_data=True,
        )
    values = result.values
    return Quote(
        symbol=descriptor.symbol,
        name=descriptor.name,
        price=values.price,
        change=values.change,
        change_percent=values.change_percent,
        currency=descriptor.currency,
        last_update=result.last_update,
        is_real_data=False,
    )


def build_note(quotes: Sequence[Quote]) -> str:
    simulated = sum(1 for quote in quotes if not quote.is_real_data)
    if simulated == 0:
        return NOTE_ALL_REAL
    if simulated == len(quotes):
        return NOTE_ALL_SIMULATED
    return NOTE_PARTIAL_SIMULATED


__all__ = [
    "NOTE_ALL_REAL",
    "NOTE_ALL_SIMULATED",
    "NOTE_PARTIAL_SIMULATED",
    "AggregateResponse",
    "LiveQuote",
    "ProviderQuote",
    "Quote",
    "QuoteResult",
    "SyntheticQuote",
    "SyntheticValues",
    "build_note",
    "generate_synthetic_values",
    "to_quote",
]
