from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Sequence
from datetime import UTC, datetime

from core.domain.indices import INDICES, IndexDescriptor
from core.domain.quotes import (
    NOTE_ALL_SIMULATED,
    AggregateResponse,
    LiveQuote,
    QuoteResult,
    SyntheticQuote,
    build_note,
    to_quote,
)
from core.ports.quote_provider import QuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 3.0


async def resolve_quote(
    descriptor: IndexDescriptor,
    provider: QuoteProvider | None,
    *,
    timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    rng: random.Random | None = None,
) -> QuoteResult:
    """Live quote for ``descriptor``, or simulated values when the lookup fails.

    Never raises: any failure of the live path (transport, status, body,
    timeout) turns into a ``SyntheticQuote``.
    """
    if provider is None:
        return SyntheticQuote.generate(descriptor, rng=rng)

    try:
        live = await asyncio.wait_for(provider.get_quote(descriptor.symbol), timeout=timeout_seconds)
    except Exception as exc:
        logger.warning("Live quote unavailable symbol=%s (%s); using simulated values", descriptor.symbol, exc)
        return SyntheticQuote.generate(descriptor, rng=rng)

    return LiveQuote(
        descriptor=descriptor,
        price=live.price,
        change=live.change or 0.0,
        change_percent=live.change_percent or 0.0,
        currency=live.currency or descriptor.currency,
        last_update=live.market_time or datetime.now(UTC),
    )


async def fetch_indices(
    provider: QuoteProvider | None,
    *,
    indices: Sequence[IndexDescriptor] = INDICES,
    timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    rng: random.Random | None = None,
) -> AggregateResponse:
    results = await asyncio.gather(
        *(resolve_quote(descriptor, provider, timeout_seconds=timeout_seconds, rng=rng) for descriptor in indices)
    )
    quotes = [to_quote(result) for result in results]
    simulated = sum(1 for quote in quotes if not quote.is_real_data)
    logger.info("Resolved %s indices (simulated=%s)", len(quotes), simulated)
    return AggregateResponse(
        success=True,
        data=quotes,
        timestamp=datetime.now(UTC),
        note=build_note(quotes),
    )


def build_simulated_response(
    *,
    indices: Sequence[IndexDescriptor] = INDICES,
    rng: random.Random | None = None,
) -> AggregateResponse:
    now = datetime.now(UTC)
    quotes = [to_quote(SyntheticQuote.generate(descriptor, rng=rng, now=now)) for descriptor in indices]
    return AggregateResponse(success=True, data=quotes, timestamp=now, note=NOTE_ALL_SIMULATED)


async def load_indices(
    provider: QuoteProvider | None,
    *,
    indices: Sequence[IndexDescriptor] = INDICES,
    timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    rng: random.Random | None = None,
) -> AggregateResponse:
    """Aggregate quotes; an unexpected failure still yields usable simulated data."""
    try:
        return await fetch_indices(provider, indices=indices, timeout_seconds=timeout_seconds, rng=rng)
    except Exception:
        logger.exception("Index aggregation failed; serving simulated data")
        return build_simulated_response(indices=indices, rng=rng)


__all__ = ["build_simulated_response", "fetch_indices", "load_indices", "resolve_quote"]
