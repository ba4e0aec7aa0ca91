from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import ValidationError

from core.domain.quotes import ProviderQuote
from core.ports.quote_provider import QuoteProvider, QuoteProviderError
from core.settings import DEFAULT_QUOTE_PROVIDER_URL, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


def _parse_epoch_seconds(value: Any) -> datetime | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_quote_payload(symbol: str, payload: Any) -> ProviderQuote:
    """Extract the first quote result from a v7 ``/finance/quote`` body."""
    quote_response = payload.get("quoteResponse") if isinstance(payload, dict) else None
    results = quote_response.get("result") if isinstance(quote_response, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        raise QuoteProviderError(f"No quote result for {symbol}")

    raw = results[0]
    if not raw.get("regularMarketPrice"):
        raise QuoteProviderError(f"No valid price for {symbol}")

    try:
        return ProviderQuote(
            symbol=symbol,
            price=raw["regularMarketPrice"],
            change=raw.get("regularMarketChange"),
            change_percent=raw.get("regularMarketChangePercent"),
            currency=raw.get("currency") or None,
            market_time=_parse_epoch_seconds(raw.get("regularMarketTime")),
        )
    except ValidationError as exc:
        raise QuoteProviderError(f"Malformed quote for {symbol}: {exc}") from exc


class YahooQuoteProvider(QuoteProvider):
    """Per-symbol lookups against the Yahoo Finance quote endpoint."""

    def __init__(
        self,
        quote_url: str = DEFAULT_QUOTE_PROVIDER_URL,
        *,
        timeout_seconds: float = 3.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._quote_url = quote_url
        self._timeout_seconds = timeout_seconds
        self._headers = {"User-Agent": user_agent}
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def get_quote(self, symbol: str) -> ProviderQuote:
        try:
            response = await self._client.get(
                self._quote_url,
                params={"symbols": symbol},
                headers=self._headers,
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise QuoteProviderError(f"Quote request failed for {symbol}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise QuoteProviderError(f"Quote body for {symbol} is not JSON") from exc

        quote = parse_quote_payload(symbol, payload)
        logger.debug("Live quote symbol=%s price=%s", symbol, quote.price)
        return quote

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["YahooQuoteProvider", "parse_quote_payload"]
