from __future__ import annotations

from typing import Protocol

from core.domain.quotes import ProviderQuote


class QuoteProviderError(RuntimeError):
    """Raised when a provider cannot produce a usable quote."""


class QuoteProvider(Protocol):
    """Upstream source of live index quotes."""

    async def get_quote(self, symbol: str) -> ProviderQuote:
        """Fetch the latest quote for ``symbol`` or raise ``QuoteProviderError``."""

    async def close(self) -> None:
        """Close any underlying resources."""
