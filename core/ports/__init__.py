"""Port interfaces for adapters."""

from core.ports.quote_provider import QuoteProvider, QuoteProviderError

__all__ = ["QuoteProvider", "QuoteProviderError"]
