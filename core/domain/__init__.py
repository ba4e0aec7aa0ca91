"""Domain models."""

from core.domain.indices import INDICES, IndexDescriptor
from core.domain.quotes import AggregateResponse, ProviderQuote, Quote

__all__ = ["INDICES", "AggregateResponse", "IndexDescriptor", "ProviderQuote", "Quote"]
