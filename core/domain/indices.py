from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IndexDescriptor(BaseModel):
    """Static description of a tracked market index."""

    symbol: str
    name: str
    base_price: float = Field(gt=0)
    currency: str

    model_config = ConfigDict(frozen=True)


INDICES: tuple[IndexDescriptor, ...] = (
    IndexDescriptor(symbol="^GSPC", name="S&P 500", base_price=5800.00, currency="USD"),
    IndexDescriptor(symbol="^DJI", name="Dow Jones Industrial Average", base_price=42500.00, currency="USD"),
    IndexDescriptor(symbol="^IXIC", name="NASDAQ Composite", base_price=18200.00, currency="USD"),
    IndexDescriptor(symbol="^FTSE", name="FTSE 100", base_price=8100.00, currency="GBP"),
    IndexDescriptor(symbol="^N225", name="Nikkei 225", base_price=39800.00, currency="JPY"),
    IndexDescriptor(symbol="^GDAXI", name="DAX", base_price=19500.00, currency="EUR"),
    IndexDescriptor(symbol="^HSI", name="Hang Seng Index", base_price=19200.00, currency="HKD"),
    IndexDescriptor(symbol="^AXJO", name="ASX 200", base_price=8300.00, currency="AUD"),
)


__all__ = ["INDICES", "IndexDescriptor"]
