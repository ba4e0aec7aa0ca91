from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

import pandas as pd

from core.domain.quotes import Quote


def format_price(price: float) -> str:
    return f"{price:,.2f}"


def format_change(change: float, change_percent: float) -> str:
    # + 0.0 turns -0.0 into 0.0 so flat moves print as "+0.00"
    return f"{change + 0.0:+.2f} ({change_percent + 0.0:+.2f}%)"


def change_direction(change: float) -> Literal["up", "down", "flat"]:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "flat"


def quotes_to_frame(quotes: Sequence[Quote]) -> pd.DataFrame:
    records: list[dict[str, object]] = []
    for quote in quotes:
        records.append(
            {
                "symbol": quote.symbol,
                "name": quote.name,
                "price": quote.price,
                "change": quote.change,
                "change_percent": quote.change_percent,
                "currency": quote.currency,
                "last_update": quote.last_update,
                "direction": change_direction(quote.change),
                "source": "live" if quote.is_real_data else "simulated",
            }
        )
    return pd.DataFrame.from_records(records)
