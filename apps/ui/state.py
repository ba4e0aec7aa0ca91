from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from apps.ui.api_client import ApiError
from core.domain.quotes import AggregateResponse, Quote

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error: Unable to fetch indices data"
FETCH_FAILED_MESSAGE = "Failed to fetch data"


@dataclass
class DashboardState:
    """What the views render between two polls."""

    quotes: list[Quote] = field(default_factory=list)
    loading: bool = True
    error: str | None = None
    last_update: datetime | None = None
    note: str | None = None


def refresh_dashboard(state: DashboardState, fetch: Callable[[], AggregateResponse]) -> DashboardState:
    """Apply one poll result to ``state``; keeps the previous quotes on failure."""
    try:
        response = fetch()
    except ApiError:
        logger.warning("Indices fetch failed; keeping previous data")
        state.error = NETWORK_ERROR_MESSAGE
    else:
        if response.success:
            state.quotes = list(response.data)
            state.last_update = response.timestamp
            state.note = response.note
            state.error = None
        else:
            state.error = response.error or FETCH_FAILED_MESSAGE
    finally:
        state.loading = False
    return state
