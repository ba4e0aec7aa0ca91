from __future__ import annotations

from datetime import UTC, datetime

from apps.ui.api_client import ApiError
from apps.ui.state import FETCH_FAILED_MESSAGE, NETWORK_ERROR_MESSAGE, DashboardState, refresh_dashboard
from core.domain.quotes import NOTE_PARTIAL_SIMULATED, AggregateResponse, Quote

NOW = datetime(2025, 1, 2, 15, 30, tzinfo=UTC)


def _quote(symbol: str = "^DJI") -> Quote:
    return Quote(
        symbol=symbol,
        name="Dow Jones Industrial Average",
        price=42612.1,
        change=112.1,
        change_percent=0.26,
        currency="USD",
        last_update=NOW,
        is_real_data=False,
    )


def _raise_api_error() -> AggregateResponse:
    raise ApiError("connection refused")


def test_refresh_applies_successful_response() -> None:
    state = DashboardState(error="stale error")
    response = AggregateResponse(success=True, data=[_quote()], timestamp=NOW, note=NOTE_PARTIAL_SIMULATED)

    refresh_dashboard(state, lambda: response)

    assert state.quotes == [_quote()]
    assert state.last_update == NOW
    assert state.note == NOTE_PARTIAL_SIMULATED
    assert state.error is None
    assert state.loading is False


def test_refresh_network_error_keeps_previous_quotes() -> None:
    state = DashboardState(quotes=[_quote()], loading=False, last_update=NOW)

    refresh_dashboard(state, _raise_api_error)

    assert state.error == NETWORK_ERROR_MESSAGE
    assert state.quotes == [_quote()]
    assert state.last_update == NOW


def test_refresh_first_attempt_failure_clears_loading() -> None:
    state = DashboardState()

    refresh_dashboard(state, _raise_api_error)

    assert state.loading is False
    assert state.quotes == []


def test_refresh_unsuccessful_envelope_sets_error() -> None:
    state = DashboardState()

    refresh_dashboard(state, lambda: AggregateResponse(success=False, timestamp=NOW, error="upstream exploded"))
    assert state.error == "upstream exploded"

    refresh_dashboard(state, lambda: AggregateResponse(success=False, timestamp=NOW))
    assert state.error == FETCH_FAILED_MESSAGE


def test_refresh_recovers_after_error() -> None:
    state = DashboardState()
    refresh_dashboard(state, _raise_api_error)

    refresh_dashboard(state, lambda: AggregateResponse(success=True, data=[_quote()], timestamp=NOW))

    assert state.error is None
    assert len(state.quotes) == 1
