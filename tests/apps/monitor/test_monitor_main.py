from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

import apps.monitor.main as monitor_main
from apps.ui.api_client import ApiError
from apps.ui.settings import UiSettings
from apps.ui.state import NETWORK_ERROR_MESSAGE, DashboardState
from core.domain.quotes import NOTE_ALL_REAL, AggregateResponse, Quote

NOW = datetime(2025, 1, 2, 15, 30, tzinfo=UTC)


def _response() -> AggregateResponse:
    quote = Quote(
        symbol="^GSPC",
        name="S&P 500",
        price=5823.52,
        change=23.52,
        change_percent=0.41,
        currency="USD",
        last_update=NOW,
        is_real_data=True,
    )
    return AggregateResponse(success=True, data=[quote], timestamp=NOW, note=NOTE_ALL_REAL)


def test_render_lines_while_loading() -> None:
    assert monitor_main.render_lines(DashboardState()) == ["Loading real-time market data..."]


def test_render_lines_formats_cards_and_error() -> None:
    state = DashboardState(quotes=_response().data, loading=False, error="Network error", note=NOTE_ALL_REAL)

    lines = monitor_main.render_lines(state)

    assert lines[0] == "ERROR Network error"
    assert "^GSPC" in lines[1]
    assert "5,823.52" in lines[1]
    assert "+23.52 (+0.41%)" in lines[1]
    assert lines[1].endswith("[live]")
    assert lines[-1] == NOTE_ALL_REAL


def test_poll_once_updates_state(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[str] = []

    def fake_fetch(api_base_url: str, *, timeout_seconds: float) -> AggregateResponse:
        requested.append(api_base_url)
        return _response()

    monkeypatch.setattr(monitor_main, "fetch_indices", fake_fetch)
    settings = UiSettings(api_base_url="http://api.test")
    state = asyncio.run(monitor_main.poll_once(settings, DashboardState()))

    assert requested == ["http://api.test"]
    assert state.loading is False
    assert state.quotes[0].symbol == "^GSPC"


def test_poll_once_reports_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_fetch(*_args: object, **_kwargs: object) -> AggregateResponse:
        raise ApiError("connection refused")

    monkeypatch.setattr(monitor_main, "fetch_indices", failing_fetch)
    state = asyncio.run(monitor_main.poll_once(UiSettings(), DashboardState()))

    assert state.error == NETWORK_ERROR_MESSAGE
    assert state.loading is False


def test_run_monitor_polls_until_stopped(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_fetch(api_base_url: str, *, timeout_seconds: float) -> AggregateResponse:
        calls.append(api_base_url)
        return _response()

    monkeypatch.setattr(monitor_main, "fetch_indices", fake_fetch)

    async def _run() -> DashboardState:
        stop_event = asyncio.Event()
        task = asyncio.create_task(monitor_main.run_monitor(UiSettings(), stop_event))
        for _ in range(200):
            await asyncio.sleep(0.01)
            if calls:
                break
        await asyncio.sleep(0.05)
        stop_event.set()
        return await task

    state = asyncio.run(_run())

    assert len(calls) == 1
    assert state.loading is False
    assert state.note == NOTE_ALL_REAL
