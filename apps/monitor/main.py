from __future__ import annotations

import asyncio
import logging

from apps.monitor.poller import Poller
from apps.ui.api_client import fetch_indices
from apps.ui.settings import UiSettings
from apps.ui.state import DashboardState, refresh_dashboard
from apps.ui.transformers import format_change, format_price

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def render_lines(state: DashboardState) -> list[str]:
    if state.loading:
        return ["Loading real-time market data..."]

    lines: list[str] = []
    if state.error:
        lines.append(f"ERROR {state.error}")
    for quote in state.quotes:
        source = "live" if quote.is_real_data else "sim"
        lines.append(
            f"{quote.symbol:<7} {quote.name:<30} {format_price(quote.price):>12} {quote.currency} "
            f"{format_change(quote.change, quote.change_percent):>20} [{source}]"
        )
    if state.note:
        lines.append(state.note)
    return lines


async def poll_once(settings: UiSettings, state: DashboardState) -> DashboardState:
    updated = await asyncio.to_thread(
        refresh_dashboard,
        state,
        lambda: fetch_indices(settings.api_base_url, timeout_seconds=settings.request_timeout_seconds),
    )
    for line in render_lines(updated):
        logger.info(line)
    return updated


async def run_monitor(settings: UiSettings, stop_event: asyncio.Event | None = None) -> DashboardState:
    state = DashboardState()
    stop_event = stop_event or asyncio.Event()

    async def refresh() -> None:
        await poll_once(settings, state)

    poller = Poller(refresh, interval_ms=settings.poll_interval_seconds * 1000)
    logger.info(
        "Monitor starting api=%s interval=%ss",
        settings.api_base_url,
        settings.poll_interval_seconds,
    )
    poller.start()
    try:
        await stop_event.wait()
    finally:
        poller.stop()
        logger.info("Monitor stopped")
    return state


def main() -> None:
    _configure_logging()
    try:
        asyncio.run(run_monitor(UiSettings()))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()


__all__ = ["main", "poll_once", "render_lines", "run_monitor"]
