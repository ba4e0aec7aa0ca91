from __future__ import annotations

import logging
from datetime import timedelta

import streamlit as st
from pydantic import ValidationError

from apps.ui.api_client import fetch_indices
from apps.ui.settings import UiSettings
from apps.ui.state import DashboardState, refresh_dashboard
from apps.ui.views import render_dashboard

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_settings() -> UiSettings:
    try:
        return UiSettings()
    except ValidationError as exc:
        logger.exception("Failed to load UI settings")
        st.error("Invalid UI settings. Check .env or environment variables.")
        st.code(str(exc))
        st.stop()


def _dashboard_state() -> DashboardState:
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardState()
    return st.session_state["dashboard"]


def main() -> None:
    _configure_logging()
    st.set_page_config(page_title="World Trade Indices Monitoring", layout="wide")
    st.title("World Trade Indices Monitoring")
    st.caption("Real-time monitoring of major global stock market indices")

    settings = _load_settings()
    state = _dashboard_state()

    st.sidebar.text(f"API: {settings.api_base_url}")
    st.sidebar.text(f"Refresh: every {settings.poll_interval_seconds}s")

    @st.fragment(run_every=timedelta(seconds=settings.poll_interval_seconds))
    def live_panel() -> None:
        refresh_dashboard(
            state,
            lambda: fetch_indices(settings.api_base_url, timeout_seconds=settings.request_timeout_seconds),
        )
        render_dashboard(state, settings.poll_interval_seconds)

    live_panel()


if __name__ == "__main__":
    main()
