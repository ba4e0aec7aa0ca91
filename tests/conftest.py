from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the application package is importable when running tests directly via pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer .env and cached settings out of the tests."""
    monkeypatch.chdir(tmp_path)
    for key in (
        "QUOTE_PROVIDER_URL",
        "QUOTE_TIMEOUT_SECONDS",
        "QUOTE_USER_AGENT",
        "QUOTE_LIVE_ENABLED",
        "API_HOST",
        "API_PORT",
        "API_BASE_URL",
        "POLL_INTERVAL_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
