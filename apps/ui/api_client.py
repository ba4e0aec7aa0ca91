from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.domain.quotes import AggregateResponse

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Raised when the UI cannot reach the quote API."""


def _request_json(
    method: str,
    url: str,
    *,
    params: dict[str, str] | None = None,
    timeout_seconds: float = 10,
) -> Any:
    try:
        response = httpx.request(method, url, params=params, timeout=timeout_seconds)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.exception("API request failed: %s %s", method, url)
        raise ApiError(f"Failed to call API: {exc}") from exc
    try:
        return response.json()
    except ValueError as exc:
        logger.exception("API returned a non-JSON body: %s %s", method, url)
        raise ApiError(f"Invalid API response: {exc}") from exc


def fetch_indices(api_base_url: str, *, timeout_seconds: float = 10) -> AggregateResponse:
    payload = _request_json("GET", f"{api_base_url.rstrip('/')}/api/indices", timeout_seconds=timeout_seconds)
    try:
        return AggregateResponse.model_validate(payload)
    except ValidationError as exc:
        logger.exception("Unexpected indices payload")
        raise ApiError(f"Invalid indices payload: {exc}") from exc
