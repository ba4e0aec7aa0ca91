from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI, status

from adapters.market_data.yahoo_quotes import YahooQuoteProvider
from apps.api.indices import load_indices
from core.domain.quotes import AggregateResponse
from core.ports.quote_provider import QuoteProvider
from core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _build_provider(settings: Settings) -> QuoteProvider | None:
    if not settings.live_quotes_enabled:
        return None
    return YahooQuoteProvider(
        settings.quote_provider_url,
        timeout_seconds=settings.quote_timeout_seconds,
        user_agent=settings.quote_user_agent,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _configure_logging()
    settings = get_settings()
    provider = _build_provider(settings)
    logger.info(
        "Quote API starting live=%s provider=%s timeout=%ss",
        provider is not None,
        settings.quote_provider_url,
        settings.quote_timeout_seconds,
    )

    app.state.settings = settings
    app.state.quote_provider = provider

    try:
        yield
    finally:
        if provider is not None:
            await provider.close()


app = FastAPI(title="World Trade Indices API", version="0.1.0", lifespan=lifespan)


def get_app_settings() -> Settings:
    return app.state.settings


def get_quote_provider() -> QuoteProvider | None:
    return app.state.quote_provider


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
QuoteProviderDep = Annotated[QuoteProvider | None, Depends(get_quote_provider)]


@app.get("/health", summary="Health check", status_code=status.HTTP_200_OK)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.get(
    "/api/indices",
    summary="Latest index quotes",
    status_code=status.HTTP_200_OK,
    response_model=AggregateResponse,
    response_model_exclude_none=True,
)
async def read_indices(settings: SettingsDep, provider: QuoteProviderDep) -> AggregateResponse:
    return await load_indices(provider, timeout_seconds=settings.quote_timeout_seconds)


def main() -> None:
    _configure_logging()
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()


__all__ = ["app", "main"]
