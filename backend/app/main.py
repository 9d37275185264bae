"""ASGI entry point: ``uvicorn --factory app.main:create_app`` from the backend directory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.markets import create_market_aggregator, create_markets_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Root logging setup for the served process, level taken from ``LOG_LEVEL``."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the application.

    Pass ``client`` to inject a preconfigured HTTP client (tests); the caller
    then owns it. Otherwise the app creates one and closes it on shutdown.
    """
    http_client = client or httpx.AsyncClient(follow_redirects=True)
    aggregator = create_market_aggregator(http_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        logger.info("Markets service started")
        try:
            yield
        finally:
            if client is None:
                await http_client.aclose()
            logger.info("Markets service stopped")

    app = FastAPI(title="Markets", version="0.1.0", lifespan=lifespan)
    app.include_router(create_markets_router(aggregator))
    return app
