"""
FetchProxy - URL forwarding proxy service

Entry point for the FastAPI application.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from fetchproxy.config import AppConfig, get_config
from fetchproxy.errors import register_error_handlers
from fetchproxy.logging import get_logger
from fetchproxy.routers import document, proxy
from fetchproxy.services.document import load_document
from fetchproxy.state import AppState

load_dotenv()

logger = get_logger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = [
    "X-Requested-With",
    "Access-Control-Allow-Origin",
    "X-HTTP-Method-Override",
    "Content-Type",
    "Authorization",
    "Accept",
]
CORS_MAX_AGE = 86400


def _init_readme(config: AppConfig) -> str:
    """Load the README served on the root route."""
    readme = load_document(config.readme_path)
    logger.info(f"Loaded README from {config.readme_path} ({len(readme)} chars)")
    return readme


def _init_http_client() -> httpx.AsyncClient:
    """Initialize shared HTTP client for upstream requests."""
    client = httpx.AsyncClient(follow_redirects=True)
    logger.info("HTTP client initialized")
    return client


async def _shutdown_http_client(client: httpx.AsyncClient) -> None:
    """Close the shared HTTP client."""
    await client.aclose()
    logger.info("HTTP client closed")


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the application; ``config`` defaults to the environment settings."""
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - handles startup and shutdown."""
        state = AppState(readme=_init_readme(config), http_client=_init_http_client())
        app.state.proxy = state

        yield

        await _shutdown_http_client(state.http_client)

    app = FastAPI(
        title="FetchProxy",
        description="Forwards GET /<url> to <url> and relays the response",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=CORS_MAX_AGE,
    )
    register_error_handlers(app)

    # Order matters: the proxy route matches every path
    app.include_router(document.router)
    app.include_router(proxy.router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    config = get_config()
    logger.info(f"Server running on port {config.port}")
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
