"""
Shared test fixtures and helpers.
"""
from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI

from fetchproxy.config import AppConfig
from fetchproxy.errors import register_error_handlers
from fetchproxy.routers import document, proxy
from fetchproxy.state import AppState


SAMPLE_README = "# FetchProxy\n\nFetches **any** URL for you."

UPSTREAM = "https://upstream.test"


def build_app(state: AppState | None, *routers) -> FastAPI:
    """Create a bare FastAPI app with the given routers and optional pre-built state."""
    test_app = FastAPI()
    register_error_handlers(test_app)
    for router in routers:
        test_app.include_router(router)
    if state is not None:
        test_app.state.proxy = state
    return test_app


@pytest.fixture
def readme_file(tmp_path) -> Path:
    """Write a README to a temporary location."""
    path = tmp_path / "readme.md"
    path.write_text(SAMPLE_README, encoding="utf-8")
    return path


@pytest.fixture
def test_config(readme_file) -> AppConfig:
    """Config pointing at the temporary README."""
    return AppConfig(readme_path=str(readme_file))


@pytest.fixture
def app_state() -> AppState:
    """State as the lifespan would build it, with the sample README."""
    return AppState(
        readme=SAMPLE_README,
        http_client=httpx.AsyncClient(follow_redirects=True),
    )


@pytest.fixture
def proxy_app(app_state) -> FastAPI:
    """App wired like production: document routes first, then the catch-all proxy."""
    return build_app(app_state, document.router, proxy.router)


@pytest.fixture
def clear_config_cache():
    """Reset the cached config around tests that change the environment."""
    from fetchproxy.config import get_config
    get_config.cache_clear()
    yield
    get_config.cache_clear()
