"""
Application state - values built once at startup.
"""
from __future__ import annotations

from dataclasses import dataclass

import httpx
from fastapi import Request

from fetchproxy.errors import InternalError


@dataclass(frozen=True)
class AppState:
    """
    Application state container.
    Built by the lifespan handler, stored on ``app.state.proxy`` and
    injected into routes via the ``get_app_state`` dependency.
    Never mutated after startup.
    """

    readme: str
    http_client: httpx.AsyncClient


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency returning the state attached to the running app."""
    state = getattr(request.app.state, "proxy", None)
    if state is None:
        raise InternalError("Application state not initialized")
    return state
