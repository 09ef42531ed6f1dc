"""
Proxy router - forwards every other GET to the URL found in its path.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from fetchproxy.errors import ErrorResponse, InternalError, ProxyError, UpstreamError
from fetchproxy.logging import get_logger
from fetchproxy.services.forwarder import extract_target_url, fetch_upstream, relay_response
from fetchproxy.state import AppState, get_app_state

logger = get_logger(__name__)

router = APIRouter(tags=["proxy"])


def _map_forward_error(error: Exception, url: str | None) -> ProxyError:
    """Map failures along the proxy path to the JSON error envelope."""
    if isinstance(error, UpstreamError):
        logger.warning(f"Upstream {url} responded with {error.upstream_status}")
        return error

    if isinstance(error, ProxyError):
        return error

    logger.opt(exception=error).error(f"Error proxying request to {url}: {error}")
    return InternalError(str(error))


@router.get(
    "/{target:path}",
    response_class=Response,
    responses={
        200: {
            "description": "Upstream body relayed with its content-type. JSON is re-serialized, text is sent verbatim, anything else is streamed.",
        },
        400: {"model": ErrorResponse, "description": "Empty forwarding target"},
        500: {"model": ErrorResponse, "description": "Network, parse or stream failure"},
    }
)
async def forward(request: Request, state: AppState = Depends(get_app_state)) -> Response:
    """
    Fetch the URL given by the request path and relay its reply.

    **Example:** `GET /https://api.example.com/items?page=2` fetches
    `https://api.example.com/items?page=2`.

    **Flow:**
    1. Strip the leading slash from the raw path and query
    2. GET the resulting URL
    3. Mirror non-2xx statuses with an error body
    4. Relay the body according to its content-type
    """
    url = None
    try:
        url = extract_target_url(request.scope)
        logger.info(f"Proxying request to: {url}")
        upstream = await fetch_upstream(url, state.http_client)
        return await relay_response(upstream)
    except Exception as e:
        raise _map_forward_error(e, url)
