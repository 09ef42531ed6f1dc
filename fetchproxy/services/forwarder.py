"""
Forwarder service - fetches the target URL and relays the upstream reply.

The forwarding target is taken verbatim from the request path; no scheme
check or allow-list is applied, so any reachable host can be fetched.
"""
from __future__ import annotations

from typing import Any, AsyncIterator, Dict

import httpx
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from fetchproxy.errors import ClientInputError, UpstreamError

# Assumed when the upstream sends no content-type; also relayed as the header
DEFAULT_CONTENT_TYPE = "application/json"


def extract_target_url(scope: Dict[str, Any]) -> str:
    """
    Rebuild the forwarding target from the raw request path and query.

    Exactly one leading slash is stripped; the rest is used as-is.

    Raises:
        ClientInputError: if nothing remains after the slash
    """
    raw_path = scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1")
    else:
        path = scope.get("path", "")

    query_string = scope.get("query_string", b"").decode("latin-1")
    if query_string:
        path = f"{path}?{query_string}"

    target = path[1:] if path.startswith("/") else path
    if not target:
        raise ClientInputError()
    return target


async def fetch_upstream(url: str, client: httpx.AsyncClient) -> httpx.Response:
    """
    Issue a plain GET to the target.

    The response is returned unread (streaming mode); the caller owns it
    and must close it.
    """
    request = client.build_request("GET", url)
    return await client.send(request, stream=True)


async def _stream_body(upstream: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()


def upstream_content_type(upstream: httpx.Response) -> str:
    return upstream.headers.get("content-type") or DEFAULT_CONTENT_TYPE


async def relay_response(upstream: httpx.Response) -> Response:
    """
    Turn an open upstream response into the reply for the caller.

    - non-2xx: closed and raised as UpstreamError
    - json: parsed and re-serialized
    - text: buffered and sent as the original bytes
    - anything else: streamed chunk by chunk, closed once drained
    """
    try:
        if not upstream.is_success:
            raise UpstreamError(upstream.status_code)

        content_type = upstream_content_type(upstream)
        headers = {"content-type": content_type}
        kind = content_type.lower()

        if "json" in kind:
            await upstream.aread()
            return JSONResponse(content=upstream.json(), headers=headers)

        if "text" in kind:
            await upstream.aread()
            return Response(content=upstream.content, headers=headers)

        # Closes the upstream even when the body is never iterated
        return StreamingResponse(
            _stream_body(upstream),
            headers=headers,
            background=BackgroundTask(upstream.aclose),
        )
    except Exception:
        await upstream.aclose()
        raise
