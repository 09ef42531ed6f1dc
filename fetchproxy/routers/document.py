"""
Document router - serves the README on the root route and silences favicon requests.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse

from fetchproxy.errors import ErrorResponse, RenderError
from fetchproxy.logging import get_logger
from fetchproxy.services.document import render_document
from fetchproxy.state import AppState, get_app_state

logger = get_logger(__name__)

router = APIRouter(tags=["document"])


@router.get(
    "/",
    response_class=HTMLResponse,
    responses={500: {"model": ErrorResponse, "description": "README could not be rendered"}}
)
async def readme(state: AppState = Depends(get_app_state)) -> HTMLResponse:
    """Render the README loaded at startup as HTML."""
    try:
        content = render_document(state.readme)
    except Exception as e:
        logger.opt(exception=e).error(f"Error parsing markdown: {e}")
        raise RenderError()
    return HTMLResponse(content=content, status_code=200)


@router.get("/favicon.ico", status_code=204, response_class=Response)
async def favicon() -> Response:
    """No icon is served; answering here keeps the request away from the proxy."""
    return Response(status_code=204)
