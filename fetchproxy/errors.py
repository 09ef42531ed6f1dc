"""
Error taxonomy - every per-request failure maps to a JSON error envelope.

- ClientInputError: the forwarding target is empty (400)
- UpstreamError: the upstream answered outside 2xx (mirrors its status)
- RenderError: the document could not be rendered to HTML (500)
- InternalError: anything else along the proxy path (500, with message)
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope returned on every failure path."""
    error: str = Field(examples=["Internal server error"])
    message: Optional[str] = Field(default=None, examples=["All connection attempts failed"])


class ProxyError(Exception):
    """Base class for errors converted to a JSON response at the request boundary."""

    status_code: int = 500

    def __init__(self, error: str, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, message=self.message)


class ClientInputError(ProxyError):
    status_code = 400

    def __init__(self, error: str = "Invalid URL"):
        super().__init__(error)


class UpstreamError(ProxyError):
    """The upstream replied with a non-success status; the status is relayed as-is."""

    def __init__(self, upstream_status: int):
        super().__init__(
            f"External resource responded with {upstream_status}",
            status_code=upstream_status,
        )
        self.upstream_status = upstream_status


class RenderError(ProxyError):
    status_code = 500

    def __init__(self):
        super().__init__("Failed to render README")


class InternalError(ProxyError):
    status_code = 500

    def __init__(self, message: str):
        super().__init__("Internal server error", message=message)


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope for all ProxyError subclasses."""
    app.add_exception_handler(ProxyError, proxy_error_handler)
