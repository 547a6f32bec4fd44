# ─────────────────────────────────────────────────────────────────
# errors.py — Error Types & Exception Handlers
#
# Handlers raise; they never build error responses themselves.
# The handlers registered here turn every raised error into the
# same JSON shape:
#
#   {"status": "Invalid request.", "error": "missing required Article fields"}
#   {"status": "Resource not found."}
#
# Render failures (a handler returned something that does not fit
# its response model) are logged in full but the client only gets
# a generic status, never the underlying error text.
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from models import ErrResponse

logger = logging.getLogger("errors")


class AppError(Exception):
    """Base class for errors that map straight onto an HTTP status."""

    status_code = 500
    status_text = "Internal server error."

    def __init__(self, error: Optional[str] = None, code: Optional[int] = None):
        super().__init__(error or self.status_text)
        self.error = error
        self.code = code

    def payload(self) -> ErrResponse:
        return ErrResponse(status=self.status_text, code=self.code, error=self.error)


class InvalidRequest(AppError):
    status_code = 400
    status_text = "Invalid request."


class NotFound(AppError):
    status_code = 404
    status_text = "Resource not found."


class RenderError(AppError):
    status_code = 422
    status_text = "Error rendering response."


def error_response(err: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=err.status_code,
        content=err.payload().model_dump(exclude_none=True),
    )


def describe_validation_errors(errors) -> str:
    """Flattens pydantic's error list into one readable line."""
    parts = []
    for e in errors:
        loc = ".".join(str(p) for p in e.get("loc", ())[1:])
        parts.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    return "; ".join(parts)


async def app_error_handler(request: Request, exc: AppError):
    logger.info(f"{request.method} {request.url.path} → {exc.status_code}: {exc}")
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed or mistyped body → 400, not FastAPI's default 422
    return error_response(InvalidRequest(describe_validation_errors(exc.errors())))


async def render_error_handler(request: Request, exc: ResponseValidationError):
    logger.error(f"Error rendering {request.method} {request.url.path}: {exc.errors()}")
    return error_response(RenderError())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(NotFound())
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrResponse(status=str(exc.detail)).model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ResponseValidationError, render_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
