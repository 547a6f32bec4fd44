# ─────────────────────────────────────────────────────────────────
# middleware.py — Request Middleware Chain
#
# Registered in main.create_app, outermost first:
#
#   RequestIDMiddleware    → tags each request with X-Request-Id
#   RequestLogMiddleware   → one log line per request
#   RecovererMiddleware    → crash in a handler → generic 500
#   URLFormatMiddleware    → /rest/v1/1.json → /rest/v1/1
#   AdminACLMiddleware     → sets request.state.acl_admin
# ─────────────────────────────────────────────────────────────────

import logging
import re
import time
import traceback
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from models import ErrResponse

logger = logging.getLogger("middleware")

REQUEST_ID_HEADER = "X-Request-Id"
ADMIN_TOKEN_HEADER = "X-Admin-Token"

# Extension on the last path segment, e.g. "/articles/1.json"
URL_FORMAT_RE = re.compile(r"^(?P<path>.*/[^/.]+)\.(?P<format>[A-Za-z0-9]+)$")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuses the client's X-Request-Id or generates one."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start_time) * 1000)

        request_id = getattr(request.state, "request_id", "-")
        logger.info(
            f'[{request_id}] "{request.method} {request.url.path}" '
            f"{response.status_code} in {duration_ms}ms"
        )
        return response


class RecovererMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: any exception that escapes a handler is
    logged with its traceback and answered with a generic 500.
    Nothing about the failure is sent to the client.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.error(
                f"Panic serving {request.method} {request.url.path}\n{traceback.format_exc()}"
            )
            return JSONResponse(
                status_code=500,
                content=ErrResponse(status="Internal server error.").model_dump(exclude_none=True),
            )


class URLFormatMiddleware(BaseHTTPMiddleware):
    """
    Strips a format extension from the path before routing and
    records it on request.state.url_format ("" when there is none).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.url_format = ""

        match = URL_FORMAT_RE.match(request.scope["path"])
        if match:
            request.scope["path"] = match.group("path")
            request.state.url_format = match.group("format").lower()

        return await call_next(request)


class AdminACLMiddleware(BaseHTTPMiddleware):
    """
    Sets request.state.acl_admin. With no token configured the
    flag is always False.
    """

    def __init__(self, app, token: Optional[str] = None):
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        sent = request.headers.get(ADMIN_TOKEN_HEADER)
        request.state.acl_admin = bool(self.token) and sent == self.token
        return await call_next(request)
