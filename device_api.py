# ─────────────────────────────────────────────────────────────────
# device_api.py — Thermoman Device API
#
# Serves the operations listed in routes/device.py:
#
#   $ python device_api.py
#   $ curl http://localhost:8080/device
#   {"ip":"192.168.1.123","ssid":"MrWhite","currenttime":"..."}
#
# CORS is wide open so a web UI on another host or port can call
# the API during local development without a reverse proxy.
# ─────────────────────────────────────────────────────────────────

import argparse
import logging
from typing import Callable, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings
from database import ThermostatState
from errors import describe_validation_errors
from logs import setup_logging
from models import Error
from routes.device import DEFAULT_HANDLERS, OPERATIONS

logger = logging.getLogger("device_api")

VERSION = "1.0.0"

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
CORS_HEADERS = [
    "Accept",
    "Authorization",
    "Content-Length",
    "Cache-Control",
    "Accept-Encoding",
    "Content-Type",
    "X-CSRF-Token",
]
CORS_MAX_AGE = 300  # maximum value not ignored by any major browser


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=Error(code=exc.status_code, message=str(exc.detail)).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=Error(code=400, message=describe_validation_errors(exc.errors())).model_dump(),
    )


def register_operations(app: FastAPI, handlers: Dict[str, Callable]):
    """
    Adds one route per operation id. Handlers for unknown
    operation ids are rejected so a typo cannot go unnoticed.
    """

    unknown = set(handlers) - set(OPERATIONS)
    if unknown:
        raise ValueError(f"Unknown operation id(s): {', '.join(sorted(unknown))}")

    for op_id, (method, path, response_model) in OPERATIONS.items():
        handler = handlers.get(op_id, DEFAULT_HANDLERS[op_id])
        app.add_api_route(
            path,
            handler,
            methods=[method],
            operation_id=op_id,
            response_model=response_model,
            name=op_id,
        )
        logger.debug(f"Registered {op_id}: {method} {path} → {handler.__name__}")


def create_app(
    handlers: Optional[Dict[str, Callable]] = None,
    settings: Optional[Settings] = None,
    thermostat: Optional[ThermostatState] = None,
) -> FastAPI:
    """Builds the device API. `handlers` overrides implementations by operation id."""

    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="ThermoMan",
        description="Device status API",
        version=VERSION,
    )
    app.state.settings = settings
    app.state.thermostat = thermostat or ThermostatState(
        ip=settings.device_ip,
        ssid=settings.device_ssid,
        passphrase=settings.device_passphrase,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        allow_credentials=True,
        max_age=CORS_MAX_AGE,
    )
    if settings.cors_debug:
        logger.info(f"CORS enabled for all origins, methods {CORS_METHODS}")

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    register_operations(app, handlers or {})
    return app


app = create_app()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Thermoman device API")
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    args = parser.parse_args(argv)

    settings = app.state.settings
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.device_api_port,
    )
    return 0


if __name__ == "__main__":
    main()
