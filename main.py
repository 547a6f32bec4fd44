# ─────────────────────────────────────────────────────────────────
# main.py — Thermostat REST Server
#
# Boot the server:
#
#   $ python main.py
#
# Print the routes document instead of serving:
#
#   $ python main.py --routes
#
# Client requests:
#
#   $ curl http://localhost:3333/
#   root.
#
#   $ curl http://localhost:3333/rest/v1/1
#   {"id":"1","user_id":100,"title":"Hi","slug":"hi","user":{...},"elapsed":10}
#
#   $ curl -X DELETE http://localhost:3333/rest/v1/1
#   $ curl http://localhost:3333/rest/v1/1
#   {"status":"Resource not found."}
#
#   $ curl -X POST -d '{"id":"will-be-omitted","title":"awesomeness"}' http://localhost:3333/rest/v1
#   {"id":"97","user_id":0,"title":"awesomeness","slug":"","elapsed":10}
# ─────────────────────────────────────────────────────────────────

import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse

from config import Settings, get_settings
from database import ArticleStore, ThermostatState
from errors import register_error_handlers
from logs import setup_logging
from middleware import (
    AdminACLMiddleware,
    RecovererMiddleware,
    RequestIDMiddleware,
    RequestLogMiddleware,
    URLFormatMiddleware,
)
from routes.admin import router as admin_router
from routes.articles import router as articles_router
from routes.thermostat import router as thermostat_router

logger = logging.getLogger("main")

VERSION = "1.0.0"

# ─────────────────────────────────────────────────────────────────
# Plain routes: liveness and a deliberate crash for the recoverer
# ─────────────────────────────────────────────────────────────────

root_router = APIRouter(default_response_class=PlainTextResponse)


@root_router.get("/")
def root():
    return "root."


@root_router.get("/ping")
def ping():
    return "pong"


@root_router.get("/panic")
def panic():
    raise RuntimeError("test")


# ─────────────────────────────────────────────────────────────────
# APP FACTORY
# ─────────────────────────────────────────────────────────────────

def create_app(
    settings: Optional[Settings] = None,
    thermostat: Optional[ThermostatState] = None,
    articles: Optional[ArticleStore] = None,
) -> FastAPI:
    """
    Builds a fully wired server with its own state.

    Tests pass their own settings or state; the module-level `app`
    below uses the environment.
    """

    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} REST",
        description="Simulated thermostat and articles REST server",
        version=VERSION,
    )

    app.state.settings = settings
    app.state.thermostat = thermostat or ThermostatState(
        ip=settings.device_ip,
        ssid=settings.device_ssid,
        passphrase=settings.device_passphrase,
    )
    app.state.articles = articles or ArticleStore()

    # Added innermost first; RequestIDMiddleware ends up outermost
    app.add_middleware(AdminACLMiddleware, token=settings.admin_token)
    app.add_middleware(URLFormatMiddleware)
    app.add_middleware(RecovererMiddleware)
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_error_handlers(app)

    app.include_router(root_router)
    # thermostat before articles: its static paths must win over /{article_key}
    app.include_router(thermostat_router)
    app.include_router(articles_router)
    app.include_router(admin_router)

    return app


# ─────────────────────────────────────────────────────────────────
# ROUTES DOCUMENT
# ─────────────────────────────────────────────────────────────────

def routes_markdown(app: FastAPI) -> str:
    """
    Renders every documented route as a Markdown document.

    Built from the OpenAPI paths, which list routes of included
    routers at any depth.
    """

    lines = [
        f"# {app.title}",
        "",
        app.description,
        "",
        "## Routes",
        "",
    ]
    for path, operations in app.openapi()["paths"].items():
        for method, operation in operations.items():
            lines.append(f"- `{method.upper()} {path}` → {operation.get('summary', '')}")
    lines.append("")
    return "\n".join(lines)


app = create_app()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Thermostat REST server")
    parser.add_argument("--routes", action="store_true", help="Generate router documentation")
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    args = parser.parse_args(argv)

    if args.routes:
        print(routes_markdown(app))
        return 0

    settings = app.state.settings
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    return 0


if __name__ == "__main__":
    main()
