"""
Tests for the REST server plumbing: plain routes, middleware,
error rendering, admin routes and the routes document
"""
from fastapi.testclient import TestClient

import main
from config import Settings
from models import Device


def test_root_and_ping(client):
    root = client.get("/")
    assert root.status_code == 200
    assert root.text == "root."
    assert root.headers["content-type"].startswith("text/plain")

    assert client.get("/ping").text == "pong"


def test_panic_is_recovered(client):
    response = client.get("/panic")

    assert response.status_code == 500
    assert response.json() == {"status": "Internal server error."}


def test_request_id_is_generated(client):
    response = client.get("/ping")

    assert response.headers["X-Request-Id"]


def test_request_id_is_echoed(client):
    response = client.get("/ping", headers={"X-Request-Id": "abc-123"})

    assert response.headers["X-Request-Id"] == "abc-123"


def test_unknown_route_is_404(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"status": "Resource not found."}


def test_render_failure_is_422_without_details(app):
    def broken():
        return {"ip": "1.2.3.4"}

    app.add_api_route("/broken", broken, response_model=Device)

    response = TestClient(app).get("/broken")

    assert response.status_code == 422
    assert response.json() == {"status": "Error rendering response."}


def test_admin_requires_token(client):
    response = client.get("/admin/")

    assert response.status_code == 403
    assert response.json() == {"status": "Forbidden"}

    wrong = client.get("/admin/", headers={"X-Admin-Token": "guess"})
    assert wrong.status_code == 403


def test_admin_routes_with_token(client, settings):
    headers = {"X-Admin-Token": settings.admin_token}

    assert client.get("/admin/", headers=headers).text == "admin: index"
    assert client.get("/admin/accounts", headers=headers).text == "admin: list accounts.."
    assert client.get("/admin/users/42", headers=headers).text == "admin: view user id 42"


def test_admin_closed_without_configured_token():
    client = TestClient(main.create_app(settings=Settings(admin_token=None)))

    response = client.get("/admin/accounts", headers={"X-Admin-Token": ""})

    assert response.status_code == 403


def test_routes_markdown_lists_every_route(app):
    doc = main.routes_markdown(app)

    assert doc.startswith("# Thermoman REST")
    for line in (
        "`GET /rest/v1`",
        "`POST /rest/v1`",
        "`GET /rest/v1/device`",
        "`PUT /rest/v1/mode`",
        "`DELETE /rest/v1/{article_id}`",
        "`GET /admin/users/{user_id}`",
    ):
        assert line in doc


def test_main_prints_routes(capsys):
    assert main.main(["--routes"]) == 0

    out = capsys.readouterr().out
    assert "`GET /rest/v1/temp`" in out


def test_routes_markdown_has_one_entry_per_operation(app):
    doc = main.routes_markdown(app)
    entries = [line for line in doc.splitlines() if line.startswith("- `")]

    paths = app.openapi()["paths"]
    expected = [
        f"- `{method.upper()} {path}`"
        for path, operations in paths.items()
        for method in operations
    ]

    # / /ping /panic, 13 under /rest/v1, 3 under /admin
    assert len(expected) == 19, f"documented operations: {expected}"
    assert len(entries) == len(expected), f"routes document:\n{doc}"
    for prefix in expected:
        assert any(entry.startswith(prefix) for entry in entries), prefix


def test_routes_markdown_hides_trailing_slash_aliases(app):
    doc = main.routes_markdown(app)

    assert "`GET /rest/v1/time/`" not in doc
    assert "`POST /rest/v1/`" not in doc


def test_admin_index_without_trailing_slash(client, settings):
    response = client.get(
        "/admin",
        headers={"X-Admin-Token": settings.admin_token},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert response.text == "admin: index"
