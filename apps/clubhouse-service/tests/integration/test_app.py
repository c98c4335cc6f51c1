from fastapi.testclient import TestClient

from clubhouse.db.database import get_db


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["version"]
    assert "timestamp" in body


def test_unknown_route_returns_envelope(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Route not found"}


def test_invalid_path_parameter_is_validation_error(client, admin_headers):
    r = client.delete("/api/events/not-a-uuid", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["error"].startswith("event_id:")


def test_unhandled_error_returns_generic_envelope(app):
    def broken_db():
        raise RuntimeError("database exploded")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/api/events")
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error"}


def test_cors_preflight(client):
    r = client.options(
        "/api/events",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_static_uploads_mount(client, admin_headers):
    r = client.post("/api/upload", files={"file": ("a.png", b"\x89PNG", "image/png")}, headers=admin_headers)
    url = r.json()["data"]["url"]
    served = client.get(url)
    assert served.status_code == 200
    assert served.content == b"\x89PNG"
