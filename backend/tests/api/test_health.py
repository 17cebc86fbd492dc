"""API tests for the health check and root endpoints."""


def test_healthcheck(client, settings) -> None:
    response = client.get("/api/v1/healthcheck/")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.environment,
        "database": "connected",
        "redis": "disconnected",
    }


def test_unknown_route_uses_envelope(client) -> None:
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False
