"""
Basic test to verify the project setup is working correctly.
"""

import pytest
from fastapi.testclient import TestClient
from skatespot.main import app, create_app
from skatespot.config import Settings, StorageBackend
from skatespot.core.dependencies import ServiceContainer


def test_app_creation():
    """Test that the FastAPI app can be created successfully."""
    assert app is not None
    assert app.title == "SkateSpot Backend"


def test_root_endpoint(client):
    """Test the root endpoint returns expected response."""
    response = client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["status"] == "running"


def test_request_id_header(client):
    response = client.get("/")
    assert response.headers.get("X-Request-ID")


def test_health_reports_storage(client):
    client.post("/spots", json={"name": "Pico", "type": "Street", "lat": 0, "lng": 0})

    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["details"]["storage"]["status"] == "healthy"
    assert body["details"]["storage"]["name"] == "skatespot-storage"
    assert body["details"]["spots"] == 1


def test_health_degraded_when_writes_fail(client, storage):
    storage.fail_writes = True
    response = client.post("/spots", json={"name": "Pico", "type": "Street", "lat": 0, "lng": 0})

    # The mutation still succeeds
    assert response.status_code == 201

    body = client.get("/health").json()
    assert body["status"] == "degraded"
    assert body["details"]["storage"]["status"] == "degraded"
    assert "Disk full" in body["details"]["storage"]["error"]


def test_health_counts_client_errors(client):
    client.post("/spots", json={"name": "A", "type": "Street", "lat": 0, "lng": 0})
    client.get("/spots/missing")
    client.get("/no-such-route")

    counts = client.get("/health").json()["error_statistics"]["error_counts"]

    assert counts == {"VALIDATION_ERROR": 1, "SPOT_NOT_FOUND": 1, "NOT_FOUND": 1}


def test_error_statistics_are_per_app(test_settings, storage, clock):
    first = create_app(test_settings, ServiceContainer(test_settings, storage=storage, clock=clock))
    second = create_app(test_settings, ServiceContainer(test_settings, storage=storage, clock=clock))

    with TestClient(first) as client:
        client.get("/spots/missing")
        assert client.get("/health").json()["error_statistics"]["total_errors"] == 1

    with TestClient(second) as client:
        assert client.get("/health").json()["error_statistics"]["total_errors"] == 0


def test_file_backend_app(tmp_path):
    settings = Settings(log_format="text", storage={"backend": "file", "directory": str(tmp_path)})
    assert settings.storage.backend == StorageBackend.FILE

    with TestClient(create_app(settings)) as client:
        client.post("/spots", json={"name": "Pico", "type": "Other", "lat": 1, "lng": 2})

    assert (tmp_path / "skatespot-storage.json").exists()


if __name__ == "__main__":
    pytest.main([__file__])
