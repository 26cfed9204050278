from perfboard.core.exceptions import StorageUnavailableError


def test_health_ok(client):
    """Test health check endpoint"""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "storage": "memory"}


def test_health_reports_storage_outage(client, store, monkeypatch):
    """A backend that cannot be reached answers 503 with a retry hint"""
    def _down():
        raise StorageUnavailableError("Database is unavailable")

    monkeypatch.setattr(store, "ping", _down)
    r = client.get("/health")
    assert r.status_code == 503
    body = r.json()
    assert body["error_code"] == "STORAGE_UNAVAILABLE"
    assert body["details"]["retryable"] is True


def test_root_endpoint(client):
    """Test root endpoint"""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Performance Dashboard"
    assert data["status"] == "ok"
    assert "docs" in data
    assert "health" in data
