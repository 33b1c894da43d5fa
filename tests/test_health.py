"""
Testes dos endpoints de health check
"""


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_health_live(client):
    assert client.get("/health/live").json() == {"status": "alive"}


def test_health_ready(client):
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_health_detailed(client):
    response = client.get("/health/detailed")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"] == "ok"
    assert "redis" not in data["checks"]
