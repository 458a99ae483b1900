from fastapi.testclient import TestClient

from echowrite.main import app


def test_health_endpoint():
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_style_catalogue_endpoint():
    client = TestClient(app)
    r = client.get("/echowrite/styles")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 7
    assert "Humanizer" in body["humanization"]
    assert sum(len(styles) for styles in body.values()) == 20
