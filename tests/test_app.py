from activities.main import limiter


def test_health_probes(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}


def test_security_headers_on_api_responses(client):
    r = client.get("/api/v1/todos")
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"


def test_default_rate_limit_applies_when_enabled(client, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    try:
        statuses = [client.get("/api/v1/todos").status_code for _ in range(101)]
    finally:
        limiter.reset()

    assert statuses[0] == 200
    assert statuses[-1] == 429


def test_rate_limit_switched_off(client):
    statuses = {client.get("/api/v1/todos").status_code for _ in range(101)}
    assert statuses == {200}
