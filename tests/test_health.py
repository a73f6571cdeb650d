from memberhub.config import settings
from memberhub.db import db_ping
from memberhub.routes import health

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_db_ping_against_live_engine(engine):
    assert db_ping(engine) is True

def test_ready_ignores_redis_without_rate_limiting(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", False)
    monkeypatch.setattr(health, "db_ping", lambda: True)
    monkeypatch.setattr(health, "redis_ping", lambda: False)

    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["checks"] == {"db": True}

def test_ready_reports_failing_checks(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(health, "db_ping", lambda: True)
    monkeypatch.setattr(health, "redis_ping", lambda: False)

    r = client.get("/ready")
    assert r.status_code == 503
    assert r.json() == {"status": "unready", "env": settings.app_env, "checks": {"db": True, "redis": False}}

def test_ready_ok(client, monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)
    monkeypatch.setattr(health, "db_ping", lambda: True)
    monkeypatch.setattr(health, "redis_ping", lambda: True)

    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
