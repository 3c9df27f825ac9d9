import logging

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import app
from app.utils.errors import ConflictError, NotFoundError, ValidationError, error_response


def test_root_and_lifespan_database(tmp_path, monkeypatch):
    monkeypatch.setattr("app.main.settings.SQLALCHEMY_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    app.dependency_overrides.clear()

    with TestClient(app) as client:
        assert client.get("/").json() == {"message": "SilverConnect API is running"}
        assert app.state.database.is_connected
        res = client.post(
            "/api/register",
            json={"fullName": "Ann", "email": "ann@example.com", "password": "pw"},
        )
        assert res.status_code == 200
        assert len(client.get("/api/users").json()) == 1

    assert not app.state.database.is_connected


def test_cors_preflight_for_configured_origin():
    client = TestClient(app)
    response = client.options(
        "/",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
    )
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"


def test_error_response_logs(caplog):
    caplog.set_level(logging.ERROR, logger="app.utils.errors")
    with pytest.raises(HTTPException):
        raise error_response("Invalid", {"field": "bad"})
    assert any(
        "Invalid" in r.getMessage() and "'field': 'bad'" in r.getMessage()
        for r in caplog.records
    )


def test_domain_errors_map_to_status_codes():
    assert NotFoundError("missing").status_code == 404
    assert ValidationError("bad").status_code == 400
    conflict = ConflictError("again", {"bookingId": "review_exists"})
    assert conflict.status_code == 409
    assert conflict.message == "again"
    assert conflict.field_errors == {"bookingId": "review_exists"}


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings(_env_file=None)
    assert settings.CORS_ORIGINS == ["https://a.example.com", "https://b.example.com"]
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.placeholder_avatar("Ann") == "https://i.pravatar.cc/150?u=Ann"
