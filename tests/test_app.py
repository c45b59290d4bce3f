import pytest

from src.attendance_engine.attendance_engine.container import build_container
from src.attendance_engine.attendance_engine.core.exceptions import ValidationError
from src.attendance_engine.attendance_engine.main import create_app


def test_create_app_with_testing_settings():
    app = create_app("config.testing")

    client = app.test_client()
    res = client.get("/health")

    assert app.config["TESTING"] is True
    assert res.get_json() == {"status": "ok", "store": "http"}
    assert client.get("/api/attendance/today").status_code == 401


def test_settings_module_follows_app_env(monkeypatch):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"
    monkeypatch.setenv("APP_ENV", "whatever")
    assert get_settings_module() == "config.development"


def test_build_container_validates_backend():
    with pytest.raises(ValidationError):
        build_container(store_backend="sqlite")
    with pytest.raises(ValidationError):
        build_container(store_backend="http", api_base_url=None)


def test_http_container_builds_request_scoped_services():
    container = build_container(store_backend="http", api_base_url="http://hr-api.test")

    first = container.attendance_service("a")
    second = container.attendance_service("b")

    assert first is not second
    assert container.api_client is not None
