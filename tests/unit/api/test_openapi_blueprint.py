import pytest
import structlog
from flask import Flask
from pydantic import BaseModel

from rpc_openapi.api import create_openapi_blueprint
from rpc_openapi.core.exceptions import UnknownPathFieldError
from rpc_openapi.procedures import Procedure, ProcedureRegistry
from rpc_openapi.settings import Settings
from rpc_openapi.utils.structlog_config import configure_logging, structlog_config


class _GetUserInput(BaseModel):
    id: str


def _create_app(registry: ProcedureRegistry) -> Flask:
    app = Flask(__name__)
    app.register_blueprint(create_openapi_blueprint(registry, Settings.load()), url_prefix="/api")
    return app


@pytest.mark.unit
def test_openapi_json_returns_generated_document(registry: ProcedureRegistry) -> None:
    registry.register(Procedure(name="get_user", method="GET", path="/users/{id}", input=_GetUserInput))
    client = _create_app(registry).test_client()

    response = client.get("/api/openapi.json")
    payload = response.get_json()

    assert response.status_code == 200
    assert payload["openapi"] == "3.1.0"
    assert payload["info"]["title"] == "rpc-openapi"
    assert list(payload["paths"]) == ["/users/{id}"]
    assert "error" in payload["components"]["responses"]


@pytest.mark.unit
def test_root_points_to_document_url(registry: ProcedureRegistry, monkeypatch) -> None:
    monkeypatch.setenv("APP_NAME", "用户服务")
    client = _create_app(registry).test_client()

    response = client.get("/api/")

    assert response.status_code == 200
    assert response.get_json() == {"title": "用户服务", "version": "1.0.0", "openapi_url": "/api/openapi.json"}


@pytest.mark.unit
def test_contract_errors_surface_when_blueprint_is_created(registry: ProcedureRegistry) -> None:
    registry.register(Procedure(name="get_thing", method="GET", path="/things/{id}"))

    with pytest.raises(UnknownPathFieldError):
        create_openapi_blueprint(registry, Settings.load())


@pytest.mark.unit
def test_blueprint_loads_settings_when_not_given(registry: ProcedureRegistry, monkeypatch) -> None:
    monkeypatch.setenv("APP_VERSION", "9.9.9")
    app = Flask(__name__)
    app.register_blueprint(create_openapi_blueprint(registry, name="docs"), url_prefix="/docs")

    payload = app.test_client().get("/docs/openapi.json").get_json()

    assert payload["info"]["version"] == "9.9.9"
    assert payload["paths"] == {}


@pytest.fixture
def _restore_logging():
    previous = structlog_config.settings
    yield
    if previous is not None:
        configure_logging(previous)


@pytest.mark.unit
@pytest.mark.usefixtures("_restore_logging")
def test_blueprint_applies_loaded_settings_to_logging(registry: ProcedureRegistry, monkeypatch) -> None:
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    create_openapi_blueprint(registry)

    assert structlog_config.settings.log_json is True
    assert structlog_config.settings.log_level == "ERROR"
    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
