import pytest
from pydantic import ValidationError

from rpc_openapi.settings import Settings


@pytest.mark.unit
def test_settings_defaults() -> None:
    settings = Settings.load()

    assert settings.app_name == "rpc-openapi"
    assert settings.app_version == "1.0.0"
    assert settings.openapi_base_url == "http://localhost:5000/api"
    assert settings.openapi_description is None
    assert settings.log_json is False
    assert settings.is_production is False


@pytest.mark.unit
def test_settings_strips_trailing_slash_from_base_url(monkeypatch) -> None:
    monkeypatch.setenv("OPENAPI_BASE_URL", "https://example.com/api///")

    assert Settings.load().openapi_base_url == "https://example.com/api"


@pytest.mark.unit
def test_settings_treats_blank_description_as_missing(monkeypatch) -> None:
    monkeypatch.setenv("OPENAPI_DESCRIPTION", "   ")

    assert Settings.load().openapi_description is None


@pytest.mark.unit
def test_settings_normalizes_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert Settings.load().log_level == "DEBUG"


@pytest.mark.unit
def test_settings_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    with pytest.raises(ValidationError):
        Settings.load()


@pytest.mark.unit
def test_settings_detects_production(monkeypatch) -> None:
    monkeypatch.setenv("RPC_OPENAPI_ENV", "Production")

    assert Settings.load().is_production is True
