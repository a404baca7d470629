"""rpc-openapi - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- 生成器本身不读取配置; 只有文档组装入口与 HTTP 边界消费 Settings.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rpc_openapi.constants.system_constants import LogLevel

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_NAME = "rpc-openapi"
APP_VERSION = "1.0.0"

DEFAULT_OPENAPI_BASE_URL = "http://localhost:5000/api"
DEFAULT_LOG_LEVEL = "INFO"


class Settings(BaseSettings):
    """文档生成与运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="RPC_OPENAPI_ENV")

    # 文档 info.title / info.version
    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = Field(default=APP_VERSION, validation_alias="APP_VERSION")

    openapi_base_url: str = Field(default=DEFAULT_OPENAPI_BASE_URL, validation_alias="OPENAPI_BASE_URL")
    openapi_description: str | None = Field(default=None, validation_alias="OPENAPI_DESCRIPTION")
    openapi_docs_url: str | None = Field(default=None, validation_alias="OPENAPI_DOCS_URL")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {level.value for level in LogLevel}:
            raise ValueError(f"LOG_LEVEL 无效: {value}")
        return normalized

    @field_validator("openapi_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or "/"

    @field_validator("openapi_description", "openapi_docs_url", mode="before")
    @classmethod
    def _strip_blank_to_none(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()


__all__ = ["APP_NAME", "APP_VERSION", "Settings"]
