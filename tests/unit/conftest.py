# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境变量隔离与常用 registry fixture。
"""

import pytest

from rpc_openapi.procedures import ProcedureRegistry


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响文档元信息与日志配置
    """
    monkeypatch.setenv("RPC_OPENAPI_ENV", "testing")
    for name in ("APP_NAME", "APP_VERSION", "OPENAPI_BASE_URL", "OPENAPI_DESCRIPTION", "OPENAPI_DOCS_URL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def registry() -> ProcedureRegistry:
    """空的过程注册表."""
    return ProcedureRegistry()
