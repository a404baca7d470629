"""OpenAPI 文档的 HTTP 出口(Flask Blueprint).

文档在创建 Blueprint 时一次性生成: schema 契约错误会在应用启动阶段直接抛出,
而不是在第一次请求 `/openapi.json` 时才暴露.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from flask import Blueprint, Response, jsonify, request

from rpc_openapi.generator.document import build_document_from_settings
from rpc_openapi.settings import Settings
from rpc_openapi.utils.structlog_config import configure_logging, get_api_logger

if TYPE_CHECKING:
    from rpc_openapi.procedures import Procedure

logger = get_api_logger()


def create_openapi_blueprint(
    procedures: Iterable[Procedure],
    settings: Settings | None = None,
    *,
    name: str = "openapi",
) -> Blueprint:
    """创建暴露 OpenAPI 文档的 Blueprint.

    路由:
    - `GET /`: 可发现性入口, 返回文档地址与标题;
    - `GET /openapi.json`: 完整文档.

    Args:
        procedures: 过程集合(通常是 ProcedureRegistry).
        settings: 配置, 缺省时通过 `Settings.load()` 读取; 同时用于重新配置日志.
        name: Blueprint 名称.

    Raises:
        AppError: 文档生成失败.

    """
    resolved = settings or Settings.load()
    configure_logging(resolved)
    document = build_document_from_settings(procedures, resolved)
    blueprint = Blueprint(name, __name__)

    @blueprint.get("/")
    def openapi_root() -> tuple[Response, int]:
        prefix = request.path.rstrip("/")
        return jsonify(
            {
                "title": document["info"]["title"],
                "version": document["info"]["version"],
                "openapi_url": f"{prefix}/openapi.json",
            }
        ), 200

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(document), 200

    logger.info("OpenAPI Blueprint 已创建", module="api", blueprint=name, paths=len(document["paths"]))
    return blueprint


__all__ = ["create_openapi_blueprint"]
