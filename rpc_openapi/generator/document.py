"""OpenAPI 文档组装.

把注册表中的每个过程编译为 Operation Object, 并注册共享的错误响应.
文档生成预期在应用启动时执行, 任何契约错误都会直接中止生成.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from rpc_openapi.constants.openapi import OPENAPI_VERSION
from rpc_openapi.core.exceptions import AppError, DuplicateOperationError
from rpc_openapi.generator.content import ERROR_RESPONSE_OBJECT, build_request_and_parameters, build_responses
from rpc_openapi.generator.parameters import get_parameter_objects
from rpc_openapi.schemas.nodes import object_schema
from rpc_openapi.utils.structlog_config import get_generator_logger

if TYPE_CHECKING:
    from rpc_openapi.procedures import Procedure
    from rpc_openapi.settings import Settings

logger = get_generator_logger()

OpenApiDocument = dict[str, Any]
OperationObject = dict[str, Any]


def build_operation(procedure: Procedure) -> OperationObject:
    """把单个过程编译为 Operation Object.

    GET/DELETE 的输入全部映射为 path/query 参数; POST/PUT/PATCH 的剩余输入作为 JSON 请求体.

    Raises:
        SchemaContractError: 输入/输出 schema 不满足契约, extra 中附带过程名.

    """
    operation: OperationObject = {"operationId": procedure.name}
    if procedure.summary:
        operation["summary"] = procedure.summary
    if procedure.description:
        operation["description"] = procedure.description
    if procedure.tags:
        operation["tags"] = list(procedure.tags)
    if procedure.deprecated:
        operation["deprecated"] = True

    try:
        if procedure.has_body and procedure.input is not None:
            inputs = build_request_and_parameters(procedure.input, procedure.path)
            operation["requestBody"] = inputs.request_body
            operation["parameters"] = inputs.parameters
        else:
            # 没有输入的过程仍需校验路径模板
            schema = procedure.input if procedure.input is not None else object_schema({})
            operation["parameters"] = get_parameter_objects(schema, procedure.path)
        operation["responses"] = build_responses(procedure.output)
    except AppError as exc:
        exc.extra.setdefault("procedure", procedure.name)
        logger.error("过程文档生成失败", module="document", **exc.to_dict())
        raise

    return operation


def generate_openapi_document(
    procedures: Iterable[Procedure],
    *,
    title: str,
    version: str,
    base_url: str,
    description: str | None = None,
    docs_url: str | None = None,
    tags: Iterable[str] | None = None,
) -> OpenApiDocument:
    """生成完整的 OpenAPI 文档.

    Args:
        procedures: 过程集合(通常是 ProcedureRegistry).
        title: info.title.
        version: info.version.
        base_url: servers[0].url.
        description: info.description.
        docs_url: externalDocs.url.
        tags: 顶层标签声明顺序.

    Returns:
        dict: OpenAPI 3.1 文档.

    Raises:
        DuplicateOperationError: 两个过程绑定到同一 method + path.
        SchemaContractError: 任一过程的 schema 不满足契约.

    """
    paths: dict[str, dict[str, OperationObject]] = {}
    owners: dict[tuple[str, str], str] = {}

    for procedure in procedures:
        key = (procedure.method, procedure.path)
        if key in owners:
            raise DuplicateOperationError(procedure.method, procedure.path, procedures=(owners[key], procedure.name))
        owners[key] = procedure.name
        paths.setdefault(procedure.path, {})[procedure.method.lower()] = build_operation(procedure)

    info: dict[str, Any] = {"title": title, "version": version}
    if description:
        info["description"] = description

    document: OpenApiDocument = {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "servers": [{"url": base_url}],
        "paths": paths,
        "components": {
            "responses": {
                "error": ERROR_RESPONSE_OBJECT,
            },
        },
    }
    tag_names = list(tags or ())
    if tag_names:
        document["tags"] = [{"name": name} for name in tag_names]
    if docs_url:
        document["externalDocs"] = {"url": docs_url}

    logger.info("OpenAPI 文档生成完成", module="document", operations=len(owners), paths=len(paths))
    return document


def build_document_from_settings(procedures: Iterable[Procedure], settings: Settings) -> OpenApiDocument:
    """使用 Settings 中的元信息生成文档."""
    return generate_openapi_document(
        procedures,
        title=settings.app_name,
        version=settings.app_version,
        base_url=settings.openapi_base_url,
        description=settings.openapi_description,
        docs_url=settings.openapi_docs_url,
    )


__all__ = [
    "OpenApiDocument",
    "build_document_from_settings",
    "build_operation",
    "generate_openapi_document",
]
