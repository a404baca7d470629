"""Parameter Object 构造.

path 与 query 共用同一条字段规则:
- 字段剥离包装后必须是字符串;
- `required` 在原始(带包装)字段上判断;
- `schema` 渲染原始字段, 使默认值等信息进入文档.
"""

from __future__ import annotations

from typing import Any

from rpc_openapi.constants.openapi import ParameterLocation, ParameterStyle
from rpc_openapi.core.exceptions import ObjectKindRequiredError, StringFieldRequiredError
from rpc_openapi.generator.paths import partition
from rpc_openapi.schemas.json_schema import to_json_schema
from rpc_openapi.schemas.nodes import SchemaKind, SchemaNode, as_schema_node, unwrap_to_base

ParameterObject = dict[str, Any]


def build_parameter_object(
    name: str,
    value: SchemaNode,
    *,
    location: ParameterLocation,
    style: ParameterStyle,
) -> ParameterObject:
    """按字段规则生成单个 Parameter Object.

    Raises:
        StringFieldRequiredError: 字段剥离包装后不是字符串.

    """
    base = unwrap_to_base(value)
    if base.kind is not SchemaKind.STRING:
        raise StringFieldRequiredError(name, location=location.value, kind=base.kind.value)

    schema = to_json_schema(value)
    parameter: ParameterObject = {
        "name": name,
        "in": location.value,
        "required": not value.is_optional(),
        "schema": schema,
        "style": style.value,
        "explode": True,
    }
    if schema.get("description"):
        parameter["description"] = schema["description"]
    return parameter


def build_query_parameters(rest_params: SchemaNode) -> dict[str, ParameterObject]:
    """把剩余字段映射为 query 参数(form 风格)."""
    return _build_parameters(rest_params, location=ParameterLocation.QUERY, style=ParameterStyle.FORM)


def build_path_parameters(path_params: SchemaNode) -> dict[str, ParameterObject]:
    """把路径字段映射为 path 参数(simple 风格)."""
    return _build_parameters(path_params, location=ParameterLocation.PATH, style=ParameterStyle.SIMPLE)


def get_parameter_objects(schema: object, path: str) -> list[ParameterObject]:
    """为没有请求体的过程生成全部参数.

    Args:
        schema: 输入 schema(pydantic 模型或 object 节点).
        path: 路径模板.

    Returns:
        list[dict]: path 参数在前, query 参数在后.

    Raises:
        NotASchemaError: schema 不是 schema.
        ObjectKindRequiredError: schema 不是 object.
        StringFieldRequiredError: 存在非字符串字段.
        UnknownPathFieldError: 路径模板引用了不存在的字段.

    """
    node = as_schema_node(schema, role="input")
    if node.kind is not SchemaKind.OBJECT:
        raise ObjectKindRequiredError("input", kind=node.kind.value)

    parts = partition(node, path)
    path_objects = build_path_parameters(parts.path_params)
    query_objects = build_query_parameters(parts.rest_params)
    return [*path_objects.values(), *query_objects.values()]


def _build_parameters(
    schema: SchemaNode,
    *,
    location: ParameterLocation,
    style: ParameterStyle,
) -> dict[str, ParameterObject]:
    if schema.kind is not SchemaKind.OBJECT:
        raise ObjectKindRequiredError(f"{location.value} parameters", kind=schema.kind.value)
    return {
        name: build_parameter_object(name, value, location=location, style=style)
        for name, value in schema.fields.items()
    }


__all__ = [
    "ParameterObject",
    "build_parameter_object",
    "build_path_parameters",
    "build_query_parameters",
    "get_parameter_objects",
]
