"""请求体与响应集合构造."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from rpc_openapi.constants.openapi import ERROR_RESPONSE_REF, JSON_MEDIA_TYPE
from rpc_openapi.generator.parameters import ParameterObject, build_path_parameters
from rpc_openapi.generator.paths import partition
from rpc_openapi.schemas.envelope import ErrorEnvelope, make_success_envelope_model
from rpc_openapi.schemas.json_schema import model_to_json_schema, to_json_schema
from rpc_openapi.schemas.nodes import as_schema_node

RequestBodyObject = dict[str, Any]
ResponsesObject = dict[str, Any]

SUCCESS_RESPONSE_DESCRIPTION = "Successful response"
ERROR_RESPONSE_DESCRIPTION = "Error response"

# 进程内只构造一次, 文档组装时按引用注册到 components.responses.error
ERROR_RESPONSE_OBJECT: dict[str, Any] = {
    "description": ERROR_RESPONSE_DESCRIPTION,
    "content": {
        JSON_MEDIA_TYPE: {
            "schema": model_to_json_schema(ErrorEnvelope, mode="serialization"),
        },
    },
}


@dataclass(frozen=True, slots=True)
class RequestInputObjects:
    """带请求体过程的输入描述."""

    request_body: RequestBodyObject
    parameters: list[ParameterObject] = field(default_factory=list)


def build_request_and_parameters(schema: object, path: str) -> RequestInputObjects:
    """为带请求体的过程生成 requestBody 与 path 参数.

    剩余字段整体序列化为 JSON 请求体, 因此不限制字段类型.

    Args:
        schema: 输入 schema(pydantic 模型或 object 节点).
        path: 路径模板.

    Returns:
        RequestInputObjects: 请求体与 path 参数列表.

    Raises:
        NotASchemaError: schema 不是 schema.
        ObjectKindRequiredError: schema 不是 object.
        StringFieldRequiredError: 路径字段不是字符串.
        UnknownPathFieldError: 路径模板引用了不存在的字段.

    """
    node = as_schema_node(schema, role="input")
    parts = partition(node, path)
    path_objects = build_path_parameters(parts.path_params)

    request_body: RequestBodyObject = {
        "required": not parts.rest_params.is_optional(),
        "content": {
            JSON_MEDIA_TYPE: {
                "schema": to_json_schema(parts.rest_params),
            },
        },
    }
    return RequestInputObjects(request_body=request_body, parameters=list(path_objects.values()))


def build_responses(output_schema: object) -> ResponsesObject:
    """生成响应集合.

    `200` 使用成功封套包装输出 schema, `default` 永远引用共享的错误响应.

    Raises:
        NotASchemaError: output_schema 不是 schema.

    """
    node = as_schema_node(output_schema, role="output")
    envelope = make_success_envelope_model(node)
    success_response = {
        "description": SUCCESS_RESPONSE_DESCRIPTION,
        "content": {
            JSON_MEDIA_TYPE: {
                "schema": model_to_json_schema(envelope, mode="serialization"),
            },
        },
    }
    return {
        "200": success_response,
        "default": {"$ref": ERROR_RESPONSE_REF},
    }


# 兼容 get_* 风格的调用名
get_mutation_input_objects = build_request_and_parameters
get_responses_object = build_responses


__all__ = [
    "ERROR_RESPONSE_OBJECT",
    "RequestInputObjects",
    "build_request_and_parameters",
    "build_responses",
    "get_mutation_input_objects",
    "get_responses_object",
]
