"""OpenAPI 文档常量."""

from enum import Enum

OPENAPI_VERSION = "3.1.0"
JSON_MEDIA_TYPE = "application/json"
ERROR_RESPONSE_REF = "#/components/responses/error"


class ParameterLocation(str, Enum):
    """参数位置(Parameter Object 的 `in` 字段)."""

    PATH = "path"
    QUERY = "query"


class ParameterStyle(str, Enum):
    """参数序列化风格."""

    SIMPLE = "simple"
    FORM = "form"


__all__ = [
    "ERROR_RESPONSE_REF",
    "JSON_MEDIA_TYPE",
    "OPENAPI_VERSION",
    "ParameterLocation",
    "ParameterStyle",
]
