"""常量模块。

集中管理系统常量，包括错误分类、错误消息、HTTP 方法与 OpenAPI 文档常量。
"""

from .http_methods import HttpMethod
from .openapi import (
    ERROR_RESPONSE_REF,
    JSON_MEDIA_TYPE,
    OPENAPI_VERSION,
    ParameterLocation,
    ParameterStyle,
)
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
)

__all__ = [
    "ERROR_RESPONSE_REF",
    "JSON_MEDIA_TYPE",
    "OPENAPI_VERSION",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpMethod",
    "LogLevel",
    "ParameterLocation",
    "ParameterStyle",
]
