"""rpc-openapi - 常量定义模块

统一管理错误分类、日志级别与错误文案,避免在生成器中散落硬编码字符串.
"""

from enum import Enum


class LogLevel(Enum):
    """日志级别枚举."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误分类枚举."""

    SCHEMA = "schema"
    ROUTING = "routing"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量.

    带 ``{name}`` 占位符的文案由异常构造时通过 ``extra`` 填充.
    """

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"

    # schema 契约错误
    SCHEMA_CONTRACT_VIOLATION = "schema 不满足文档生成契约"
    NOT_A_SCHEMA = "{role} 需要 pydantic 模型或类型注解"
    OBJECT_KIND_REQUIRED = "{role} 需要对象类型的 schema"
    STRING_FIELD_REQUIRED = "{location} 参数只支持字符串字段: {field}"
    MALFORMED_SEGMENT = "路径模板中存在无效的动态片段: {path}"
    UNKNOWN_PATH_FIELD = "路径模板中的动态片段没有对应的输入字段: {field}"

    # 路由错误
    DUPLICATE_OPERATION = "同一路由重复定义了过程: {method} {path}"
    DUPLICATE_PROCEDURE = "过程名称重复: {name}"
    UNSUPPORTED_METHOD = "不支持的 HTTP 方法: {method}"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
]
