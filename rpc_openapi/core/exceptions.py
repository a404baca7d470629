"""rpc-openapi - 统一异常定义.

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask 等框架细节.
- 文档生成过程中的所有失败都是构建期契约错误: 立即中止当前构建,不做内部恢复,
  由调用方(通常是应用启动流程)决定如何呈现.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from rpc_openapi.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: Mapping[str, object] | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础异常.

        Args:
            message: 直接使用的错误提示,缺省时会根据 message_key 推导.
            message_key: 覆盖默认 message_key 的可选值.
            extra: 结构化日志附加字段.
            severity: 错误严重度.
            category: 错误分类.
        """
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)

    def to_dict(self) -> dict[str, object]:
        """导出为结构化字典,供日志与启动失败输出使用."""
        return {
            "message": self.message,
            "message_key": self.message_key,
            "category": self.category.value,
            "severity": self.severity.value,
            **self.extra,
        }


class SchemaContractError(AppError):
    """表示输入/输出 schema 不满足文档生成契约.

    所有子类都是构建期错误,严重度为 HIGH,不可恢复.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SCHEMA,
        severity=ErrorSeverity.HIGH,
        default_message_key="SCHEMA_CONTRACT_VIOLATION",
    )


class NotASchemaError(SchemaContractError):
    """声称是 schema 的值既不是 pydantic 模型,也不是类型注解."""

    def __init__(self, role: str, *, value: object = None) -> None:
        """构造错误.

        Args:
            role: 出错的位置, 例如 "input" 或 "output".
            value: 实际收到的值, 仅记录其类型名.
        """
        super().__init__(
            ErrorMessages.NOT_A_SCHEMA.format(role=role),
            message_key="NOT_A_SCHEMA",
            extra={"role": role, "received": type(value).__name__},
        )


class ObjectKindRequiredError(SchemaContractError):
    """需要对象 schema 的操作收到了非对象 schema."""

    def __init__(self, role: str, *, kind: str) -> None:
        super().__init__(
            ErrorMessages.OBJECT_KIND_REQUIRED.format(role=role),
            message_key="OBJECT_KIND_REQUIRED",
            extra={"role": role, "kind": kind},
        )


class StringFieldRequiredError(SchemaContractError):
    """需要放到 path/query 的字段解包后不是字符串."""

    def __init__(self, field: str, *, location: str, kind: str) -> None:
        super().__init__(
            ErrorMessages.STRING_FIELD_REQUIRED.format(location=location, field=field),
            message_key="STRING_FIELD_REQUIRED",
            extra={"field": field, "location": location, "kind": kind},
        )


class MalformedSegmentError(SchemaContractError):
    """路径模板中捕获到空的动态片段名."""

    def __init__(self, path: str) -> None:
        super().__init__(
            ErrorMessages.MALFORMED_SEGMENT.format(path=path),
            message_key="MALFORMED_SEGMENT",
            extra={"path": path},
        )


class UnknownPathFieldError(SchemaContractError):
    """路径模板引用了 schema 中不存在的字段."""

    def __init__(self, field: str, *, path: str) -> None:
        super().__init__(
            ErrorMessages.UNKNOWN_PATH_FIELD.format(field=field),
            message_key="UNKNOWN_PATH_FIELD",
            extra={"field": field, "path": path},
        )


class RoutingError(AppError):
    """表示过程注册/路由表不满足文档生成契约."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.ROUTING,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )


class DuplicateOperationError(RoutingError):
    """两个过程绑定到同一个 method + path."""

    def __init__(self, method: str, path: str, *, procedures: tuple[str, str]) -> None:
        super().__init__(
            ErrorMessages.DUPLICATE_OPERATION.format(method=method, path=path),
            message_key="DUPLICATE_OPERATION",
            extra={"method": method, "path": path, "procedures": list(procedures)},
        )


class DuplicateProcedureError(RoutingError):
    """同一个注册表中出现了同名过程."""

    def __init__(self, name: str) -> None:
        super().__init__(
            ErrorMessages.DUPLICATE_PROCEDURE.format(name=name),
            message_key="DUPLICATE_PROCEDURE",
            extra={"procedure": name},
        )


class UnsupportedMethodError(RoutingError):
    """过程声明了不受支持的 HTTP 方法."""

    def __init__(self, method: str) -> None:
        super().__init__(
            ErrorMessages.UNSUPPORTED_METHOD.format(method=method),
            message_key="UNSUPPORTED_METHOD",
            extra={"method": method},
        )


__all__ = [
    "AppError",
    "DuplicateOperationError",
    "DuplicateProcedureError",
    "MalformedSegmentError",
    "NotASchemaError",
    "ObjectKindRequiredError",
    "RoutingError",
    "SchemaContractError",
    "StringFieldRequiredError",
    "UnknownPathFieldError",
    "UnsupportedMethodError",
]
