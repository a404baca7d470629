"""过程注册表.

过程(procedure)是绑定到 HTTP method + 路径模板的远程调用端点, 携带输入/输出 schema.
注册表只记录元数据, 不参与请求处理.

Example:
    >>> registry = ProcedureRegistry()
    >>> @registry.route("GET", "/users/{id}", input=GetUserInput, output=User)
    ... def get_user(payload): ...

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from rpc_openapi.constants.http_methods import HttpMethod
from rpc_openapi.core.exceptions import DuplicateProcedureError, UnsupportedMethodError
from rpc_openapi.generator.paths import normalize_path

HandlerT = TypeVar("HandlerT", bound=Callable[..., Any])

NoneType = type(None)


@dataclass(frozen=True, slots=True)
class Procedure:
    """单个过程的文档元数据.

    Attributes:
        name: 过程名, 作为 operationId.
        method: HTTP 方法(大写).
        path: 规范化后的路径模板.
        input: 输入 schema, None 表示没有输入.
        output: 输出 schema, 缺省为 None 类型(data 为 null).
        summary: 摘要.
        description: 详细说明.
        tags: 分组标签.
        deprecated: 是否已废弃.

    """

    name: str
    method: str
    path: str
    input: object | None = None
    output: object = NoneType
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()
    deprecated: bool = False

    def __post_init__(self) -> None:
        method = self.method.strip().upper()
        if not HttpMethod.is_valid(method):
            raise UnsupportedMethodError(self.method)
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def has_body(self) -> bool:
        """输入是否通过 JSON 请求体传递."""
        return HttpMethod.has_body(self.method)


class ProcedureRegistry:
    """按注册顺序保存过程元数据."""

    def __init__(self) -> None:
        self._procedures: dict[str, Procedure] = {}

    def register(self, procedure: Procedure) -> Procedure:
        """注册过程.

        Raises:
            DuplicateProcedureError: 过程名已存在.

        """
        if procedure.name in self._procedures:
            raise DuplicateProcedureError(procedure.name)
        self._procedures[procedure.name] = procedure
        return procedure

    def route(
        self,
        method: str,
        path: str,
        *,
        input: object | None = None,  # noqa: A002
        output: object = NoneType,
        name: str | None = None,
        summary: str | None = None,
        description: str | None = None,
        tags: tuple[str, ...] = (),
        deprecated: bool = False,
    ) -> Callable[[HandlerT], HandlerT]:
        """以装饰器形式注册过程, 原样返回处理函数.

        未显式给出 name/description 时使用函数名与 docstring.
        """

        def decorator(handler: HandlerT) -> HandlerT:
            self.register(
                Procedure(
                    name=name or handler.__name__,
                    method=method,
                    path=path,
                    input=input,
                    output=output,
                    summary=summary,
                    description=description or (handler.__doc__ or "").strip() or None,
                    tags=tags,
                    deprecated=deprecated,
                )
            )
            return handler

        return decorator

    @property
    def procedures(self) -> tuple[Procedure, ...]:
        return tuple(self._procedures.values())

    def __iter__(self) -> Iterator[Procedure]:
        return iter(self.procedures)

    def __len__(self) -> int:
        return len(self._procedures)


__all__ = ["Procedure", "ProcedureRegistry"]
