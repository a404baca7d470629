"""OpenAPI: JSON Envelope Models.

说明:
- 仅用于文档表达; 实际响应由传输层负责组装.
- 成功封套: ``{ok: true, data: <输出>}``; 错误封套: ``{ok: false, error: {...}}``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, create_model

from rpc_openapi.schemas.json_schema import field_definition
from rpc_openapi.schemas.nodes import SchemaNode


class ErrorIssue(BaseModel):
    """单条校验问题."""

    message: str = Field(description="问题描述")


class ErrorDetail(BaseModel):
    """错误详情."""

    message: str = Field(description="可展示的错误摘要")
    code: str = Field(description="错误码")
    issues: list[ErrorIssue] = Field(default_factory=list, description="校验问题列表(可选)")


class ErrorEnvelope(BaseModel):
    """错误封套."""

    ok: Literal[False] = Field(description="是否成功")
    error: ErrorDetail


def make_success_envelope_model(data: SchemaNode, *, name: str = "SuccessEnvelope") -> type[BaseModel]:
    """构建成功封套模型, data 字段使用输出 schema."""
    return create_model(  # type: ignore[call-overload]
        name,
        ok=(Literal[True], Field(description="是否成功")),
        data=field_definition(data),
    )


__all__ = ["ErrorDetail", "ErrorEnvelope", "ErrorIssue", "make_success_envelope_model"]
