"""路径模板解析与输入 schema 拆分."""

from __future__ import annotations

import re
from collections.abc import Container
from dataclasses import dataclass

from rpc_openapi.core.exceptions import MalformedSegmentError, ObjectKindRequiredError, UnknownPathFieldError
from rpc_openapi.schemas.nodes import SchemaKind, SchemaNode, as_schema_node, object_schema
from rpc_openapi.utils.structlog_config import get_generator_logger

logger = get_generator_logger()

# `/users/{id}/posts/{postId}` 中花括号包裹的动态片段
_DYNAMIC_SEGMENT_PATTERN = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True, slots=True)
class PartitionedSchema:
    """按路径模板拆分后的输入 schema.

    Attributes:
        path_params: 只包含路径动态片段字段的 object 节点, 顺序与模板一致.
        rest_params: 移除路径字段后的原 object 节点.

    """

    path_params: SchemaNode
    rest_params: SchemaNode


def normalize_path(path: str) -> str:
    """规范化过程路径: 去掉首尾斜杠后补一个前导斜杠."""
    return "/" + path.strip().strip("/")


def extract_dynamic_names(template: str, fields: Container[str] | None = None) -> list[str]:
    """按出现顺序提取路径模板中的动态片段名.

    重复的片段名会原样保留, 去重策略由调用方决定.

    Args:
        template: 路径模板, 例如 ``/users/{id}``.
        fields: 输入 schema 的字段集合, 提供时校验每个片段名都存在.

    Returns:
        list[str]: 动态片段名列表.

    Raises:
        MalformedSegmentError: 捕获到空片段名.
        UnknownPathFieldError: 片段名在字段集合中不存在.

    """
    names: list[str] = []
    for match in _DYNAMIC_SEGMENT_PATTERN.finditer(template):
        name = match.group(1)
        if not name:
            raise MalformedSegmentError(template)
        if fields is not None and name not in fields:
            raise UnknownPathFieldError(name, path=template)
        names.append(name)
    return names


def partition(schema: object, template: str) -> PartitionedSchema:
    """把 object schema 拆分为路径参数与剩余参数.

    路径参数节点直接引用原字段节点, 不做任何复制或转换.

    Args:
        schema: object 类型的 SchemaNode 或 pydantic 模型.
        template: 路径模板.

    Returns:
        PartitionedSchema: 两个字段集合互不相交, 并集等于原字段集合.

    Raises:
        NotASchemaError: schema 不是 schema.
        ObjectKindRequiredError: schema 不是 object 类型.
        UnknownPathFieldError: 模板引用了不存在的字段.

    """
    node = as_schema_node(schema, role="input")
    if node.kind is not SchemaKind.OBJECT:
        raise ObjectKindRequiredError("input", kind=node.kind.value)

    names = extract_dynamic_names(template, node.fields)
    path_fields = {name: node.fields[name] for name in names}
    path_params = object_schema(path_fields, name=f"{node.name}PathParams" if node.name else None)
    rest_params = node.omit(path_fields)

    logger.debug(
        "输入 schema 拆分完成",
        module="paths",
        path=template,
        path_fields=list(path_fields),
        rest_fields=list(rest_params.fields),
    )
    return PartitionedSchema(path_params=path_params, rest_params=rest_params)


__all__ = ["PartitionedSchema", "extract_dynamic_names", "normalize_path", "partition"]
