"""SchemaNode 到 JSON Schema 的转换桥.

叶子与对象节点交给 pydantic 渲染(`TypeAdapter.json_schema`), 包装节点按结构处理:
- optional / effect 直接渲染被包装节点, 可选性由调用方写入 `required`;
- default 在被包装节点的结果上补充 `default`.

输出文档中的 `$defs` 会被内联, 保证每个片段可以独立放入 OpenAPI 文档.
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    BaseModel,
    Field,
    PydanticInvalidForJsonSchema,
    PydanticSchemaGenerationError,
    TypeAdapter,
    create_model,
)
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined, to_jsonable_python

from rpc_openapi.core.exceptions import NotASchemaError
from rpc_openapi.schemas.nodes import SchemaKind, SchemaNode
from rpc_openapi.utils.structlog_config import get_generator_logger

logger = get_generator_logger()

JsonSchemaMode = Literal["validation", "serialization"]
JsonSchema = dict[str, Any]

_DEFS_KEY = "$defs"
_DEFS_REF_PREFIX = "#/$defs/"


def to_json_schema(node: SchemaNode, *, mode: JsonSchemaMode = "validation") -> JsonSchema:
    """把节点渲染为自包含的 JSON Schema 文档.

    Args:
        node: 需要渲染的节点(保留包装, 以便 default 等信息进入文档).
        mode: pydantic JSON Schema 模式, 输入用 validation, 输出用 serialization.

    Returns:
        dict: 不含 `$defs` 的 JSON Schema.

    """
    rendered = _render(node, mode)
    if node.source is not None:
        _apply_field_info(rendered, node.source)
    return inline_definitions(rendered)


def model_to_json_schema(model: type[BaseModel], *, mode: JsonSchemaMode = "validation") -> JsonSchema:
    """渲染 pydantic 模型并内联 `$defs`."""
    try:
        schema = TypeAdapter(model).json_schema(mode=mode)
    except PydanticInvalidForJsonSchema as exc:
        raise NotASchemaError(model.__name__, value=model) from exc
    return inline_definitions(schema)


def annotation_for(node: SchemaNode) -> Any:
    """还原节点对应的 python 类型注解."""
    if node.kind is SchemaKind.OBJECT:
        return model_for(node)
    if node.kind is SchemaKind.OPTIONAL:
        return Optional[annotation_for(_inner(node))]  # noqa: UP007
    if node.kind is SchemaKind.DEFAULT:
        return annotation_for(_inner(node))
    if node.kind is SchemaKind.EFFECT:
        inner = annotation_for(_inner(node))
        return Annotated[(inner, *node.metadata)] if node.metadata else inner
    base = node.annotation if node.annotation is not None else (str if node.kind is SchemaKind.STRING else Any)
    return _annotate(base, node.metadata, node.description)


def field_definition(node: SchemaNode) -> tuple[Any, Any]:
    """生成 `create_model` 可接受的字段定义 ``(annotation, default)``.

    从 pydantic 字段内省得到的节点复用原始 `FieldInfo` 的副本, 约束移入 `Annotated`,
    避免 `create_model` 改写来源模型的字段定义.
    """
    if node.source is not None:
        info = deepcopy(node.source)
        annotation = Annotated[(info.annotation, *info.metadata)] if info.metadata else info.annotation
        info.metadata = []
        return annotation, info
    if node.kind is SchemaKind.OPTIONAL:
        return annotation_for(node), None
    if node.kind is SchemaKind.DEFAULT:
        default = None if node.default is PydanticUndefined else node.default
        return annotation_for(node), default
    return annotation_for(node), ...


def model_for(node: SchemaNode) -> type[BaseModel]:
    """返回 object 节点对应的 pydantic 模型.

    字段被裁剪过的节点没有来源模型, 按剩余字段重新创建一个同名模型.
    """
    if node.model is not None:
        return node.model
    definitions = {
        (child.attribute or key): field_definition(child)
        for key, child in node.fields.items()
    }
    return create_model(  # type: ignore[call-overload]
        node.name or "Input",
        __config__=dict(node.config) if node.config else None,
        __doc__=node.description,
        **definitions,
    )


def inline_definitions(schema: Mapping[str, Any]) -> JsonSchema:
    """把 `#/$defs/...` 引用替换为定义本身.

    自引用模型在第二次出现时被替换为空 schema(任意值), 并记录 warning.
    """
    definitions = dict(schema.get(_DEFS_KEY, {}))
    body = {key: value for key, value in schema.items() if key != _DEFS_KEY}
    return _resolve(body, definitions, ())


def _resolve(value: Any, definitions: Mapping[str, Any], stack: tuple[str, ...]) -> Any:
    if isinstance(value, Mapping):
        ref = value.get("$ref")
        if isinstance(ref, str) and ref.startswith(_DEFS_REF_PREFIX):
            name = ref[len(_DEFS_REF_PREFIX):]
            siblings = {key: _resolve(item, definitions, stack) for key, item in value.items() if key != "$ref"}
            if name in stack or name not in definitions:
                logger.warning("JSON Schema 引用无法内联, 使用任意值替代", module="json_schema", ref=ref)
                return siblings
            target = _resolve(definitions[name], definitions, (*stack, name))
            return {**target, **siblings}
        return {key: _resolve(item, definitions, stack) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve(item, definitions, stack) for item in value]
    return value


def _render(node: SchemaNode, mode: JsonSchemaMode) -> JsonSchema:
    if node.kind in (SchemaKind.OPTIONAL, SchemaKind.EFFECT):
        return _render(_inner(node), mode)
    if node.kind is SchemaKind.DEFAULT:
        rendered = _render(_inner(node), mode)
        if node.default is not PydanticUndefined:
            rendered["default"] = to_jsonable_python(node.default)
        return rendered
    annotation = annotation_for(node)
    try:
        return TypeAdapter(annotation).json_schema(mode=mode)
    except (PydanticSchemaGenerationError, PydanticInvalidForJsonSchema) as exc:
        raise NotASchemaError(node.name or node.kind.value, value=annotation) from exc


def _apply_field_info(schema: JsonSchema, info: FieldInfo) -> None:
    # 字段级文档信息: title/description/examples/deprecated/json_schema_extra
    if info.title:
        schema["title"] = info.title
    if info.description:
        schema["description"] = info.description
    if info.examples:
        schema["examples"] = to_jsonable_python(info.examples)
    if info.deprecated:
        schema["deprecated"] = True
    if isinstance(info.json_schema_extra, dict):
        schema.update(to_jsonable_python(info.json_schema_extra))


def _annotate(base: Any, metadata: tuple[Any, ...], description: str | None) -> Any:
    items = list(metadata)
    if description:
        items.append(Field(description=description))
    return Annotated[(base, *items)] if items else base


def _inner(node: SchemaNode) -> SchemaNode:
    if node.inner is None:
        raise ValueError(f"{node.kind.value} 节点缺少 inner")
    return node.inner


__all__ = [
    "annotation_for",
    "field_definition",
    "inline_definitions",
    "model_for",
    "model_to_json_schema",
    "to_json_schema",
]
