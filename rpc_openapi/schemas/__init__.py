"""Schema 节点模型与 JSON Schema 转换."""

from .json_schema import to_json_schema
from .nodes import (
    SchemaKind,
    SchemaNode,
    as_schema_node,
    default_schema,
    effect_schema,
    object_schema,
    optional_schema,
    other_schema,
    schema_from_annotation,
    schema_from_model,
    string_schema,
    unwrap_to_base,
)

__all__ = [
    "SchemaKind",
    "SchemaNode",
    "as_schema_node",
    "default_schema",
    "effect_schema",
    "object_schema",
    "optional_schema",
    "other_schema",
    "schema_from_annotation",
    "schema_from_model",
    "string_schema",
    "to_json_schema",
    "unwrap_to_base",
]
