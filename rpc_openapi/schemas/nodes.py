"""Schema 节点模型.

把 pydantic 模型/类型注解内省为一棵只读的标签联合树,供文档生成器做两类独立查询:
- 基础类型: 通过 `unwrap_to_base` 剥离 optional/default/effect 包装后判断;
- 是否可选: 始终在未剥离的原始节点上调用 `SchemaNode.is_optional()`.

约定:
- 节点一经构造不可修改,所有"变形"操作(如 `omit`)都返回新节点.
- nullable(`X | None` 且必填)不属于包装类型,解析为 other.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    PlainValidator,
    PydanticSchemaGenerationError,
    TypeAdapter,
    WrapValidator,
)
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from rpc_openapi.core.exceptions import NotASchemaError, ObjectKindRequiredError

NoneType = type(None)

_VALIDATOR_TYPES = (AfterValidator, BeforeValidator, PlainValidator, WrapValidator)
_EMPTY_FIELDS: Mapping[str, SchemaNode] = types.MappingProxyType({})


class SchemaKind(str, Enum):
    """Schema 节点类型."""

    OBJECT = "object"
    STRING = "string"
    OPTIONAL = "optional"
    DEFAULT = "default"
    EFFECT = "effect"
    OTHER = "other"


WRAPPER_KINDS = frozenset({SchemaKind.OPTIONAL, SchemaKind.DEFAULT, SchemaKind.EFFECT})


@dataclass(frozen=True, slots=True)
class SchemaNode:
    """Schema 标签联合节点.

    Attributes:
        kind: 节点类型.
        inner: 包装类型(optional/default/effect)所包装的节点.
        fields: object 类型的字段映射(有序、只读),键为对外字段名.
        default: default 类型携带的默认值, `PydanticUndefined` 表示由工厂生成.
        annotation: string/other 类型对应的 python 类型.
        metadata: string/other 的约束(annotated-types 等), effect 的校验器.
        description: 字段描述.
        name: object 类型的名称, 用作 JSON Schema title.
        model: object 类型来源的 pydantic 模型, 字段被裁剪后为 None.
        config: object 类型来源模型的 `model_config`.
        optional: object 类型自身是否可选.
        source: 字段节点来源的 pydantic `FieldInfo`.
        attribute: 字段节点在来源模型上的属性名.

    """

    kind: SchemaKind
    inner: SchemaNode | None = None
    fields: Mapping[str, SchemaNode] = field(default_factory=lambda: _EMPTY_FIELDS)
    default: Any = PydanticUndefined
    annotation: Any = None
    metadata: tuple[Any, ...] = ()
    description: str | None = None
    name: str | None = None
    model: type[BaseModel] | None = None
    config: Mapping[str, Any] | None = None
    optional: bool = False
    source: FieldInfo | None = None
    attribute: str | None = None

    @property
    def is_wrapper(self) -> bool:
        """是否为 optional/default/effect 包装节点."""
        return self.kind in WRAPPER_KINDS

    def is_optional(self) -> bool:
        """判断该节点接受"缺省"输入.

        结论穿透整条包装链: default 包装同样视为可选, effect 取决于被包装节点.

        Returns:
            bool: 字段可以不传时为 True.

        """
        if self.kind in (SchemaKind.OPTIONAL, SchemaKind.DEFAULT):
            return True
        if self.kind is SchemaKind.EFFECT and self.inner is not None:
            return self.inner.is_optional()
        if self.kind is SchemaKind.OBJECT:
            return self.optional
        return False

    def omit(self, names: Iterable[str]) -> SchemaNode:
        """返回移除指定字段后的对象节点.

        保留对象自身的名称、描述、配置与可选状态; 字段节点按原引用复用.

        Args:
            names: 需要移除的字段名.

        Returns:
            SchemaNode: 新的 object 节点.

        Raises:
            ObjectKindRequiredError: 当前节点不是 object.

        """
        if self.kind is not SchemaKind.OBJECT:
            raise ObjectKindRequiredError("omit", kind=self.kind.value)
        removed = set(names) & set(self.fields)
        if not removed:
            return self
        kept = {key: value for key, value in self.fields.items() if key not in removed}
        return replace(self, fields=types.MappingProxyType(kept), model=None)


def object_schema(
    fields: Mapping[str, SchemaNode],
    *,
    name: str | None = None,
    description: str | None = None,
    model: type[BaseModel] | None = None,
    config: Mapping[str, Any] | None = None,
    optional: bool = False,
) -> SchemaNode:
    """构造 object 节点."""
    return SchemaNode(
        kind=SchemaKind.OBJECT,
        fields=types.MappingProxyType(dict(fields)),
        name=name,
        description=description,
        model=model,
        config=config,
        optional=optional,
    )


def string_schema(*, metadata: Iterable[Any] = (), description: str | None = None) -> SchemaNode:
    """构造 string 节点."""
    return SchemaNode(kind=SchemaKind.STRING, annotation=str, metadata=tuple(metadata), description=description)


def other_schema(annotation: Any, *, metadata: Iterable[Any] = (), description: str | None = None) -> SchemaNode:
    """构造 other 节点(文档生成器不区分的所有其他类型)."""
    return SchemaNode(kind=SchemaKind.OTHER, annotation=annotation, metadata=tuple(metadata), description=description)


def optional_schema(inner: SchemaNode) -> SchemaNode:
    return SchemaNode(kind=SchemaKind.OPTIONAL, inner=inner)


def default_schema(inner: SchemaNode, default: Any) -> SchemaNode:
    return SchemaNode(kind=SchemaKind.DEFAULT, inner=inner, default=default)


def effect_schema(inner: SchemaNode, validators: Iterable[Any] = ()) -> SchemaNode:
    """构造 effect 节点(校验后转换/细化包装)."""
    return SchemaNode(kind=SchemaKind.EFFECT, inner=inner, metadata=tuple(validators))


def unwrap_to_base(node: SchemaNode) -> SchemaNode:
    """递归剥离 optional/default/effect 包装, 返回基础节点.

    只用于判断"基础类型是什么", 不能用于判断可选性.
    """
    if node.is_wrapper and node.inner is not None:
        return unwrap_to_base(node.inner)
    return node


def schema_from_model(model: type[BaseModel], *, optional: bool = False) -> SchemaNode:
    """把 pydantic 模型内省为 object 节点.

    Args:
        model: pydantic 模型类.
        optional: 整个对象是否可选(例如过程输入本身可以不传).

    Returns:
        SchemaNode: object 节点, 字段顺序与模型定义一致.

    """
    node = _node_from_model(model, frozenset())
    return replace(node, optional=optional) if optional else node


def schema_from_annotation(annotation: Any) -> SchemaNode:
    """把任意类型注解内省为节点."""
    return _node_from_annotation(annotation, frozenset())


def as_schema_node(value: object, *, role: str = "input") -> SchemaNode:
    """把调用方提供的 schema 统一为 SchemaNode.

    Args:
        value: SchemaNode、pydantic 模型类或类型注解.
        role: 出错时写入错误信息的位置说明.

    Raises:
        NotASchemaError: value 不具备 schema 的最小特征.

    """
    if isinstance(value, SchemaNode):
        return value
    if _is_model_class(value):
        return schema_from_model(value)
    if _is_annotation(value):
        return schema_from_annotation(value)
    raise NotASchemaError(role, value=value)


def _is_model_class(value: object) -> bool:
    return isinstance(value, type) and get_origin(value) is None and issubclass(value, BaseModel)


def _is_annotation(value: object) -> bool:
    """判断 value 是 pydantic 能够生成 core schema 的类型注解."""
    if value is Any:
        return True
    if not isinstance(value, type) and get_origin(value) is None:
        return False
    try:
        TypeAdapter(value)
    except PydanticSchemaGenerationError:
        return False
    return True


def _wire_name(attribute: str, info: FieldInfo) -> str:
    """字段在输入侧的对外名称: validation_alias > alias > 属性名."""
    if isinstance(info.validation_alias, str):
        return info.validation_alias
    return info.alias or attribute


def _split_metadata(metadata: Iterable[Any]) -> tuple[tuple[Any, ...], tuple[Any, ...]]:
    validators: list[Any] = []
    constraints: list[Any] = []
    for item in metadata:
        (validators if isinstance(item, _VALIDATOR_TYPES) else constraints).append(item)
    return tuple(validators), tuple(constraints)


def _strip_none(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is not Union and origin is not types.UnionType:
        return annotation
    members = [arg for arg in get_args(annotation) if arg is not NoneType]
    if not members:
        return annotation
    if len(members) == 1:
        return members[0]
    return Union[tuple(members)]  # noqa: UP007


def _node_from_model(model: type[BaseModel], seen: frozenset[type[BaseModel]]) -> SchemaNode:
    seen = seen | {model}
    fields = {
        _wire_name(attribute, info): _node_from_field(attribute, info, seen)
        for attribute, info in model.model_fields.items()
    }
    return object_schema(
        fields,
        name=model.__name__,
        description=inspect.cleandoc(model.__doc__) if model.__doc__ else None,
        model=model,
        config=dict(model.model_config),
    )


def _node_from_field(attribute: str, info: FieldInfo, seen: frozenset[type[BaseModel]]) -> SchemaNode:
    validators, constraints = _split_metadata(info.metadata)
    omittable = not info.is_required()
    # `x: str | None = None` 是"可以不传"的 python 写法
    defaults_to_none = omittable and info.default_factory is None and info.default is None
    annotation = _strip_none(info.annotation) if defaults_to_none else info.annotation

    node = _node_from_annotation(annotation, seen, constraints=constraints, description=info.description)
    if validators:
        node = effect_schema(node, validators)
    if defaults_to_none:
        node = optional_schema(node)
    elif omittable:
        default = info.default if info.default_factory is None else PydanticUndefined
        node = default_schema(node, default)
    return replace(node, source=info, attribute=attribute)


def _node_from_annotation(
    annotation: Any,
    seen: frozenset[type[BaseModel]],
    *,
    constraints: tuple[Any, ...] = (),
    description: str | None = None,
) -> SchemaNode:
    if get_origin(annotation) is Annotated:
        base, *extra = get_args(annotation)
        validators, more_constraints = _split_metadata(extra)
        node = _node_from_annotation(
            base,
            seen,
            constraints=constraints + more_constraints,
            description=description,
        )
        return effect_schema(node, validators) if validators else node

    if annotation is str:
        return string_schema(metadata=constraints, description=description)

    if _is_model_class(annotation):
        if annotation in seen:
            # 自引用模型: 停止展开, 交给 JSON Schema 转换处理
            return other_schema(annotation, metadata=constraints, description=description)
        node = _node_from_model(annotation, seen)
        return replace(node, description=description) if description else node

    return other_schema(annotation, metadata=constraints, description=description)


__all__ = [
    "WRAPPER_KINDS",
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
    "unwrap_to_base",
]
