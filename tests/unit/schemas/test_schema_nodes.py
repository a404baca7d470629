from typing import Annotated, Optional

import pytest
from pydantic import AfterValidator, AliasChoices, BaseModel, Field
from pydantic_core import PydanticUndefined

from rpc_openapi.core.exceptions import NotASchemaError, ObjectKindRequiredError
from rpc_openapi.schemas.nodes import (
    SchemaKind,
    as_schema_node,
    default_schema,
    effect_schema,
    optional_schema,
    other_schema,
    schema_from_model,
    string_schema,
    unwrap_to_base,
)


class _Author(BaseModel):
    name: str


class _DemoInput(BaseModel):
    """演示输入."""

    id: str
    search: str | None = None
    sort: str = "asc"
    slug: Annotated[str, AfterValidator(str.lower)]
    count: int
    nullable: str | None
    tags: list[str] = Field(default_factory=list)
    author: _Author
    user_id: str = Field(alias="userId", min_length=3)
    lowered: Optional[Annotated[str, AfterValidator(str.lower)]] = None  # noqa: UP007


@pytest.mark.unit
def test_schema_from_model_maps_field_kinds() -> None:
    node = schema_from_model(_DemoInput)
    kinds = {name: field.kind for name, field in node.fields.items()}

    assert node.kind is SchemaKind.OBJECT
    assert node.name == "_DemoInput"
    assert node.description == "演示输入."
    assert kinds == {
        "id": SchemaKind.STRING,
        "search": SchemaKind.OPTIONAL,
        "sort": SchemaKind.DEFAULT,
        "slug": SchemaKind.EFFECT,
        "count": SchemaKind.OTHER,
        "nullable": SchemaKind.OTHER,
        "tags": SchemaKind.DEFAULT,
        "author": SchemaKind.OBJECT,
        "userId": SchemaKind.STRING,
        "lowered": SchemaKind.OPTIONAL,
    }


@pytest.mark.unit
def test_schema_from_model_keeps_defaults_and_constraints() -> None:
    fields = schema_from_model(_DemoInput).fields

    assert fields["sort"].default == "asc"
    assert fields["tags"].default is PydanticUndefined
    assert fields["userId"].attribute == "user_id"
    assert fields["userId"].metadata
    assert fields["lowered"].inner is not None
    assert fields["lowered"].inner.kind is SchemaKind.EFFECT


@pytest.mark.unit
def test_unwrap_to_base_follows_every_wrapper_kind() -> None:
    node = optional_schema(default_schema(effect_schema(string_schema()), "x"))

    assert unwrap_to_base(node).kind is SchemaKind.STRING
    assert unwrap_to_base(string_schema()).kind is SchemaKind.STRING


@pytest.mark.unit
def test_unwrap_to_base_does_not_treat_nullable_as_wrapper() -> None:
    node = schema_from_model(_DemoInput).fields["nullable"]

    assert unwrap_to_base(node) is node
    assert node.is_optional() is False


@pytest.mark.unit
def test_is_optional_is_answered_through_the_wrapper_chain() -> None:
    assert optional_schema(string_schema()).is_optional() is True
    assert default_schema(string_schema(), "x").is_optional() is True
    assert effect_schema(optional_schema(string_schema())).is_optional() is True
    assert effect_schema(string_schema()).is_optional() is False
    assert string_schema().is_optional() is False
    assert other_schema(int).is_optional() is False


@pytest.mark.unit
def test_omit_returns_new_node_and_preserves_object_metadata() -> None:
    node = schema_from_model(_DemoInput, optional=True)
    reduced = node.omit(["id", "slug"])

    assert "id" not in reduced.fields
    assert "slug" not in reduced.fields
    assert "id" in node.fields
    assert reduced.optional is True
    assert reduced.name == node.name
    assert reduced.model is None
    assert reduced.fields["sort"] is node.fields["sort"]


@pytest.mark.unit
def test_omit_without_matching_names_keeps_source_model() -> None:
    node = schema_from_model(_DemoInput)

    assert node.omit(["missing"]).model is _DemoInput


@pytest.mark.unit
def test_omit_requires_object_kind() -> None:
    with pytest.raises(ObjectKindRequiredError):
        string_schema().omit(["x"])


@pytest.mark.unit
def test_as_schema_node_accepts_models_annotations_and_nodes() -> None:
    node = string_schema()

    assert as_schema_node(node) is node
    assert as_schema_node(_Author).kind is SchemaKind.OBJECT
    assert as_schema_node(str).kind is SchemaKind.STRING
    assert as_schema_node(list[int]).kind is SchemaKind.OTHER


@pytest.mark.unit
@pytest.mark.parametrize("value", ["not a schema", 42, None, {"type": "string"}])
def test_as_schema_node_rejects_values_without_schema_shape(value: object) -> None:
    with pytest.raises(NotASchemaError) as excinfo:
        as_schema_node(value, role="output")

    assert excinfo.value.extra["role"] == "output"
    assert excinfo.value.message_key == "NOT_A_SCHEMA"


class _AliasedInput(BaseModel):
    display: str = Field(alias="displayName", validation_alias="nickName")
    email: str = Field(validation_alias=AliasChoices("mail", "email_address"))


@pytest.mark.unit
def test_object_fields_are_keyed_by_validation_name() -> None:
    node = schema_from_model(_AliasedInput)

    assert list(node.fields) == ["nickName", "email"]
    assert node.fields["nickName"].attribute == "display"


class _Plain:
    pass


@pytest.mark.unit
def test_as_schema_node_rejects_types_pydantic_cannot_handle() -> None:
    with pytest.raises(NotASchemaError):
        as_schema_node(_Plain)
