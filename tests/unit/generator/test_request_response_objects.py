import pytest
from pydantic import BaseModel

from rpc_openapi.core.exceptions import NotASchemaError, StringFieldRequiredError
from rpc_openapi.generator.content import (
    ERROR_RESPONSE_OBJECT,
    build_request_and_parameters,
    build_responses,
)
from rpc_openapi.generator.parameters import get_parameter_objects
from rpc_openapi.schemas.nodes import schema_from_model


class _CreatePostInput(BaseModel):
    userId: str
    title: str
    views: int = 0


class _Post(BaseModel):
    id: str
    title: str


@pytest.mark.unit
def test_request_body_holds_remaining_fields_of_any_kind() -> None:
    inputs = build_request_and_parameters(_CreatePostInput, "/users/{userId}/posts")
    body_schema = inputs.request_body["content"]["application/json"]["schema"]

    assert inputs.request_body["required"] is True
    assert set(body_schema["properties"]) == {"title", "views"}
    assert body_schema["required"] == ["title"]
    assert body_schema["properties"]["views"]["default"] == 0
    assert [(p["name"], p["in"]) for p in inputs.parameters] == [("userId", "path")]


@pytest.mark.unit
def test_same_non_string_field_fails_only_as_query_parameter() -> None:
    with pytest.raises(StringFieldRequiredError):
        get_parameter_objects(_CreatePostInput, "/users/{userId}/posts")

    build_request_and_parameters(_CreatePostInput, "/users/{userId}/posts")


@pytest.mark.unit
def test_request_body_is_optional_when_input_object_is_optional() -> None:
    node = schema_from_model(_CreatePostInput, optional=True)
    inputs = build_request_and_parameters(node, "/posts")

    assert inputs.request_body["required"] is False


@pytest.mark.unit
def test_path_fields_still_need_to_be_strings() -> None:
    with pytest.raises(StringFieldRequiredError):
        build_request_and_parameters(_CreatePostInput, "/users/{userId}/posts/{views}")


@pytest.mark.unit
def test_request_objects_are_repeatable() -> None:
    first = build_request_and_parameters(_CreatePostInput, "/users/{userId}/posts")
    second = build_request_and_parameters(_CreatePostInput, "/users/{userId}/posts")

    assert first == second


@pytest.mark.unit
def test_responses_wrap_output_in_success_envelope() -> None:
    responses = build_responses(_Post)
    schema = responses["200"]["content"]["application/json"]["schema"]

    assert set(responses) == {"200", "default"}
    assert schema["properties"]["ok"]["const"] is True
    assert set(schema["properties"]["data"]["properties"]) == {"id", "title"}
    assert set(schema["required"]) == {"ok", "data"}
    assert "$defs" not in schema


@pytest.mark.unit
def test_default_response_is_always_a_reference() -> None:
    responses = build_responses(list[_Post])

    assert responses["default"] == {"$ref": "#/components/responses/error"}
    assert responses["200"]["content"]["application/json"]["schema"]["properties"]["data"]["type"] == "array"


@pytest.mark.unit
def test_responses_reject_non_schema_output() -> None:
    with pytest.raises(NotASchemaError) as excinfo:
        build_responses("Post")

    assert excinfo.value.extra["role"] == "output"


@pytest.mark.unit
def test_error_response_object_describes_error_envelope() -> None:
    schema = ERROR_RESPONSE_OBJECT["content"]["application/json"]["schema"]
    error = schema["properties"]["error"]

    assert schema["properties"]["ok"]["const"] is False
    assert set(error["properties"]) == {"message", "code", "issues"}
    assert set(error["required"]) == {"message", "code"}
    assert "$defs" not in schema


class _Plain:
    pass


@pytest.mark.unit
def test_plain_class_output_is_rejected_as_non_schema() -> None:
    with pytest.raises(NotASchemaError) as excinfo:
        build_responses(_Plain)

    assert excinfo.value.extra == {"role": "output", "received": "type"}


@pytest.mark.unit
def test_container_of_plain_class_input_is_rejected_as_non_schema() -> None:
    with pytest.raises(NotASchemaError):
        build_request_and_parameters(list[_Plain], "/posts")


@pytest.mark.unit
def test_error_issues_are_optional_but_not_nullable() -> None:
    schema = ERROR_RESPONSE_OBJECT["content"]["application/json"]["schema"]
    issues = schema["properties"]["error"]["properties"]["issues"]

    assert issues["type"] == "array"
    assert "anyOf" not in issues
    assert "default" not in issues
