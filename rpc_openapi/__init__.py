"""rpc-openapi: 从过程的 pydantic 输入/输出 schema 与路径模板生成 OpenAPI 文档."""

from rpc_openapi.core.exceptions import (
    AppError,
    DuplicateOperationError,
    DuplicateProcedureError,
    MalformedSegmentError,
    NotASchemaError,
    ObjectKindRequiredError,
    SchemaContractError,
    StringFieldRequiredError,
    UnknownPathFieldError,
    UnsupportedMethodError,
)
from rpc_openapi.generator.content import (
    ERROR_RESPONSE_OBJECT,
    build_request_and_parameters,
    build_responses,
    get_mutation_input_objects,
    get_responses_object,
)
from rpc_openapi.generator.document import generate_openapi_document
from rpc_openapi.generator.parameters import (
    build_path_parameters,
    build_query_parameters,
    get_parameter_objects,
)
from rpc_openapi.generator.paths import extract_dynamic_names, partition
from rpc_openapi.procedures import Procedure, ProcedureRegistry
from rpc_openapi.settings import Settings

__all__ = [
    "ERROR_RESPONSE_OBJECT",
    "AppError",
    "DuplicateOperationError",
    "DuplicateProcedureError",
    "MalformedSegmentError",
    "NotASchemaError",
    "ObjectKindRequiredError",
    "Procedure",
    "ProcedureRegistry",
    "SchemaContractError",
    "Settings",
    "StringFieldRequiredError",
    "UnknownPathFieldError",
    "UnsupportedMethodError",
    "build_path_parameters",
    "build_query_parameters",
    "build_request_and_parameters",
    "build_responses",
    "extract_dynamic_names",
    "generate_openapi_document",
    "get_mutation_input_objects",
    "get_parameter_objects",
    "get_responses_object",
    "partition",
]
