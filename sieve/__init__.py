"""Sieve: accumulating validation for JSON-shaped values.

Schemas report every violation at once instead of stopping at the first.
Named schemas live in a thread-safe registry and may reference each other,
including recursively; reference depth is bounded per validation.

Usage:
    from sieve import Schema, SchemaRegistry, Success, Failure

    user = (
        Schema.object()
        .field("email", Schema.string().email())
        .field("age", Schema.integer().non_negative())
    )
    match user.validate({"email": "x", "age": -1}):
        case Success(value):
            ...
        case Failure(errors):
            print(errors)  # both problems, in field order
"""
__version__ = "0.1.0"

from sieve.config import Settings, get_settings, settings
from sieve.logging import configure_logging, get_logger
from sieve.errors import Ok, Err, Result, ErrorCode, RegistryError, LoadError, SchemaDefinitionError
from sieve.path import JsonPath
from sieve.validation import (
    Success,
    Failure,
    Validation,
    ValidationError,
    ValidationErrors,
    ValidationContext,
    RegistryAccess,
    collect,
    sequence,
)
from sieve.schema import (
    Schema,
    SchemaLike,
    StringSchema,
    IntegerSchema,
    ObjectSchema,
    ValidatedObject,
    ArraySchema,
    OneOfSchema,
    AnyOfSchema,
    AllOfSchema,
    OptionalSchema,
    RefSchema,
    EnvSchema,
)
from sieve.registry import SchemaRegistry
from sieve.interop import JSONSchemaGenerator, to_json_schema
from sieve.loading import SchemaLoader, load_dir

__all__ = [
    "__version__",
    # Config & logging
    "Settings",
    "get_settings",
    "settings",
    "configure_logging",
    "get_logger",
    # Errors
    "Ok",
    "Err",
    "Result",
    "ErrorCode",
    "RegistryError",
    "LoadError",
    "SchemaDefinitionError",
    # Validation
    "JsonPath",
    "Success",
    "Failure",
    "Validation",
    "ValidationError",
    "ValidationErrors",
    "ValidationContext",
    "RegistryAccess",
    "collect",
    "sequence",
    # Schemas
    "Schema",
    "SchemaLike",
    "StringSchema",
    "IntegerSchema",
    "ObjectSchema",
    "ValidatedObject",
    "ArraySchema",
    "OneOfSchema",
    "AnyOfSchema",
    "AllOfSchema",
    "OptionalSchema",
    "RefSchema",
    "EnvSchema",
    # Registry & adapters
    "SchemaRegistry",
    "JSONSchemaGenerator",
    "to_json_schema",
    "SchemaLoader",
    "load_dir",
]
