"""Error Handling for Registry and Loader Outcomes

Key components:
- Result[T, E]: Ok/Err container for setup and lookup operations
- ErrorCode: machine-readable validation codes
- RegistryError / LoadError: frozen failure records
- SchemaDefinitionError: raised when a schema is authored incorrectly

Usage:
    from sieve.errors import Ok, Err

    match registry.validate("User", payload):
        case Ok(validation):
            ...
        case Err(error):
            log.warning("lookup_failed", name=error.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    ErrorCode,
    RegistryError,
    RegistryErrorCode,
    LoadError,
    LoadErrorKind,
    SchemaDefinitionError,
    # Combinators
    collect_results,
)

from .builders import (
    # Registry
    duplicate_name,
    schema_not_found,
    # Loader
    load_error,
    io_error,
    parse_error,
    document_error,
    invalid_file_name,
    registration_failed,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "ErrorCode",
    "RegistryError",
    "RegistryErrorCode",
    "LoadError",
    "LoadErrorKind",
    "SchemaDefinitionError",
    "collect_results",
    "duplicate_name",
    "schema_not_found",
    "load_error",
    "io_error",
    "parse_error",
    "document_error",
    "invalid_file_name",
    "registration_failed",
]
