"""Monadic Error Handling Types

Result/Either types for registry and loader outcomes. Data problems never
travel through these: they are `Failure` values from `sieve.validation`.
Result is reserved for lookups and setup operations where the caller made
a programmer-level mistake (unknown schema name, duplicate registration,
unreadable schema file).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, NoReturn, TypeVar, Union, final

T = TypeVar("T")
E = TypeVar("E")


class ErrorCode(str, Enum):
    """Machine-readable validation error codes.

    Values are the plain strings stored on `ValidationError.code`.
    """
    # Generic
    VALIDATION_ERROR = "validation_error"

    # Type mismatches
    INVALID_TYPE = "invalid_type"
    OVERFLOW = "overflow"

    # Leaf constraints
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    MIN_VALUE = "min_value"
    MAX_VALUE = "max_value"
    POSITIVE = "positive"
    NON_NEGATIVE = "non_negative"
    NEGATIVE = "negative"
    INVALID_EMAIL = "invalid_email"
    INVALID_URL = "invalid_url"
    INVALID_UUID = "invalid_uuid"
    INVALID_DATE = "invalid_date"
    INVALID_DATETIME = "invalid_datetime"
    INVALID_IP = "invalid_ip"
    INVALID_IPV4 = "invalid_ipv4"
    INVALID_IPV6 = "invalid_ipv6"
    INVALID_ENUM = "invalid_enum"
    INVALID_PREFIX = "invalid_prefix"
    INVALID_SUFFIX = "invalid_suffix"
    INVALID_SUBSTRING = "invalid_substring"

    # Container structure
    REQUIRED = "required"
    ADDITIONAL_PROPERTY = "additional_property"
    UNIQUE = "unique"

    # Cross-field
    CONDITIONAL_REQUIRED = "conditional_required"
    MUTUALLY_EXCLUSIVE = "mutually_exclusive"
    AT_LEAST_ONE_REQUIRED = "at_least_one_required"
    FIELDS_NOT_EQUAL = "fields_not_equal"
    FIELD_NOT_LESS_THAN = "field_not_less_than"
    FIELD_NOT_LESS_OR_EQUAL = "field_not_less_or_equal"

    # Combinators
    ONE_OF_NONE_MATCHED = "one_of_none_matched"
    ONE_OF_MULTIPLE_MATCHED = "one_of_multiple_matched"
    ANY_OF_NONE_MATCHED = "any_of_none_matched"

    # References
    MISSING_REGISTRY = "missing_registry"
    MISSING_REFERENCE = "missing_reference"
    MAX_DEPTH_EXCEEDED = "max_depth_exceeded"

    def __str__(self) -> str:
        return self.value


class RegistryErrorCode(Enum):
    DUPLICATE_NAME = "DuplicateName"
    SCHEMA_NOT_FOUND = "SchemaNotFound"


class LoadErrorKind(Enum):
    """Why a schema document could not be turned into a registration."""
    IO = "io"
    PARSE = "parse"
    SCHEMA = "schema"
    INVALID_FILE_NAME = "invalid_file_name"
    REGISTRY = "registry"


class SchemaDefinitionError(ValueError):
    """Raised at build time when a schema is authored incorrectly.

    Invalid regex patterns, negative bounds and inverted ranges land here.
    These are mistakes in the schema, never problems with the data.
    """


@dataclass(frozen=True, slots=True)
class RegistryError:
    """Registry lookup or registration failure."""
    code: RegistryErrorCode
    message: str
    name: str

    def to_dict(self) -> dict:
        return {"error": {"code": self.code.value, "message": self.message, "name": self.name}}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


@dataclass(frozen=True, slots=True)
class LoadError:
    """Failure to load one schema document."""
    kind: LoadErrorKind
    message: str
    path: Path | None = None

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message, "path": str(self.path) if self.path else None}

    def __str__(self) -> str:
        where = f"{self.path}: " if self.path else ""
        return f"[{self.kind.value}] {where}{self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default


Result = Union[Ok[T], Err[E]]


def collect_results(results: list[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect list of Results into Result of list.

    Returns Ok with all values if all are Ok.
    Returns Err with all errors if any are Err.
    """
    values: list[T] = []
    errors: list[E] = []

    for r in results:
        match r:
            case Ok(v):
                values.append(v)
            case Err(e):
                errors.append(e)

    if errors:
        return Err(errors)
    return Ok(values)
