"""String schema.

Type check first; then transforms, then every constraint independently,
then custom validators. All constraint failures are reported together.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any, Callable

from sieve.errors import ErrorCode, SchemaDefinitionError
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationError, ValidationErrors
from sieve.validation.builders import constraint_error, invalid_type

from .base import SchemaLike

StringValidator = Callable[[str, JsonPath], Validation[Any]]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


# ============================================================================
# Format checks
# ============================================================================

def _is_url(value: str) -> bool:
    # Scheme prefix plus at least one character; the rest is not parsed.
    for prefix in ("http://", "https://"):
        if value.startswith(prefix):
            return len(value) > len(prefix)
    return False


def _is_date(value: str) -> bool:
    if not _DATE_RE.match(value): return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_datetime(value: str) -> bool:
    if not _DATETIME_RE.match(value): return False
    try:
        datetime.fromisoformat(value[:-1] + "+00:00" if value.endswith("Z") else value)
    except ValueError:
        return False
    return True


def _parses_as(parser: Callable[[str], Any]) -> Callable[[str], bool]:
    def check(value: str) -> bool:
        try:
            parser(value)
        except ValueError:
            return False
        return True
    return check


class StringFormat(Enum):
    """Well-known string formats: (label, error code, check)."""
    EMAIL = ("valid email", ErrorCode.INVALID_EMAIL, lambda v: bool(_EMAIL_RE.match(v)))
    URL = ("valid URL", ErrorCode.INVALID_URL, _is_url)
    UUID = ("valid UUID", ErrorCode.INVALID_UUID, lambda v: bool(_UUID_RE.match(v)))
    DATE = ("valid date (YYYY-MM-DD)", ErrorCode.INVALID_DATE, _is_date)
    DATETIME = ("valid ISO 8601 datetime", ErrorCode.INVALID_DATETIME, _is_datetime)
    IP = ("valid IP address", ErrorCode.INVALID_IP, _parses_as(ip_address))
    IPV4 = ("valid IPv4 address", ErrorCode.INVALID_IPV4, _parses_as(IPv4Address))
    IPV6 = ("valid IPv6 address", ErrorCode.INVALID_IPV6, _parses_as(IPv6Address))

    @property
    def label(self) -> str: return self.value[0]

    @property
    def code(self) -> ErrorCode: return self.value[1]

    def matches(self, value: str) -> bool: return self.value[2](value)


# ============================================================================
# Constraints
# ============================================================================

class StringConstraint(ABC):
    """One independent check on an already type-checked string."""

    message: str | None

    @abstractmethod
    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        """Return an error when the value violates the constraint."""

    def with_message(self, message: str) -> StringConstraint:
        return replace(self, message=message)


@dataclass(frozen=True, slots=True)
class MinLength(StringConstraint):
    min: int
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if (length := len(value)) >= self.min: return None
        return constraint_error(path, ErrorCode.MIN_LENGTH,
            self.message or f"length must be at least {self.min}, got {length}",
            expected=f"at least {self.min} characters", actual=f"{length} characters")


@dataclass(frozen=True, slots=True)
class MaxLength(StringConstraint):
    max: int
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if (length := len(value)) <= self.max: return None
        return constraint_error(path, ErrorCode.MAX_LENGTH,
            self.message or f"length must be at most {self.max}, got {length}",
            expected=f"at most {self.max} characters", actual=f"{length} characters")


@dataclass(frozen=True, slots=True)
class Pattern(StringConstraint):
    pattern: str
    compiled: re.Pattern = field(compare=False, repr=False)
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if self.compiled.search(value): return None
        return constraint_error(path, ErrorCode.PATTERN, self.message or f"must match pattern '{self.pattern}'",
            expected=f"string matching '{self.pattern}'", actual=value)


@dataclass(frozen=True, slots=True)
class Format(StringConstraint):
    format: StringFormat
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if self.format.matches(value): return None
        return constraint_error(path, self.format.code, self.message or f"must be {self.format.label}",
            expected=self.format.label, actual=value)


@dataclass(frozen=True, slots=True)
class OneOf(StringConstraint):
    values: tuple[str, ...]
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if value in self.values: return None
        options = ", ".join(self.values)
        return constraint_error(path, ErrorCode.INVALID_ENUM, self.message or f"must be one of: {options}",
            expected=f"one of: {options}", actual=value)


@dataclass(frozen=True, slots=True)
class StartsWith(StringConstraint):
    prefix: str
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if value.startswith(self.prefix): return None
        return constraint_error(path, ErrorCode.INVALID_PREFIX, self.message or f"must start with '{self.prefix}'",
            expected=f"string starting with '{self.prefix}'", actual=value)


@dataclass(frozen=True, slots=True)
class EndsWith(StringConstraint):
    suffix: str
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if value.endswith(self.suffix): return None
        return constraint_error(path, ErrorCode.INVALID_SUFFIX, self.message or f"must end with '{self.suffix}'",
            expected=f"string ending with '{self.suffix}'", actual=value)


@dataclass(frozen=True, slots=True)
class Contains(StringConstraint):
    substring: str
    message: str | None = None

    def check(self, value: str, path: JsonPath) -> ValidationError | None:
        if self.substring in value: return None
        return constraint_error(path, ErrorCode.INVALID_SUBSTRING, self.message or f"must contain '{self.substring}'",
            expected=f"string containing '{self.substring}'", actual=value)


# ============================================================================
# Schema
# ============================================================================

class StringSchema(SchemaLike):
    """Validates strings.

    Example:
        Schema.string().trim().min_len(3).max_len(20).pattern(r"^[a-z_]+$")
    """

    def __init__(self) -> None:
        self._constraints: tuple[StringConstraint, ...] = ()
        self._transforms: tuple[Callable[[str], str], ...] = ()
        self._validators: tuple[StringValidator, ...] = ()
        self._type_message: str | None = None

    @property
    def constraints(self) -> tuple[StringConstraint, ...]: return self._constraints

    def _with(self, constraint: StringConstraint) -> StringSchema:
        clone = self._copy()
        clone._constraints = (*self._constraints, constraint)
        return clone

    def _with_transform(self, transform: Callable[[str], str]) -> StringSchema:
        clone = self._copy()
        clone._transforms = (*self._transforms, transform)
        return clone

    def min_len(self, n: int) -> StringSchema:
        if n < 0: raise SchemaDefinitionError(f"min_len must be non-negative, got {n}")
        return self._with(MinLength(n))

    def max_len(self, n: int) -> StringSchema:
        if n < 0: raise SchemaDefinitionError(f"max_len must be non-negative, got {n}")
        return self._with(MaxLength(n))

    def pattern(self, regex: str) -> StringSchema:
        """Require a regex match anywhere in the string.

        Raises:
            SchemaDefinitionError: if the pattern does not compile
        """
        try:
            compiled = re.compile(regex)
        except re.error as e:
            raise SchemaDefinitionError(f"invalid pattern '{regex}': {e}") from e
        return self._with(Pattern(regex, compiled))

    def format(self, fmt: StringFormat) -> StringSchema: return self._with(Format(fmt))

    def email(self) -> StringSchema: return self.format(StringFormat.EMAIL)

    def url(self) -> StringSchema: return self.format(StringFormat.URL)

    def uuid(self) -> StringSchema: return self.format(StringFormat.UUID)

    def date(self) -> StringSchema: return self.format(StringFormat.DATE)

    def datetime(self) -> StringSchema: return self.format(StringFormat.DATETIME)

    def ip(self) -> StringSchema: return self.format(StringFormat.IP)

    def ipv4(self) -> StringSchema: return self.format(StringFormat.IPV4)

    def ipv6(self) -> StringSchema: return self.format(StringFormat.IPV6)

    def one_of(self, values) -> StringSchema: return self._with(OneOf(tuple(values)))

    def starts_with(self, prefix: str) -> StringSchema: return self._with(StartsWith(prefix))

    def ends_with(self, suffix: str) -> StringSchema: return self._with(EndsWith(suffix))

    def contains(self, substring: str) -> StringSchema: return self._with(Contains(substring))

    def trim(self) -> StringSchema: return self._with_transform(str.strip)

    def lowercase(self) -> StringSchema: return self._with_transform(str.lower)

    def uppercase(self) -> StringSchema: return self._with_transform(str.upper)

    def custom(self, validator: StringValidator) -> StringSchema:
        """Attach `validator(value, path) -> Validation`; runs after all constraints."""
        clone = self._copy()
        clone._validators = (*self._validators, validator)
        return clone

    def error(self, message: str) -> StringSchema:
        """Override the message of the last constraint, or the type error if none."""
        clone = self._copy()
        if self._constraints:
            clone._constraints = (*self._constraints[:-1], self._constraints[-1].with_message(message))
        else:
            clone._type_message = message
        return clone

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[str]:
        path = path if path is not None else JsonPath.root()
        if not isinstance(value, str):
            return invalid_type(path, "string", value, self._type_message)

        for transform in self._transforms:
            value = transform(value)

        errors = [e for c in self._constraints if (e := c.check(value, path)) is not None]
        for validator in self._validators:
            if isinstance(result := validator(value, path), Failure):
                errors.extend(result.errors)

        return Failure(ValidationErrors(errors)) if errors else Success(value)
