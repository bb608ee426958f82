"""Integer schema.

The type check is strict: booleans and floats (even `1.0`) are rejected,
and integers outside the signed 64-bit range report `overflow`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Callable

from sieve.errors import ErrorCode, SchemaDefinitionError
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationError, ValidationErrors, fail
from sieve.validation.builders import constraint_error, invalid_type
from sieve.validation.values import I64_MAX, I64_MIN

from .base import SchemaLike

IntegerValidator = Callable[[int, JsonPath], Validation[Any]]


class IntegerConstraint(ABC):
    message: str | None

    @abstractmethod
    def check(self, value: int, path: JsonPath) -> ValidationError | None: ...

    def with_message(self, message: str) -> IntegerConstraint:
        return replace(self, message=message)


@dataclass(frozen=True, slots=True)
class Min(IntegerConstraint):
    min: int
    message: str | None = None

    def check(self, value: int, path: JsonPath) -> ValidationError | None:
        if value >= self.min: return None
        return constraint_error(path, ErrorCode.MIN_VALUE, self.message or f"must be at least {self.min}, got {value}",
            expected=f"at least {self.min}", actual=value)


@dataclass(frozen=True, slots=True)
class Max(IntegerConstraint):
    max: int
    message: str | None = None

    def check(self, value: int, path: JsonPath) -> ValidationError | None:
        if value <= self.max: return None
        return constraint_error(path, ErrorCode.MAX_VALUE, self.message or f"must be at most {self.max}, got {value}",
            expected=f"at most {self.max}", actual=value)


@dataclass(frozen=True, slots=True)
class Positive(IntegerConstraint):
    message: str | None = None

    def check(self, value: int, path: JsonPath) -> ValidationError | None:
        if value > 0: return None
        return constraint_error(path, ErrorCode.POSITIVE, self.message or f"must be positive, got {value}",
            expected="value > 0", actual=value)


@dataclass(frozen=True, slots=True)
class NonNegative(IntegerConstraint):
    message: str | None = None

    def check(self, value: int, path: JsonPath) -> ValidationError | None:
        if value >= 0: return None
        return constraint_error(path, ErrorCode.NON_NEGATIVE, self.message or f"must be non-negative, got {value}",
            expected="value >= 0", actual=value)


@dataclass(frozen=True, slots=True)
class Negative(IntegerConstraint):
    message: str | None = None

    def check(self, value: int, path: JsonPath) -> ValidationError | None:
        if value < 0: return None
        return constraint_error(path, ErrorCode.NEGATIVE, self.message or f"must be negative, got {value}",
            expected="value < 0", actual=value)


class IntegerSchema(SchemaLike):
    """Validates signed 64-bit integers.

    Example:
        Schema.integer().range(0, 150)
    """

    def __init__(self) -> None:
        self._constraints: tuple[IntegerConstraint, ...] = ()
        self._validators: tuple[IntegerValidator, ...] = ()
        self._type_message: str | None = None

    @property
    def constraints(self) -> tuple[IntegerConstraint, ...]: return self._constraints

    def _with(self, *constraints: IntegerConstraint) -> IntegerSchema:
        clone = self._copy()
        clone._constraints = (*self._constraints, *constraints)
        return clone

    def min(self, n: int) -> IntegerSchema: return self._with(Min(n))

    def max(self, n: int) -> IntegerSchema: return self._with(Max(n))

    def range(self, lo: int, hi: int) -> IntegerSchema:
        if lo > hi: raise SchemaDefinitionError(f"range lower bound {lo} exceeds upper bound {hi}")
        return self._with(Min(lo), Max(hi))

    def positive(self) -> IntegerSchema: return self._with(Positive())

    def non_negative(self) -> IntegerSchema: return self._with(NonNegative())

    def negative(self) -> IntegerSchema: return self._with(Negative())

    def custom(self, validator: IntegerValidator) -> IntegerSchema:
        clone = self._copy()
        clone._validators = (*self._validators, validator)
        return clone

    def error(self, message: str) -> IntegerSchema:
        """Override the message of the last constraint, or the type error if none."""
        clone = self._copy()
        if self._constraints:
            clone._constraints = (*self._constraints[:-1], self._constraints[-1].with_message(message))
        else:
            clone._type_message = message
        return clone

    def _type_check(self, value: Any, path: JsonPath) -> Failure | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return invalid_type(path, "integer", value, self._type_message)
        if isinstance(value, float):
            return fail(
                ValidationError.at(path, self._type_message or "expected integer, got float")
                .with_code(ErrorCode.INVALID_TYPE).with_actual("float").with_expected("integer")
            )
        if not I64_MIN <= value <= I64_MAX:
            return fail(
                ValidationError.at(path, self._type_message or "integer value too large for i64")
                .with_code(ErrorCode.OVERFLOW).with_actual(value).with_expected("integer in i64 range")
            )
        return None

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[int]:
        path = path if path is not None else JsonPath.root()
        if (failure := self._type_check(value, path)) is not None:
            return failure

        errors = [e for c in self._constraints if (e := c.check(value, path)) is not None]
        for validator in self._validators:
            if isinstance(result := validator(value, path), Failure):
                errors.extend(result.errors)

        return Failure(ValidationErrors(errors)) if errors else Success(value)
