"""Validation Result Algebra

`Success(value)` / `Failure(errors)` with applicative accumulation.

Unlike `Result`, combining two validations never stops at the first
failure: `a.combine(b)` fails with the errors of both sides. Fail-fast
chaining is still available through `and_then` for callers that combine
independent top-level validations.

Usage:
    from sieve.validation import Success, Failure, collect

    match schema.validate(payload):
        case Success(value):
            save(value)
        case Failure(errors):
            return errors.to_dict()
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, NoReturn, TypeVar, Union, final

from .errors import ValidationError, ValidationErrors

T = TypeVar("T")
U = TypeVar("U")


@final
@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Valid input, carrying the validated (possibly transformed) value."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def errors_or_none(self) -> None:
        return None

    def map(self, f: Callable[[T], U]) -> Validation[U]:
        return Success(f(self.value))

    def and_then(self, f: Callable[[T], Validation[U]]) -> Validation[U]:
        """Fail-fast chaining."""
        return f(self.value)

    def combine(self, other: Validation[U], merge: Callable[[T, U], Any] | None = None) -> Validation[Any]:
        """Accumulating AND. Keeps the second value unless `merge` is given."""
        match other:
            case Success(v):
                return Success(merge(self.value, v) if merge else v)
            case _:
                return other

    def match(self, success: Callable[[T], U], failure: Callable[[ValidationErrors], U]) -> U:
        return success(self.value)


@final
@dataclass(frozen=True, slots=True)
class Failure:
    """Invalid input with every violation found. Never empty."""
    errors: ValidationErrors

    def __post_init__(self):
        # Accept a bare error or a plain sequence for convenience.
        if isinstance(self.errors, ValidationError):
            object.__setattr__(self, "errors", ValidationErrors.single(self.errors))
        elif not isinstance(self.errors, ValidationErrors):
            object.__setattr__(self, "errors", ValidationErrors(self.errors))

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Failure: {self.errors}")

    def unwrap_or(self, default: T) -> T:
        return default

    def errors_or_none(self) -> ValidationErrors:
        return self.errors

    def map(self, f: Callable[[Any], U]) -> Validation[U]:
        return self

    def and_then(self, f: Callable[[Any], Validation[U]]) -> Validation[U]:
        return self

    def combine(self, other: Validation[U], merge: Callable[[Any, U], Any] | None = None) -> Validation[Any]:
        match other:
            case Failure(errors):
                return Failure(self.errors.combine(errors))
            case _:
                return self

    def match(self, success: Callable[[Any], U], failure: Callable[[ValidationErrors], U]) -> U:
        return failure(self.errors)


Validation = Union[Success[T], Failure]


def fail(error: ValidationError) -> Failure:
    """Failure holding a single error."""
    return Failure(ValidationErrors.single(error))


def collect(validations: Iterable[Validation[T]]) -> Validation[list[T]]:
    """Accumulate validations into one.

    Returns Success with every value if all succeed, otherwise a Failure
    with all errors in order.
    """
    values: list[T] = []
    errors: list[ValidationError] = []

    for v in validations:
        match v:
            case Success(value):
                values.append(value)
            case Failure(errs):
                errors.extend(errs)

    if errors:
        return Failure(ValidationErrors(errors))
    return Success(values)


def sequence(validations: Iterable[Validation[T]]) -> Validation[list[T]]:
    """Like `collect`, but stops at the first Failure."""
    values: list[T] = []

    for v in validations:
        match v:
            case Success(value):
                values.append(value)
            case Failure():
                return v

    return Success(values)


def ensure(condition: bool, error: ValidationError) -> Validation[None]:
    """Guard returning Failure when condition is False."""
    return Success(None) if condition else fail(error)
