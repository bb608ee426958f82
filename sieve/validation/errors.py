"""Validation Error Model

A `ValidationError` pins one problem to a location in the input value.
`ValidationErrors` is the non-empty, insertion-ordered bag that schemas
accumulate into; errors surface in the order the checks ran.

Error Format (to_dict):
{
    "errors": [
        {
            "path": "users[0].email",
            "message": "must be valid email",
            "code": "invalid_email",
            "expected": "valid email",
            "got": "not-an-email"
        }
    ],
    "count": 1
}
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Any, Iterable, Iterator

from sieve.errors import ErrorCode
from sieve.path import JsonPath


@total_ordering
@dataclass(frozen=True, slots=True)
class ValidationError:
    """A single validation failure with its location and machine code."""
    location: JsonPath
    message: str
    code: str = ErrorCode.VALIDATION_ERROR.value
    actual: str | None = None
    expected: str | None = None

    @classmethod
    def at(cls, path: JsonPath, message: str) -> ValidationError:
        return cls(location=path, message=message)

    def with_code(self, code: str) -> ValidationError:
        return replace(self, code=str(code))

    def with_actual(self, actual: Any) -> ValidationError:
        return replace(self, actual=str(actual))

    with_got = with_actual

    def with_expected(self, expected: Any) -> ValidationError:
        return replace(self, expected=str(expected))

    @property
    def path(self) -> JsonPath: return self.location

    @property
    def got(self) -> str | None: return self.actual

    def _sort_key(self) -> tuple:
        return (self.location._sort_key(), self.message, self.code, self.actual or "", self.expected or "")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {"path": str(self.location), "message": self.message, "code": self.code,
            "expected": self.expected, "got": self.actual}

    def __str__(self) -> str:
        text = f"{str(self.location) or '(root)'}: {self.message}"
        if self.expected is not None: text += f" (expected: {self.expected})"
        if self.actual is not None: text += f" (got: {self.actual})"
        return text


class ValidationErrors:
    """Non-empty, ordered collection of validation errors.

    Constructing one from an empty iterable is a programming mistake and
    raises ValueError; failures always carry at least one error.
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: Iterable[ValidationError]):
        items = tuple(errors)
        if not items:
            raise ValueError("ValidationErrors requires at least one error")
        self._errors: tuple[ValidationError, ...] = items

    @classmethod
    def single(cls, error: ValidationError) -> ValidationErrors:
        return cls((error,))

    @classmethod
    def from_list(cls, errors: list[ValidationError]) -> ValidationErrors:
        return cls(errors)

    def combine(self, other: ValidationErrors) -> ValidationErrors:
        """Append `other` after this collection. Associative."""
        return ValidationErrors((*self._errors, *other._errors))

    def __add__(self, other: ValidationErrors) -> ValidationErrors:
        if not isinstance(other, ValidationErrors):
            return NotImplemented
        return self.combine(other)

    def at_path(self, path: JsonPath) -> list[ValidationError]:
        return [e for e in self._errors if e.location == path]

    def with_code(self, code: str) -> list[ValidationError]:
        return [e for e in self._errors if e.code == code]

    def codes(self) -> list[str]:
        return [e.code for e in self._errors]

    def first(self) -> ValidationError: return self._errors[0]

    def len(self) -> int: return len(self._errors)

    def to_list(self) -> list[ValidationError]: return list(self._errors)

    def __len__(self) -> int: return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]: return iter(self._errors)

    def __getitem__(self, index: int) -> ValidationError: return self._errors[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationErrors):
            return NotImplemented
        return self._errors == other._errors

    def __hash__(self) -> int: return hash(self._errors)

    def to_dict(self) -> dict[str, Any]:
        return {"errors": [e.to_dict() for e in self._errors], "count": len(self._errors)}

    def __str__(self) -> str:
        lines = [f"Validation failed with {len(self._errors)} error(s):"]
        lines.extend(f"  {i}. {error}" for i, error in enumerate(self._errors, 1))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"ValidationErrors({list(self._errors)!r})"
