"""Array schema.

Length errors come first, then item errors at `path[i]`, then uniqueness
errors. Uniqueness looks at the raw items, so duplicates are reported even
when the items themselves are invalid.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from sieve.errors import ErrorCode, SchemaDefinitionError
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationContext, ValidationError, ValidationErrors
from sieve.validation.builders import constraint_error, invalid_type
from sieve.validation.values import canonical

from .base import SchemaLike

KeyFunction = Callable[[Any], Any]


def find_duplicates(items: list[Any], key: KeyFunction) -> list[list[int]]:
    """Groups of indices sharing a canonical key, in order of first occurrence."""
    groups: dict[str, list[int]] = {}
    for index, item in enumerate(items):
        groups.setdefault(canonical(key(item)), []).append(index)
    return [indices for indices in groups.values() if len(indices) > 1]


class ArrayConstraint(ABC):
    message: str | None

    @abstractmethod
    def check(self, items: list[Any], path: JsonPath) -> list[ValidationError]: ...

    def with_message(self, message: str) -> ArrayConstraint:
        return replace(self, message=message)


@dataclass(frozen=True, slots=True)
class MinItems(ArrayConstraint):
    min: int
    message: str | None = None

    def check(self, items: list[Any], path: JsonPath) -> list[ValidationError]:
        if (count := len(items)) >= self.min: return []
        return [constraint_error(path, ErrorCode.MIN_LENGTH,
            self.message or f"array must have at least {self.min} items, got {count}",
            expected=f"at least {self.min} items", actual=f"{count} items")]


@dataclass(frozen=True, slots=True)
class MaxItems(ArrayConstraint):
    max: int
    message: str | None = None

    def check(self, items: list[Any], path: JsonPath) -> list[ValidationError]:
        if (count := len(items)) <= self.max: return []
        return [constraint_error(path, ErrorCode.MAX_LENGTH,
            self.message or f"array must have at most {self.max} items, got {count}",
            expected=f"at most {self.max} items", actual=f"{count} items")]


@dataclass(frozen=True, slots=True)
class Unique(ArrayConstraint):
    """Unique items, or unique keys when `key` is given."""
    key: KeyFunction | None = field(default=None, compare=False)
    message: str | None = None

    def check(self, items: list[Any], path: JsonPath) -> list[ValidationError]:
        what = "key" if self.key else "value"
        return [
            constraint_error(path, ErrorCode.UNIQUE, self.message or f"duplicate {what} at indices {indices}",
                actual=f"duplicates at indices {indices}")
            for indices in find_duplicates(items, self.key or (lambda item: item))
        ]


class ArraySchema(SchemaLike):
    """Validates arrays whose items all match one schema.

    Example:
        Schema.array(Schema.string()).non_empty().unique()
    """

    def __init__(self, item_schema: SchemaLike) -> None:
        self._item_schema = item_schema
        self._constraints: tuple[ArrayConstraint, ...] = ()
        self._type_message: str | None = None

    @property
    def item_schema(self) -> SchemaLike: return self._item_schema

    @property
    def constraints(self) -> tuple[ArrayConstraint, ...]: return self._constraints

    def _with(self, constraint: ArrayConstraint) -> ArraySchema:
        clone = self._copy()
        clone._constraints = (*self._constraints, constraint)
        return clone

    def min_len(self, n: int) -> ArraySchema:
        if n < 0: raise SchemaDefinitionError(f"min_len must be non-negative, got {n}")
        return self._with(MinItems(n))

    def max_len(self, n: int) -> ArraySchema:
        if n < 0: raise SchemaDefinitionError(f"max_len must be non-negative, got {n}")
        return self._with(MaxItems(n))

    def non_empty(self) -> ArraySchema: return self.min_len(1)

    def unique(self) -> ArraySchema: return self._with(Unique())

    def unique_by(self, key: KeyFunction) -> ArraySchema:
        """Items must be unique by `key(item)`, compared in canonical form."""
        return self._with(Unique(key))

    def error(self, message: str) -> ArraySchema:
        """Override the message of the last constraint, or the type error if none."""
        clone = self._copy()
        if self._constraints:
            clone._constraints = (*self._constraints[:-1], self._constraints[-1].with_message(message))
        else:
            clone._type_message = message
        return clone

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[list[Any]]:
        return self.validate_with_context(value, path, None)

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[list[Any]]:
        path = path if path is not None else JsonPath.root()
        if not isinstance(value, list):
            return invalid_type(path, "array", value, self._type_message)

        errors: list[ValidationError] = []
        for constraint in self._constraints:
            if not isinstance(constraint, Unique):
                errors.extend(constraint.check(value, path))

        validated: list[Any] = []
        for index, item in enumerate(value):
            match self._item_schema.validate_with_context(item, path.push_index(index), context):
                case Success(v):
                    validated.append(v)
                case Failure(errs):
                    errors.extend(errs)

        for constraint in self._constraints:
            if isinstance(constraint, Unique):
                errors.extend(constraint.check(value, path))

        return Failure(ValidationErrors(errors)) if errors else Success(validated)

    def collect_refs(self, refs: list[str]) -> None:
        self._item_schema.collect_refs(refs)
