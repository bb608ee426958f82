"""Schema combinators: OneOf, AnyOf, AllOf, Optional.

Combinators forward the validation context unchanged; only reference
hops increase depth.
"""
from __future__ import annotations

from abc import abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from sieve.config import settings
from sieve.errors import ErrorCode
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationContext, ValidationError, ValidationErrors, fail
from sieve.validation.builders import constraint_error

from .base import SchemaLike


class _Composite(SchemaLike):
    """Shared plumbing for combinators over a list of schemas."""

    def __init__(self, schemas: Iterable[SchemaLike]) -> None:
        self._schemas: tuple[SchemaLike, ...] = tuple(schemas)

    @property
    def schemas(self) -> tuple[SchemaLike, ...]: return self._schemas

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        return self.validate_with_context(value, path, None)

    @abstractmethod
    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        """Run the component schemas and combine their outcomes."""

    def collect_refs(self, refs: list[str]) -> None:
        for schema in self._schemas:
            schema.collect_refs(refs)


class OneOfSchema(_Composite):
    """Exactly one schema must match; ambiguity is an error."""

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        path = path if path is not None else JsonPath.root()
        matched: list[int] = []
        first: Validation[Any] | None = None
        for index, schema in enumerate(self._schemas):
            if isinstance(result := schema.validate_with_context(value, path, context), Success):
                matched.append(index)
                if first is None:
                    first = result

        if len(matched) == 1:
            return first
        if not matched:
            return fail(constraint_error(path, ErrorCode.ONE_OF_NONE_MATCHED,
                f"value did not match any of {len(self._schemas)} schemas"))
        return fail(constraint_error(path, ErrorCode.ONE_OF_MULTIPLE_MATCHED,
            f"value matched {len(matched)} schemas (indices {matched}), expected exactly one"))


class AnyOfSchema(_Composite):
    """First matching schema wins, tried in declaration order."""

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        path = path if path is not None else JsonPath.root()
        for schema in self._schemas:
            if isinstance(result := schema.validate_with_context(value, path, context), Success):
                return result
        return fail(constraint_error(path, ErrorCode.ANY_OF_NONE_MATCHED,
            f"value did not match any of {len(self._schemas)} schemas"))


class AllOfSchema(_Composite):
    """Every schema must match; errors from all of them are merged.

    On success the result is the last schema's value, except that when every
    schema produced an object the outputs are merged in order (later keys win).
    `parallel()` runs the schemas on a thread pool; results are still
    gathered in declaration order.
    """

    def __init__(self, schemas: Iterable[SchemaLike], max_workers: int | None = None) -> None:
        super().__init__(schemas)
        self._max_workers = max_workers

    @property
    def is_parallel(self) -> bool: return self._max_workers is not None

    def parallel(self, max_workers: int | None = None) -> AllOfSchema:
        return AllOfSchema(self._schemas, max_workers or settings.FANOUT_WORKERS)

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        path = path if path is not None else JsonPath.root()
        if self._max_workers and len(self._schemas) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                results = list(executor.map(
                    lambda s: s.validate_with_context(value, path, context), self._schemas))
        else:
            results = []
            for schema in self._schemas:
                results.append(schema.validate_with_context(value, path, context))

        errors: list[ValidationError] = []
        outputs: list[Any] = []
        for result in results:
            match result:
                case Success(v):
                    outputs.append(v)
                case Failure(errs):
                    errors.extend(errs)

        if errors:
            return Failure(ValidationErrors(errors))
        if not outputs:
            return Success(value)
        if all(isinstance(o, dict) for o in outputs):
            merged: dict[str, Any] = {}
            for output in outputs:
                merged.update(output)
            return Success(merged)
        return Success(outputs[-1])


class OptionalSchema(SchemaLike):
    """Null passes as None; anything else goes to the wrapped schema."""

    def __init__(self, inner: SchemaLike) -> None:
        self._inner = inner

    @property
    def inner(self) -> SchemaLike: return self._inner

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        return Success(None) if value is None else self._inner.validate(value, path)

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        return Success(None) if value is None else self._inner.validate_with_context(value, path, context)

    def collect_refs(self, refs: list[str]) -> None:
        self._inner.collect_refs(refs)
