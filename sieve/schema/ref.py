"""Named references resolved through a registry.

A reference is only usable through a registry: validated on its own it
fails with `missing_registry`. With a context, each hop raises the depth by
one and the hop is refused once `depth >= max_depth`, which bounds
self-referencing and mutually recursive schemas.
"""
from __future__ import annotations

from typing import Any

from sieve.errors import ErrorCode
from sieve.logging import schema_logger
from sieve.path import JsonPath
from sieve.validation import Validation, ValidationContext, fail
from sieve.validation.builders import constraint_error

from .base import SchemaLike

log = schema_logger()


class RefSchema(SchemaLike):
    """Reference to a schema registered under `name`."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str: return self._name

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        path = path if path is not None else JsonPath.root()
        return fail(constraint_error(path, ErrorCode.MISSING_REGISTRY,
            f"reference to '{self._name}' cannot be validated without a registry. "
            "Use SchemaRegistry.validate() instead"))

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        if context is None:
            return self.validate(value, path)
        path = path if path is not None else JsonPath.root()

        if context.is_depth_exceeded():
            log.debug("reference_depth_exceeded", name=self._name, path=str(path), max_depth=context.max_depth)
            return fail(constraint_error(path, ErrorCode.MAX_DEPTH_EXCEEDED,
                f"maximum reference depth {context.max_depth} exceeded at path '{path}'",
                expected=f"depth < {context.max_depth}", actual=f"depth {context.depth}"))

        if (schema := context.registry.get_schema(self._name)) is None:
            return fail(constraint_error(path, ErrorCode.MISSING_REFERENCE,
                f"schema '{self._name}' not found in registry"))

        return schema.validate_with_context(value, path, context.increment_depth())

    def collect_refs(self, refs: list[str]) -> None:
        refs.append(self._name)

    def __repr__(self) -> str:
        return f"RefSchema({self._name!r})"
