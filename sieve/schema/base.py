"""Schema base class.

Every schema kind implements `validate`. Containers and combinators put
their logic in `validate_with_context` and hand the context straight to
their children, so one reference hop costs a fixed, small number of
frames however the recursion is routed. `collect_refs` lets the registry
check integrity.
"""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any

from sieve.path import JsonPath
from sieve.validation import Validation, ValidationContext


class SchemaLike(ABC):
    """Capability shared by all schema kinds."""

    @abstractmethod
    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        """Validate without a registry. References fail with `missing_registry`."""

    def validate_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        """Validate with a registry context; `None` behaves like `validate`."""
        return self.validate(value, path)

    def validate_to_value(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        # Outputs are already plain JSON values.
        return self.validate(value, path)

    def validate_to_value_with_context(
        self, value: Any, path: JsonPath | None, context: ValidationContext | None
    ) -> Validation[Any]:
        return self.validate_with_context(value, path, context)

    def collect_refs(self, refs: list[str]) -> None:
        """Append every referenced schema name reachable from this schema."""

    def with_env_validator(self, validator):
        """Wrap this schema with a validator that receives an environment at call time."""
        from .env import EnvSchema
        return EnvSchema(self).with_env_validator(validator)

    def _copy(self):
        # Builders return modified copies; registered schemas are never mutated.
        return copy.copy(self)
