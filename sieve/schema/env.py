"""Validators with injected dependencies.

Some checks need something the schema cannot hold: a database handle to
test uniqueness, an HTTP client to verify a domain. An `EnvSchema` wraps a
regular schema with validators that receive such an environment at call
time instead of capturing it.

The wrapped schema runs first. Environment validators only run when it
passed, and they see its validated output. Their errors are merged in the
order the validators were added, whether they ran one after another or on
a thread pool.

Usage:
    def email_is_free(value, path, db):
        if db.email_exists(value):
            return fail(ValidationError.at(path, "email already exists").with_code("email_taken"))
        return Success(None)

    schema = Schema.string().email().with_env_validator(email_is_free)
    schema.validate_with_env("a@b.co", db)
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Generic, Protocol, TypeVar

from sieve.config import settings
from sieve.path import JsonPath
from sieve.validation import Failure, Success, Validation, ValidationContext, ValidationError, ValidationErrors

from .base import SchemaLike

E = TypeVar("E")
E_contra = TypeVar("E_contra", contravariant=True)


class EnvValidator(Protocol[E_contra]):
    """Check that needs an environment; any Success value is ignored."""

    def __call__(self, value: Any, path: JsonPath, env: E_contra) -> Validation[Any]: ...


class EnvSchema(Generic[E]):
    """A schema plus environment-dependent validators."""

    def __init__(self, schema: SchemaLike, validators: tuple[EnvValidator[E], ...] = ()) -> None:
        self._schema = schema
        self._validators = validators

    @property
    def schema(self) -> SchemaLike: return self._schema

    @property
    def validators(self) -> tuple[EnvValidator[E], ...]: return self._validators

    def with_env_validator(self, validator: EnvValidator[E]) -> EnvSchema[E]:
        return EnvSchema(self._schema, (*self._validators, validator))

    def validate(self, value: Any, path: JsonPath | None = None) -> Validation[Any]:
        """Run only the wrapped schema."""
        return self._schema.validate(value, path)

    def validate_with_env(
        self,
        value: Any,
        env: E,
        path: JsonPath | None = None,
        context: ValidationContext | None = None,
    ) -> Validation[Any]:
        """Validate, then run every environment validator in order."""
        path = path if path is not None else JsonPath.root()
        match self._schema.validate_with_context(value, path, context):
            case Failure() as failure:
                return failure
            case Success(validated):
                return self._merge(validated, [v(validated, path, env) for v in self._validators])

    def validate_with_env_parallel(
        self,
        value: Any,
        env: E,
        path: JsonPath | None = None,
        context: ValidationContext | None = None,
        max_workers: int | None = None,
    ) -> Validation[Any]:
        """Like `validate_with_env`, with the environment validators on a thread pool.

        `env` is shared between the workers, so it must be safe to use from
        several threads.
        """
        path = path if path is not None else JsonPath.root()
        match self._schema.validate_with_context(value, path, context):
            case Failure() as failure:
                return failure
            case Success(validated):
                if len(self._validators) < 2:
                    return self._merge(validated, [v(validated, path, env) for v in self._validators])
                with ThreadPoolExecutor(max_workers=max_workers or settings.FANOUT_WORKERS) as executor:
                    results = list(executor.map(lambda v: v(validated, path, env), self._validators))
                return self._merge(validated, results)

    @staticmethod
    def _merge(validated: Any, results: list[Validation[Any]]) -> Validation[Any]:
        errors: list[ValidationError] = []
        for result in results:
            if isinstance(result, Failure):
                errors.extend(result.errors)
        return Failure(ValidationErrors(errors)) if errors else Success(validated)

    def __repr__(self) -> str:
        return f"EnvSchema({self._schema!r}, validators={len(self._validators)})"
