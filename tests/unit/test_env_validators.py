from __future__ import annotations

import threading
from dataclasses import dataclass, field

from sieve.path import JsonPath
from sieve.registry import SchemaRegistry
from sieve.schema import EnvSchema, Schema
from sieve.validation import Failure, Success, ValidationContext, ValidationError, fail


@dataclass
class Directory:
    taken: set[str] = field(default_factory=set)
    blocked_domains: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)


def email_is_free(value, path, env: Directory):
    env.calls.append("free")
    if value in env.taken:
        return fail(ValidationError.at(path, "email already exists").with_code("email_taken"))
    return Success(None)


def domain_allowed(value, path, env: Directory):
    env.calls.append("domain")
    if value.split("@")[-1] in env.blocked_domains:
        return fail(ValidationError.at(path, "domain is blocked").with_code("domain_blocked"))
    return Success(None)


def _schema() -> EnvSchema:
    return (
        Schema.string().trim().lowercase().email()
        .with_env_validator(email_is_free)
        .with_env_validator(domain_allowed)
    )


def test_passes_validated_value() -> None:
    env = Directory()
    assert _schema().validate_with_env("  Ada@Example.com ", env) == Success("ada@example.com")
    assert env.calls == ["free", "domain"]


def test_errors_from_every_env_validator_accumulate() -> None:
    env = Directory(taken={"ada@spam.io"}, blocked_domains={"spam.io"})
    result = _schema().validate_with_env("ada@spam.io", env, JsonPath.from_field("email"))
    assert isinstance(result, Failure)
    assert result.errors.codes() == ["email_taken", "domain_blocked"]
    assert all(str(e.location) == "email" for e in result.errors)


def test_schema_failure_skips_env_validators() -> None:
    env = Directory()
    result = _schema().validate_with_env("not-an-email", env)
    assert result.errors.codes() == ["invalid_email"]
    assert env.calls == []


def test_plain_validate_ignores_env_validators() -> None:
    assert _schema().validate("ada@example.com") == Success("ada@example.com")


def test_builder_returns_new_schema() -> None:
    base = Schema.string().with_env_validator(email_is_free)
    extended = base.with_env_validator(domain_allowed)
    assert len(base.validators) == 1
    assert len(extended.validators) == 2


def test_parallel_keeps_declaration_order() -> None:
    barrier = threading.Barrier(3)

    def make(code: str):
        def check(value, path, env):
            barrier.wait(timeout=5)
            return fail(ValidationError.at(path, code).with_code(code))
        return check

    schema = Schema.integer().with_env_validator(make("a")).with_env_validator(make("b")).with_env_validator(make("c"))
    result = schema.validate_with_env_parallel(1, None, max_workers=3)
    assert result.errors.codes() == ["a", "b", "c"]


def test_parallel_success_and_single_validator() -> None:
    env = Directory()
    assert _schema().validate_with_env_parallel("ada@example.com", env, max_workers=2) == Success("ada@example.com")
    assert sorted(env.calls) == ["domain", "free"]
    single = Schema.integer().with_env_validator(lambda v, p, e: Success(None))
    assert single.validate_with_env_parallel(3, None) == Success(3)


def test_context_reaches_wrapped_schema() -> None:
    registry = SchemaRegistry()
    registry.register("Email", Schema.string().email())
    schema = Schema.object().field("email", Schema.ref("Email")).with_env_validator(
        lambda value, path, env: Success(None))
    context = ValidationContext(registry=registry)
    assert schema.validate_with_env({"email": "a@b.co"}, None, context=context) == Success({"email": "a@b.co"})
    assert schema.validate_with_env({"email": "a@b.co"}, None).errors.codes() == ["missing_registry"]
