from __future__ import annotations

from sieve.path import JsonPath
from sieve.schema import Schema
from sieve.validation import Failure, Success


def test_validates_declared_fields() -> None:
    schema = Schema.object().field("name", Schema.string()).field("age", Schema.integer())
    assert schema.validate({"name": "Ada", "age": 36}) == Success({"name": "Ada", "age": 36})


def test_rejects_non_objects() -> None:
    error = Schema.object().validate([1]).errors.first()
    assert (error.code, error.message, error.expected, error.actual) == ("invalid_type", "expected object", "object", "array")
    assert Schema.object().error("need a mapping").validate(1).errors.first().message == "need a mapping"


def test_missing_required_fields_report_in_declaration_order() -> None:
    schema = Schema.object().field("z", Schema.string()).field("a", Schema.string()).field("m", Schema.string())
    result = schema.validate({})
    assert [str(e.location) for e in result.errors] == ["z", "a", "m"]
    first = result.errors.first()
    assert first.code == "required"
    assert first.message == "required field 'z' is missing"
    assert first.expected == "value"


def test_field_errors_accumulate_with_nested_paths() -> None:
    schema = Schema.object().field("user", Schema.object().field("email", Schema.string().email()).field("age", Schema.integer().min(0)))
    result = schema.validate({"user": {"email": "nope", "age": -1}})
    assert [(str(e.location), e.code) for e in result.errors] == [("user.email", "invalid_email"), ("user.age", "min_value")]


def test_optional_fields_are_omitted_when_absent() -> None:
    schema = Schema.object().field("id", Schema.integer()).optional("nickname", Schema.string())
    assert schema.validate({"id": 1}) == Success({"id": 1})
    assert schema.validate({"id": 1, "nickname": 5}).errors.first().location == JsonPath.from_field("nickname")


def test_defaults_fill_absent_fields_only() -> None:
    schema = Schema.object().default("role", Schema.string(), "member").default("tags", Schema.array(Schema.string()), [])
    assert schema.validate({}) == Success({"role": "member", "tags": []})
    assert schema.validate({"role": "admin"}).unwrap()["role"] == "admin"


def test_default_values_are_not_shared_between_results() -> None:
    schema = Schema.object().default("tags", Schema.array(Schema.string()), [])
    first = schema.validate({}).unwrap()
    first["tags"].append("x")
    assert schema.validate({}).unwrap() == {"tags": []}


def test_transformed_values_flow_into_output() -> None:
    schema = Schema.object().field("email", Schema.string().trim().lowercase())
    assert schema.validate({"email": "  A@B.CO "}) == Success({"email": "a@b.co"})


def test_additional_properties_allowed_by_default() -> None:
    schema = Schema.object().field("a", Schema.integer())
    assert schema.validate({"a": 1, "extra": True}) == Success({"a": 1, "extra": True})


def test_additional_properties_denied() -> None:
    schema = Schema.object().field("a", Schema.integer()).additional_properties(False)
    result = schema.validate({"a": 1, "x": 1, "y": 2})
    assert [(str(e.location), e.code, e.message) for e in result.errors] == [
        ("x", "additional_property", "unknown field 'x'"),
        ("y", "additional_property", "unknown field 'y'"),
    ]


def test_additional_properties_validated_by_schema() -> None:
    schema = Schema.object().additional_properties(Schema.string().trim())
    assert schema.validate({"a": " x "}) == Success({"a": "x"})
    result = schema.validate({"a": "ok", "b": 2})
    assert isinstance(result, Failure)
    assert result.errors.first().location == JsonPath.from_field("b")


def test_errors_nest_under_caller_path() -> None:
    path = JsonPath.from_field("body")
    error = Schema.object().field("id", Schema.integer()).validate({}, path).errors.first()
    assert str(error.location) == "body.id"
