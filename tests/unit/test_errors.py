from __future__ import annotations

import pytest

from sieve.errors import Err, Ok, collect_results
from sieve.path import JsonPath
from sieve.validation import ValidationError, ValidationErrors


def _err(field: str, message: str = "bad", code: str = "validation_error") -> ValidationError:
    return ValidationError.at(JsonPath.from_field(field), message).with_code(code)


def test_builder_sets_fields_without_mutation() -> None:
    base = ValidationError.at(JsonPath.from_field("age"), "too small")
    built = base.with_code("min_value").with_expected("at least 18").with_got(5)
    assert base.code == "validation_error"
    assert built.code == "min_value"
    assert built.expected == "at least 18"
    assert built.actual == "5"
    assert built.got == "5"
    assert built.path == JsonPath.from_field("age")


def test_display_includes_expected_and_got() -> None:
    error = _err("email", "must be valid email").with_expected("valid email").with_actual("nope")
    assert str(error) == "email: must be valid email (expected: valid email) (got: nope)"


def test_display_marks_root_location() -> None:
    assert str(ValidationError.at(JsonPath.root(), "expected object")) == "(root): expected object"


def test_empty_collection_is_rejected() -> None:
    with pytest.raises(ValueError):
        ValidationErrors([])


def test_filters_and_first() -> None:
    errors = ValidationErrors([_err("a", code="required"), _err("b", code="pattern"), _err("a", code="pattern")])
    assert errors.first().location == JsonPath.from_field("a")
    assert len(errors.at_path(JsonPath.from_field("a"))) == 2
    assert [e.location for e in errors.with_code("pattern")] == [JsonPath.from_field("b"), JsonPath.from_field("a")]
    assert errors.with_code("missing") == []
    assert errors.codes() == ["required", "pattern", "pattern"]


def test_combine_appends_in_order() -> None:
    left = ValidationErrors.single(_err("a"))
    right = ValidationErrors([_err("b"), _err("c")])
    combined = left.combine(right)
    assert [str(e.location) for e in combined] == ["a", "b", "c"]
    assert left + right == combined
    assert len(left) == 1


def test_numbered_display() -> None:
    errors = ValidationErrors([_err("a", "first"), _err("b", "second")])
    assert str(errors) == "Validation failed with 2 error(s):\n  1. a: first\n  2. b: second"


def test_to_dict_for_api_responses() -> None:
    payload = ValidationErrors.single(_err("name", "required", "required").with_expected("value")).to_dict()
    assert payload == {
        "errors": [{"path": "name", "message": "required", "code": "required", "expected": "value", "got": None}],
        "count": 1,
    }


def test_errors_sort_by_location_then_message() -> None:
    errors = [_err("b", "x"), _err("a", "z"), _err("a", "y")]
    assert [(str(e.location), e.message) for e in sorted(errors)] == [("a", "y"), ("a", "z"), ("b", "x")]


def test_result_unwrap() -> None:
    assert Ok(3).unwrap() == 3
    assert Ok(3).unwrap_or(0) == 3
    assert Err("boom").unwrap_or(0) == 0
    assert Ok(3).is_ok() and not Ok(3).is_err()
    assert Err("boom").is_err() and not Err("boom").is_ok()
    with pytest.raises(ValueError, match="Called unwrap on Err: boom"):
        Err("boom").unwrap()


def test_collect_results_keeps_every_error() -> None:
    assert collect_results([Ok(1), Ok(2)]) == Ok([1, 2])
    assert collect_results([Ok(1), Err("a"), Err("b")]) == Err(["a", "b"])
    assert collect_results([]) == Ok([])
