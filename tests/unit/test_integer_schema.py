from __future__ import annotations

import pytest

from sieve.errors import SchemaDefinitionError
from sieve.path import JsonPath
from sieve.schema import Schema
from sieve.validation import Failure, Success, ValidationError


def test_accepts_integers_in_range() -> None:
    assert Schema.integer().range(0, 150).validate(42) == Success(42)
    assert Schema.integer().validate(2 ** 63 - 1) == Success(2 ** 63 - 1)
    assert Schema.integer().validate(-(2 ** 63)) == Success(-(2 ** 63))


def test_type_failure_short_circuits_constraints() -> None:
    result = Schema.integer().min(10).validate("abc")
    assert len(result.errors) == 1
    error = result.errors.first()
    assert error.code == "invalid_type"
    assert error.message == "expected integer"
    assert error.actual == "string"
    assert error.expected == "integer"


def test_float_is_rejected_even_when_integral() -> None:
    error = Schema.integer().validate(1.0).errors.first()
    assert error.code == "invalid_type"
    assert error.message == "expected integer, got float"
    assert error.actual == "float"


def test_boolean_is_not_an_integer() -> None:
    error = Schema.integer().validate(True).errors.first()
    assert error.code == "invalid_type"
    assert error.actual == "boolean"


@pytest.mark.parametrize("value", [2 ** 63, -(2 ** 63) - 1, 10 ** 30])
def test_out_of_i64_range_reports_overflow(value: int) -> None:
    error = Schema.integer().max(5).validate(value).errors.first()
    assert error.code == "overflow"
    assert error.message == "integer value too large for i64"
    assert error.expected == "integer in i64 range"
    assert error.actual == str(value)


def test_bound_messages() -> None:
    low = Schema.integer().min(18).validate(5).errors.first()
    assert (low.code, low.message, low.expected, low.actual) == ("min_value", "must be at least 18, got 5", "at least 18", "5")
    high = Schema.integer().max(10).validate(11).errors.first()
    assert (high.code, high.message, high.expected) == ("max_value", "must be at most 10, got 11", "at most 10")


def test_sign_constraints() -> None:
    positive = Schema.integer().positive().validate(0).errors.first()
    assert (positive.code, positive.message, positive.expected) == ("positive", "must be positive, got 0", "value > 0")
    non_negative = Schema.integer().non_negative().validate(-1).errors.first()
    assert (non_negative.code, non_negative.expected) == ("non_negative", "value >= 0")
    negative = Schema.integer().negative().validate(0).errors.first()
    assert (negative.code, negative.expected) == ("negative", "value < 0")
    assert Schema.integer().non_negative().validate(0) == Success(0)


def test_all_failing_constraints_accumulate() -> None:
    assert Schema.integer().min(10).positive().validate(-5).errors.codes() == ["min_value", "positive"]


def test_range_adds_both_bounds_and_rejects_inverted_bounds() -> None:
    assert Schema.integer().range(1, 3).validate(4).errors.codes() == ["max_value"]
    with pytest.raises(SchemaDefinitionError):
        Schema.integer().range(5, 1)


def test_error_overrides_last_constraint() -> None:
    error = Schema.integer().min(18).error("must be an adult").validate(3).errors.first()
    assert error.message == "must be an adult"
    assert error.code == "min_value"


def test_custom_validator() -> None:
    def even(value: int, path: JsonPath):
        return Success(None) if value % 2 == 0 else Failure(ValidationError.at(path, "must be even").with_code("even"))

    schema = Schema.integer().custom(even)
    assert schema.validate(4) == Success(4)
    assert schema.validate(3).errors.codes() == ["even"]
