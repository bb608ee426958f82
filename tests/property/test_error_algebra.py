"""Algebraic properties of error accumulation, checked over small samples."""
from __future__ import annotations

import itertools
from collections import Counter

import pytest

from sieve.path import JsonPath
from sieve.schema import Schema
from sieve.validation import Failure, Success, ValidationError, ValidationErrors, collect


def _err(code: str) -> ValidationError:
    return ValidationError.at(JsonPath.root(), code).with_code(code)


SAMPLES = [
    Success(1),
    Success("x"),
    Failure(_err("a")),
    Failure([_err("b"), _err("c")]),
]


def _bag(v) -> Counter | None:
    return Counter(e.code for e in v.errors) if isinstance(v, Failure) else None


@pytest.mark.parametrize("a,b,c", list(itertools.product(SAMPLES, repeat=3)))
def test_combine_is_associative(a, b, c) -> None:
    left = a.combine(b).combine(c)
    right = a.combine(b.combine(c))
    assert left.is_success() == right.is_success()
    assert _bag(left) == _bag(right)


@pytest.mark.parametrize("a,b", list(itertools.product(SAMPLES, repeat=2)))
def test_combine_keeps_every_error(a, b) -> None:
    combined = a.combine(b)
    expected = (len(a.errors) if isinstance(a, Failure) else 0) + (len(b.errors) if isinstance(b, Failure) else 0)
    assert (len(combined.errors) if isinstance(combined, Failure) else 0) == expected


def test_combine_preserves_order() -> None:
    combined = Failure(_err("first")).combine(Failure([_err("second"), _err("third")]))
    assert combined.errors.codes() == ["first", "second", "third"]


def test_error_collection_concatenation_is_associative() -> None:
    a, b, c = (ValidationErrors.single(_err(x)) for x in "abc")
    assert (a + b) + c == a + (b + c)


def test_collect_matches_pairwise_combine() -> None:
    values = [Failure(_err("a")), Success(1), Failure(_err("b"))]
    assert collect(values).errors.codes() == values[0].combine(values[1]).combine(values[2]).errors.codes()


@pytest.mark.parametrize("value,expected_count", [
    ("abc", 2),        # too short and no digit
    ("abcdefghijk", 1),
    ("abc1", 1),
    ("abcdefghij1", 0),
])
def test_constraints_accumulate(value: str, expected_count: int) -> None:
    result = Schema.string().min_len(10).pattern(r"\d").validate(value)
    count = len(result.errors) if isinstance(result, Failure) else 0
    assert count == expected_count


@pytest.mark.parametrize("value", [42, None, [], {}, True, 1.5])
def test_type_mismatch_short_circuits_constraints(value) -> None:
    result = Schema.string().min_len(10).pattern(r"\d").email().validate(value)
    assert result.errors.codes() == ["invalid_type"]


def test_object_reports_one_error_per_bad_field() -> None:
    schema = (
        Schema.object()
        .field("z", Schema.integer().positive())
        .field("a", Schema.string().min_len(3))
        .field("m", Schema.array(Schema.integer()))
    )
    result = schema.validate({"z": -1, "a": "x", "m": ["no", 2, "no"]})
    assert [str(e.location) for e in result.errors] == ["z", "a", "m[0]", "m[2]"]
