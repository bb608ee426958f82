from __future__ import annotations

import pytest

from sieve.path import JsonPath
from sieve.validation import Failure, Success, ValidationError, ValidationErrors, collect, ensure, sequence


def _failure(field: str) -> Failure:
    return Failure(ValidationError.at(JsonPath.from_field(field), f"{field} is bad"))


def test_map_transforms_only_success() -> None:
    assert Success(2).map(lambda v: v * 10) == Success(20)
    failure = _failure("a")
    assert failure.map(lambda v: v * 10) is failure


def test_failure_coerces_single_error_and_rejects_empty() -> None:
    failure = _failure("a")
    assert isinstance(failure.errors, ValidationErrors)
    assert len(failure.errors) == 1
    with pytest.raises(ValueError):
        Failure([])


def test_combine_accumulates_both_sides() -> None:
    combined = _failure("a").combine(_failure("b"))
    assert isinstance(combined, Failure)
    assert [str(e.location) for e in combined.errors] == ["a", "b"]


def test_combine_keeps_failure_when_other_side_succeeds() -> None:
    assert _failure("a").combine(Success(1)).errors.first().message == "a is bad"
    assert Success(1).combine(_failure("b")).errors.first().message == "b is bad"


def test_combine_success_keeps_second_or_merges() -> None:
    assert Success(1).combine(Success(2)) == Success(2)
    assert Success(1).combine(Success(2), merge=lambda a, b: a + b) == Success(3)


def test_and_then_is_fail_fast() -> None:
    calls: list[int] = []

    def step(v: int):
        calls.append(v)
        return Success(v + 1)

    assert Success(1).and_then(step) == Success(2)
    _failure("a").and_then(step)
    assert calls == [1]


def test_unwrap_and_match() -> None:
    assert Success("x").unwrap() == "x"
    with pytest.raises(ValueError, match="a is bad"):
        _failure("a").unwrap()
    assert _failure("a").unwrap_or("fallback") == "fallback"
    assert Success(1).match(lambda v: "ok", lambda e: "err") == "ok"
    assert _failure("a").match(lambda v: "ok", lambda e: len(e)) == 1


def test_pattern_matching_on_variants() -> None:
    match _failure("a"):
        case Success(_):
            pytest.fail("expected a failure")
        case Failure(errors):
            assert errors.first().message == "a is bad"


def test_collect_accumulates_every_error() -> None:
    assert collect([Success(1), Success(2)]) == Success([1, 2])
    result = collect([_failure("a"), Success(2), _failure("b")])
    assert [e.message for e in result.errors] == ["a is bad", "b is bad"]


def test_sequence_stops_at_first_failure() -> None:
    result = sequence([Success(1), _failure("a"), _failure("b")])
    assert [e.message for e in result.errors] == ["a is bad"]


def test_ensure_guard() -> None:
    error = ValidationError.at(JsonPath.root(), "nope")
    assert ensure(True, error) == Success(None)
    assert ensure(False, error).errors.first() is error
