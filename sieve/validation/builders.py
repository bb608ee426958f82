"""Validation Error Builders

Constructors for the errors every schema kind emits. Keeping them here
keeps messages and codes identical across schema kinds.
"""
from __future__ import annotations

from typing import Any

from sieve.errors import ErrorCode
from sieve.path import JsonPath

from .errors import ValidationError
from .result import Failure, fail
from .values import type_name


# =============================================================================
# Type Errors
# =============================================================================

def invalid_type(path: JsonPath, expected: str, value: Any, message: str | None = None) -> Failure:
    return fail(
        ValidationError.at(path, message or f"expected {expected}")
        .with_code(ErrorCode.INVALID_TYPE)
        .with_actual(type_name(value))
        .with_expected(expected)
    )


# =============================================================================
# Structural Errors
# =============================================================================

def required_field(path: JsonPath, name: str) -> ValidationError:
    return (
        ValidationError.at(path.push_field(name), f"required field '{name}' is missing")
        .with_code(ErrorCode.REQUIRED)
        .with_expected("value")
    )


def unknown_field(path: JsonPath, name: str) -> ValidationError:
    return ValidationError.at(path.push_field(name), f"unknown field '{name}'").with_code(ErrorCode.ADDITIONAL_PROPERTY)


def constraint_error(
    path: JsonPath,
    code: ErrorCode,
    message: str,
    *,
    expected: Any = None,
    actual: Any = None,
) -> ValidationError:
    """Generic constraint violation with optional expected/actual text."""
    error = ValidationError.at(path, message).with_code(code)
    if expected is not None: error = error.with_expected(expected)
    if actual is not None: error = error.with_actual(actual)
    return error
