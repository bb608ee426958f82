"""Validation Algebra

Key components:
- Success / Failure: the result every schema returns
- ValidationError / ValidationErrors: located, coded, never-empty errors
- ValidationContext: registry handle and reference depth for `Ref` hops
- collect / sequence: accumulating and fail-fast combination

Usage:
    from sieve.validation import Success, Failure, ValidationError

    result = schema.validate({"email": "nope"})
    if result.is_failure():
        for error in result.errors:
            print(error)
"""
from .errors import ValidationError, ValidationErrors
from .result import (
    Success,
    Failure,
    Validation,
    fail,
    collect,
    sequence,
    ensure,
)
from .context import ValidationContext, RegistryAccess, DEFAULT_MAX_DEPTH

__all__ = [
    "ValidationError",
    "ValidationErrors",
    "Success",
    "Failure",
    "Validation",
    "fail",
    "collect",
    "sequence",
    "ensure",
    "ValidationContext",
    "RegistryAccess",
    "DEFAULT_MAX_DEPTH",
]
