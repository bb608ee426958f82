"""Helpers for decoded JSON values (None, bool, int, float, str, list, dict)."""
from __future__ import annotations

import json
from typing import Any

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1


def type_name(value: Any) -> str:
    """JSON type name used in `invalid_type` errors."""
    if value is None: return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool): return "boolean"
    if isinstance(value, (int, float)): return "number"
    if isinstance(value, str): return "string"
    if isinstance(value, (list, tuple)): return "array"
    if isinstance(value, dict): return "object"
    return type(value).__name__


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def canonical(value: Any) -> str:
    """Stable serialized form used for equality of structured values.

    Object keys are sorted; `1` and `1.0` stay distinct.
    """
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
