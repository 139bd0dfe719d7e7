from __future__ import annotations

import json
from typing import Any

# Integers beyond this lose precision as doubles and print in exponent form.
MAX_SAFE_INTEGER = 2 ** 53


def normalize_numbers(value: Any) -> Any:
    """Turn integral floats (10.0, 1E5) into ints, recursing into lists and dicts."""
    if isinstance(value, float):
        if value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
            return int(value)
        return value
    if isinstance(value, list):
        return [normalize_numbers(v) for v in value]
    if isinstance(value, dict):
        return {k: normalize_numbers(v) for k, v in value.items()}
    return value


def stringify_value(value: Any) -> str:
    """Convert a parsed JSON value into the text written to a CSV cell.

    - None -> ''
    - str -> unchanged
    - numbers, booleans, lists, dicts -> compact JSON text ('true', '42', '{"a":1}')

    Integral floats print without a fraction, so 10.0 becomes '10'.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return json.dumps(normalize_numbers(value), ensure_ascii=False, separators=(',', ':'))
