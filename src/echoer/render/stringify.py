"""
CONTRACT: inline
ROLE: Turn log/warn arguments into message fragments by value kind.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - n/a

FAILURE MODES:
  - value not JSON encodable (unknown type, cycle, oversized int) -> error to the caller

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_stringify.py

CONTRACT DETAILS:
# Stringify contract

- str passes through.
- int/float become decimal strings in JavaScript number layout (3.0 -> 3, 1e-07 -> 1e-7).
- Inside structured values NaN/Infinity become null.
- bool, None and structured values become single-line JSON.
"""

from __future__ import annotations

import json
import math
from functools import singledispatch
from typing import Any, Optional, Set


def to_json(value: Any, indent: Any = None) -> str:
    """JSON text with compact separators (single line) unless ``indent`` is set.

    Non-finite floats are written as ``null`` and integral floats as integers.
    """
    value = _json_ready(value)
    if indent is None:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(value, indent=indent, ensure_ascii=False)


def _json_ready(value: Any, seen: Optional[Set[int]] = None) -> Any:
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if not isinstance(value, (dict, list, tuple)):
        return value
    seen = set() if seen is None else seen
    if id(value) in seen:
        raise ValueError("Circular reference detected")
    seen.add(id(value))
    try:
        if isinstance(value, dict):
            return {key: _json_ready(item, seen) for key, item in value.items()}
        return [_json_ready(item, seen) for item in value]
    finally:
        seen.discard(id(value))


def js_number(value: float) -> str:
    """Shortest round-trip digits laid out the way JavaScript prints numbers."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    mantissa, _, exp_text = repr(abs(value)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    raw = int_part + frac_part
    digits = raw.lstrip("0")
    # n: position of the decimal point relative to the first significant digit
    n = len(int_part) + (int(exp_text) if exp_text else 0) - (len(raw) - len(digits))
    digits = digits.rstrip("0")
    k = len(digits)
    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * (-n) + digits
    else:
        exponent = n - 1
        exp_sign = "+" if exponent >= 0 else "-"
        head = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{head}e{exp_sign}{abs(exponent)}"
    return sign + text


@singledispatch
def stringify(value: Any) -> str:
    return to_json(value)


@stringify.register
def _(value: str) -> str:
    return value


@stringify.register
def _(value: bool) -> str:
    return "true" if value else "false"


@stringify.register
def _(value: int) -> str:
    return str(value)


@stringify.register
def _(value: float) -> str:
    return js_number(value)
