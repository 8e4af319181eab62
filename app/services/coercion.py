"""
RapidShyp Relay — Presence Checks and Permissive Number Parsing
=================================================================

What:  Helpers used to validate inbound fields and turn them into the
       numeric values RapidShyp expects.
Why:   The relay only checks that required fields are present. Whatever the
       caller sent is then coerced the way a browser would: the value is
       rendered as a string, the longest leading numeric part is used, and
       anything unparseable becomes "not a number", which is sent upstream
       as JSON null. Callers relying on this (e.g. "560001 " or "0.5kg")
       keep working.

Examples:
    parse_int("560001")     → 560001
    parse_int(" 12.9kg")    → 12
    parse_int("0x1A")       → 26
    parse_int([110001])     → 110001   (a one-item list renders as its item)
    parse_int(5e-7)         → 5        (renders as "5e-7")
    parse_int(1e21)         → 1        (renders as "1e+21")
    parse_int("abc")        → None
    parse_float("0.5kg")    → 0.5
    parse_float(".5e1")     → 5.0
    parse_float("Infinity") → None     (non-finite, serialized as null)
    parse_float(10 ** 400)  → None     (beyond double range)
"""

import math
import re
from decimal import Decimal
from typing import Any, Optional

_INT_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|(\d+))")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def _to_double(value: int) -> float:
    """int → float, with out-of-range magnitudes becoming ±inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def format_number(value: float) -> str:
    """
    Render a float the way JavaScript's String(number) does.

    Plain notation for magnitudes in [1e-6, 1e21), exponent notation
    ("5e-7", "1.5e+21") outside it. repr() already yields the shortest
    round-tripping digits; only the layout differs.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_number(-value)

    _, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        return digits + "0" * (n - k)
    if 0 < n <= 21:
        return digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def to_js_string(value: Any) -> str:
    """Render a decoded JSON value as JavaScript's String(value) would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return format_number(_to_double(value))
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_js_string(item) for item in value)
    return "[object Object]"


def is_present(value: Any) -> bool:
    """
    Truthiness check for a JSON value.

    None, False, 0, NaN and "" are absent. Everything else is present,
    including "0", integers too large for a float, empty lists and empty
    objects.
    """
    if value is None or value is False:
        return False
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def parse_int(value: Any) -> Optional[int]:
    """Integer prefix parse of String(value). None when not a number."""
    if value is None:
        return None

    match = _INT_PREFIX.match(to_js_string(value))
    if not match:
        return None
    sign, hex_digits, dec_digits = match.groups()
    if dec_digits is None:
        # "0x" with no hex digits after it
        if not hex_digits:
            return None
        number = int(hex_digits, 16)
    else:
        number = int(dec_digits)
    return -number if sign == "-" else number


def parse_float(value: Any) -> Optional[float]:
    """Float prefix parse of String(value). None for unparseable or non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = _to_double(value) if isinstance(value, int) else value
        return number if math.isfinite(number) else None

    match = _FLOAT_PREFIX.match(to_js_string(value))
    if not match:
        return None
    number = float(match.group(1).replace("Infinity", "inf"))
    return number if math.isfinite(number) else None
