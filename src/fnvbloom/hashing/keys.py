"""Canonical string form of values fed to the filter.

Everything is hashed as a string, so the conversion has to be pinned
down: a filter built in one place and queried in another must agree on
what `5`, `5.0`, `1e-7` and `True` look like. The rules follow the
JavaScript `value + ""` coercion used by bloomfilter.js for the types
that have an obvious counterpart there; floats follow ECMAScript
Number::toString exactly.
"""

from __future__ import annotations

import math


def _js_number(value: float) -> str:
    """Format a finite float the way ECMAScript Number::toString does.

    Python's repr() and JavaScript both pick the shortest digit string
    that round-trips, so only the layout differs: JS writes integers
    below 1e21 in full, keeps positional notation down to 1e-6, and
    uses unpadded exponents ("1e+21", "1.5e-7") outside that range.
    """
    if value == 0:
        return "0"  # -0 too
    sign = "-" if value < 0 else ""
    mantissa, _, exp = repr(abs(value)).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    combined = int_part + frac_part
    stripped = combined.lstrip("0")
    digits = stripped.rstrip("0")
    # value == 0.<digits> * 10**n
    n = len(int_part) - (len(combined) - len(stripped)) + (int(exp) if exp else 0)
    k = len(digits)

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits
    e = n - 1
    exponent = f"e{'+' if e >= 0 else '-'}{abs(e)}"
    if k == 1:
        return sign + digits + exponent
    return sign + digits[0] + "." + digits[1:] + exponent


def canonical_string(value: object) -> str:
    """Convert a supported value to the string that gets hashed.

    str is passed through; bool becomes "true"/"false"; int is decimal;
    None is "null". Floats use the JavaScript number format: "5" for
    5.0, "10000000000000000" for 1e16, "0.00001" for 1e-5, "1e-7",
    "1e+21", and NaN / Infinity / -Infinity for non-finite values.

    Raises:
        TypeError: for any other type. Stringify those yourself so the
            representation is a conscious choice.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return _js_number(value)
    raise TypeError(
        f"Cannot hash value of type {type(value).__name__}; "
        f"convert it to str first"
    )
