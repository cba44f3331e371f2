"""
Type coercion utilities.

Raw property values arrive loosely typed (a default may be a boolean, a
number or a string). ``parse_raw`` turns them into their canonical string
form once; the predicates and converters below work on that form.
"""

import math
import re
from typing import Any, Union

Primitive = Union[bool, int, float, str]

UNDEFINED_MARKER = "undefined"

_NUMBER_PATTERN = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")
_INTEGER_PATTERN = re.compile(r"^[-+]?\d+$")


def format_number(value: Union[int, float]) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def parse_raw(value: Any) -> str:
    """Canonical string form of a raw default or property value."""
    if value is None:
        return UNDEFINED_MARKER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def is_boolean(value: str) -> bool:
    """True when the string is exactly ``"true"`` or ``"false"``."""
    return value in ("true", "false")


def as_boolean(value: str) -> bool:
    return value == "true"


def is_number(value: str) -> bool:
    """True when the string is a finite decimal literal."""
    if not isinstance(value, str):
        return False
    return bool(_NUMBER_PATTERN.match(value))


def as_number(value: str) -> Union[int, float]:
    """Parse a numeric string; non-numeric input yields ``0``."""
    if not is_number(value):
        return 0
    if _INTEGER_PATTERN.match(value):
        return int(value)
    return float(value)


def coerce_explicit(value: str) -> Primitive:
    """Boolean, then number, then string precedence."""
    if is_boolean(value):
        return as_boolean(value)
    if is_number(value):
        return as_number(value)
    return value


def values_equal(left: Primitive, right: Primitive) -> bool:
    """Equality over bool/number/str in which a boolean never equals a number."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right
