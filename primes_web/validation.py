"""
Safe integer domain and argument checks.

Responsibility: turning caller input into plain ints, or raising.
Type hints carry the "is an integer" contract; only the range checks
below are enforced at run time.
"""

import operator

from .errors import InvalidArgument, OutOfRange

# Largest integer a double-precision float holds exactly.
MAX_SAFE_INTEGER = 2**53 - 1


def as_int(value) -> int:
    """
    Coerce an integer-like value (int, numpy integer) to a Python int.

    Floats, strings and bools are rejected even when they look integral.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"{value!r} is not an integer")
    try:
        return operator.index(value)
    except TypeError as exc:
        raise InvalidArgument(f"{value!r} is not an integer") from exc


def check_safe(value) -> int:
    """
    Validate a query value against the safe integer domain.

    Parameters
    ----------
    value : int
        Value to check. Negative values are valid.

    Returns
    -------
    int
        The value as a Python int.

    Raises
    ------
    InvalidArgument
        If value is not an integer or lies below -MAX_SAFE_INTEGER.
    OutOfRange
        If value exceeds MAX_SAFE_INTEGER.
    """
    n = as_int(value)
    if n < -MAX_SAFE_INTEGER:
        raise InvalidArgument(f"{n} is below the minimum safe integer")
    if n > MAX_SAFE_INTEGER:
        raise OutOfRange(f"{n} exceeds the maximum safe integer {MAX_SAFE_INTEGER}")
    return n


def check_size(value, name: str = "size") -> int:
    """Validate a positive size or bound within the safe integer domain."""
    n = as_int(value)
    if n < 1 or n > MAX_SAFE_INTEGER:
        raise InvalidArgument(f"{name} must be a positive safe integer, got {n}")
    return n
