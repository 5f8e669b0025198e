"""
_utils.py
=========
Result formatting helpers for coalcovar.

These are standalone functions that don't depend on the main classes; the
command line front end uses them to print estimates.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable, Iterator


DEFAULT_PRECISION = 34

# Enough significant digits for any finite double at any requested precision.
_MAX_INTEGER_DIGITS = 310


def format_fixed(value: float, digits: int = DEFAULT_PRECISION) -> str:
    """
    Format *value* in fixed-point notation with exactly *digits* digits after
    the decimal point.

    The digits are those of the shortest decimal string that round-trips to
    the same double (Python's ``repr``), padded with zeros.  When *digits* is
    smaller than that string needs, it is rounded half-up.  This means
    ``0.1`` prints as ``0.1000...`` rather than exposing the binary
    expansion ``0.1000000000000000055511...``.

    Parameters
    ----------
    value : float
        Number to format.
    digits : int, default 34
        Digits after the decimal point; must be >= 0.

    Returns
    -------
    str
        Fixed-point text.  Non-finite values are written as ``NaN``,
        ``Infinity`` or ``-Infinity``.

    Examples
    --------
    >>> format_fixed(0.1, 5)
    '0.10000'

    >>> format_fixed(2.0 / 3.0, 4)
    '0.6667'

    >>> format_fixed(1e-3, 2)
    '0.00'
    """
    if digits < 0:
        raise ValueError(f"digits must be non-negative (got {digits})")

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    context = Context(prec=digits + _MAX_INTEGER_DIGITS, rounding=ROUND_HALF_UP)
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(repr(value)).quantize(quantum, context=context):f}"


def format_matrix_lines(
    values: Iterable[float], digits: int = DEFAULT_PRECISION
) -> Iterator[str]:
    """Yield one fixed-point line per value, in the order given."""
    for value in values:
        yield format_fixed(value, digits)


def format_scalar_result(value: float) -> str:
    """
    Human-readable line for a scalar estimate.

    >>> format_scalar_result(1.5)
    'Estimated E(T_iT_j) = 1.5'
    """
    return f"Estimated E(T_iT_j) = {float(value)!r}"
