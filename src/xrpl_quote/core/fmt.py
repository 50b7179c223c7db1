"""
Formatting helpers (display only) and the global Decimal precision.

Quote maths runs on Decimal under the global precision set here. The
helpers below only shape values for logs, CLI output and tests.
"""

from decimal import Decimal, getcontext, ROUND_HALF_EVEN
from typing import Union


# ---------------------------------------------------------------------------
# Global Decimal precision
# ---------------------------------------------------------------------------

#: Default global precision (number of significant digits) for quote maths.
DEFAULT_DECIMAL_PRECISION: int = 28
getcontext().prec = DEFAULT_DECIMAL_PRECISION


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def fmt_dec(x: Decimal, places: int = 18) -> str:
    """Format a Decimal in scientific notation with fixed fractional digits.

    The output is stable for logs and tests, e.g.:
      Decimal('1')        -> '1.000000000000000000E+0'
      Decimal('123456')   -> '1.234560000000000000E+5'
    """
    return format(x, f".{places}E")


def format_swap_amount(x: Union[Decimal, str, int], decimals: int = 6) -> str:
    """Adaptive-precision display: >=1000 -> 2 places, >=1 -> 4, else `decimals`.

    Unparseable input renders as '0'.
    """
    try:
        d = x if isinstance(x, Decimal) else Decimal(str(x))
    except ArithmeticError:
        return "0"
    if d.is_nan() or d.is_infinite():
        return "0"
    mag = abs(d)
    if mag >= 1000:
        places = 2
    elif mag >= 1:
        places = 4
    else:
        places = decimals
    return f"{d.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN):f}"


def format_percent(x: Decimal, places: int = 2) -> str:
    """Render a fraction as a percentage string, e.g. 0.0075 -> '0.75%'."""
    return f"{(x * 100).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN):f}%"


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "fmt_dec",
    "format_swap_amount",
    "format_percent",
]
