"""Numeric utilities for consistent Decimal handling."""

from decimal import Decimal, ROUND_HALF_EVEN, getcontext

# Set precision for price calculations
getcontext().prec = 28


def D(x) -> Decimal:
    """
    Robust Decimal conversion for ints/floats/strings/Decimals.

    Floats are converted through their string form to avoid binary
    floating-point artifacts.

    Args:
        x: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal: Converted value

    Raises:
        TypeError: If type is not supported
    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise TypeError("Booleans are not numeric prices")
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, str):
        return Decimal(x)
    if isinstance(x, float):
        return Decimal(str(x))
    raise TypeError(f"Unsupported numeric type: {type(x)}")


def quantize_digits(value: Decimal, digits: int) -> Decimal:
    """Round to `digits` decimal places using banker's rounding."""
    return D(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_EVEN)
