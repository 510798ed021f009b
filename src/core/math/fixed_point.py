"""
Fixed Point — Integer and Decimal primitives with explicit rounding

All quoting math runs on Python ints (arbitrary precision, no int64/int128
overflow) and on Decimal values evaluated in a local context. Floats are
converted to Decimal through their shortest repr, so 2.0 becomes
Decimal("2.0") and not its binary expansion.

Every conversion back to an integer names its rounding direction:
- floor   — "what you get" (weight granted for a request, redeemed tokens)
- ceiling — "what you owe" (utilization charged, prices)

CRITICAL INVARIANTS:
1. No implicit float arithmetic on chain quantities
2. Decimal contexts are local (thread-safe, no global precision mutation)
3. div_floor/div_ceil never round toward the requester
"""

from contextlib import contextmanager
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, localcontext
from typing import Final, Iterator

# =============================================================================
# CONSTANTS
# =============================================================================

# Significant digits for Decimal evaluation of curve integrals and decay.
# A u64 weight ratio raised to a real exponent needs well above 34 digits
# to keep the 1e15 fraction scale exact after the final rounding.
DEFAULT_DECIMAL_PRECISION: Final[int] = 50

DECIMAL_ZERO: Final[Decimal] = Decimal(0)
DECIMAL_ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# INTEGER DIVISION
# =============================================================================


def div_floor(numerator: int, denominator: int) -> int:
    """
    Integer division rounded toward negative infinity.

    Raises:
        ZeroDivisionError: If denominator == 0
    """
    return numerator // denominator


def div_ceil(numerator: int, denominator: int) -> int:
    """
    Integer division rounded toward positive infinity.

    Examples:
        >>> div_ceil(10, 3)
        4
        >>> div_ceil(9, 3)
        3
        >>> div_ceil(-10, 3)
        -3

    Raises:
        ZeroDivisionError: If denominator == 0
    """
    return -((-numerator) // denominator)


def scaled_fraction(numerator: int, denominator: int, precision: int) -> int:
    """
    floor(numerator / denominator * 10**precision) as an exact integer.

    Args:
        numerator: Part
        denominator: Whole (must be > 0)
        precision: Number of decimal digits of the fixed-point scale

    Returns:
        Integer fraction at 10**precision scale
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    return div_floor(numerator * 10**precision, denominator)


# =============================================================================
# DECIMAL HELPERS
# =============================================================================


@contextmanager
def decimal_context(precision: int = DEFAULT_DECIMAL_PRECISION) -> Iterator[None]:
    """
    Thread-local Decimal context with the requested number of digits.

    Usage:
        with decimal_context(50):
            ...
    """
    with localcontext() as ctx:
        ctx.prec = precision
        yield


def to_decimal(value: int | float | Decimal) -> Decimal:
    """
    Convert a chain quantity to Decimal without binary-float artifacts.

    Examples:
        >>> to_decimal(2.0)
        Decimal('2.0')
        >>> to_decimal(7)
        Decimal('7')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def ceil_to_int(value: Decimal) -> int:
    """Round a Decimal up to the next integer."""
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def floor_to_int(value: Decimal) -> int:
    """Round a Decimal down to the previous integer."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))
