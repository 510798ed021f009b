"""
Numerical Safeguards — Input checks and bounded arithmetic

Guards shared by every pricer:
- finite-float checks for the float-typed chain fields (exponent) and for
  the double-precision reference computations used in tests
- clamping for integers and Decimals alike
- request-size validation (non-negative integers only)

CRITICAL INVARIANTS:
1. NaN/Inf never enter a fixed-point computation
2. A request size is always an int >= 0 (bool is rejected)
3. All helpers are pure and deterministic
"""

import math
from decimal import Decimal
from typing import Final, TypeVar

# =============================================================================
# TOLERANCES
# =============================================================================

# Relative tolerance for comparing the fixed-point path with a double
# evaluation of the same formula
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Absolute tolerance for the same comparison (in smallest asset units)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-6


Number = TypeVar("Number", int, float, Decimal)


# =============================================================================
# FLOAT CHECKS
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Check whether a float is finite (not NaN, not Inf).

    Args:
        value: Value to check

    Returns:
        True if the value is finite
    """
    return math.isfinite(value)


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Compare two floats within machine-precision tolerances.

    abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# UTILITIES
# =============================================================================


def clamp(
    value: Number,
    min_value: Number | None = None,
    max_value: Number | None = None,
) -> Number:
    """
    Bound a value to [min_value, max_value].

    Works for int, float and Decimal; the result keeps the input type
    unless a bound is returned.

    Examples:
        >>> clamp(5, 0, 10)
        5
        >>> clamp(-1, 0, 10)
        0
        >>> clamp(15, 0, 10)
        10
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# VALIDATION
# =============================================================================


def validate_finite(value: float, name: str) -> None:
    """
    Raises:
        ValueError: If value is NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")


def validate_amount(value: int, name: str) -> None:
    """
    Validate a requested resource amount.

    Amounts are whole smallest units (μs, bytes, shares), so only
    non-negative integers are accepted.

    Args:
        value: Requested amount
        name: Parameter name (for the error message)

    Raises:
        ValueError: If value is not an int or is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
