"""
Core math modules

Integer/Decimal primitives with explicit rounding and numerical guards.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    clamp,
    is_close,
    is_valid_float,
    validate_amount,
    validate_finite,
)

# Fixed Point
from src.core.math.fixed_point import (
    DECIMAL_ONE,
    DECIMAL_ZERO,
    DEFAULT_DECIMAL_PRECISION,
    ceil_to_int,
    decimal_context,
    div_ceil,
    div_floor,
    floor_to_int,
    scaled_fraction,
    to_decimal,
)

__all__ = [
    # Numerical Safeguards — Tolerances
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards — Functions
    "clamp",
    "is_close",
    "is_valid_float",
    "validate_amount",
    "validate_finite",
    # Fixed Point — Constants
    "DECIMAL_ONE",
    "DECIMAL_ZERO",
    "DEFAULT_DECIMAL_PRECISION",
    # Fixed Point — Functions
    "ceil_to_int",
    "decimal_context",
    "div_ceil",
    "div_floor",
    "floor_to_int",
    "scaled_fraction",
    "to_decimal",
]
