"""
ChainConstants — Per-chain fixed-point configuration

The scaling factors used by the resource contracts are chain parameters,
not process-wide globals: two chains with different constants can be
quoted side by side by passing two ChainConstants instances.
"""

from dataclasses import dataclass
from typing import Final

from src.core.math.fixed_point import DEFAULT_DECIMAL_PRECISION

# =============================================================================
# DEFAULTS
# =============================================================================

# Scale applied to account limits when deriving a usage sample
DEFAULT_SAMPLE_PRECISION: Final[int] = 1_000_000

# Decimal digits of the utilization fraction (contract's powerup_frac = 1e15)
DEFAULT_FRACTION_PRECISION: Final[int] = 15

# Two blocks per second
DEFAULT_BLOCKS_PER_DAY: Final[int] = 2 * 60 * 60 * 24


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ChainConstants:
    """Fixed-point constants of one chain's resource contracts.

    Attributes:
        sample_precision: usage-sample scale (weight = units * precision / sample)
        fraction_precision: digits of the utilization fraction (15 → 1e15)
        blocks_per_day: blocks per day, used for daily capacity
        decimal_precision: significant digits for Decimal evaluation
    """

    sample_precision: int = DEFAULT_SAMPLE_PRECISION
    fraction_precision: int = DEFAULT_FRACTION_PRECISION
    blocks_per_day: int = DEFAULT_BLOCKS_PER_DAY
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION

    def __post_init__(self) -> None:
        if self.sample_precision <= 0:
            raise ValueError(
                f"sample_precision must be positive, got {self.sample_precision}"
            )
        if self.fraction_precision < 0:
            raise ValueError(
                f"fraction_precision must be non-negative, got {self.fraction_precision}"
            )
        if self.blocks_per_day <= 0:
            raise ValueError(
                f"blocks_per_day must be positive, got {self.blocks_per_day}"
            )
        if self.decimal_precision < 28:
            raise ValueError(
                f"decimal_precision must be >= 28, got {self.decimal_precision}"
            )

    @property
    def fraction_scale(self) -> int:
        """10**fraction_precision — the value of a 100% utilization fraction."""
        return 10**self.fraction_precision
