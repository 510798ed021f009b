"""
ResourceUnit — Descriptors of leasable resource types

The primary market leases two resources that share one bonding curve
implementation and differ only in how they are measured:

- CPU: smallest unit μs (microseconds), larger unit ms, sampled by `cpu`
- NET: smallest unit bytes, larger unit kb, sampled by `net`

A descriptor carries the unit names, the smallest→larger granularity and
the chain's default per-block capacity. Converting larger units to
smallest units is the only conversion allowed outside the pricer.
"""

from dataclasses import dataclass
from typing import Final, Literal

# =============================================================================
# CHAIN DEFAULTS
# =============================================================================

# Default virtual block CPU limit (μs per block)
DEFAULT_BLOCK_CPU_LIMIT: Final[int] = 200_000

# Default virtual block NET limit (bytes per block)
DEFAULT_BLOCK_NET_LIMIT: Final[int] = 1_048_576_000

# Smallest units in one larger unit (μs per ms, bytes per kb)
UNIT_GRANULARITY: Final[int] = 1000

ResourceName = Literal["cpu", "net"]


# =============================================================================
# DESCRIPTOR
# =============================================================================


@dataclass(frozen=True)
class ResourceUnit:
    """Measurement descriptor of one leasable resource."""

    name: ResourceName
    unit: str
    larger_unit: str
    default_block_limit: int
    granularity: int = UNIT_GRANULARITY

    def to_smallest(self, larger_amount: int) -> int:
        """Convert an amount in larger units (ms, kb) to smallest units."""
        return larger_amount * self.granularity

    def per_day(self, block_limit: int, blocks_per_day: int) -> int:
        """
        Chain-wide capacity per day in smallest units.

        Args:
            block_limit: Virtual per-block limit (μs or bytes)
            blocks_per_day: Blocks produced per day

        Returns:
            block_limit * blocks_per_day
        """
        return block_limit * blocks_per_day


CPU: Final[ResourceUnit] = ResourceUnit(
    name="cpu",
    unit="us",
    larger_unit="ms",
    default_block_limit=DEFAULT_BLOCK_CPU_LIMIT,
)

NET: Final[ResourceUnit] = ResourceUnit(
    name="net",
    unit="bytes",
    larger_unit="kb",
    default_block_limit=DEFAULT_BLOCK_NET_LIMIT,
)
