"""
PriceOptions — Per-call quoting options
"""

from dataclasses import dataclass

from src.core.domain.money import Asset
from src.core.domain.units import ResourceUnit
from src.pricing.decay import Timestamp


@dataclass(frozen=True)
class PriceOptions:
    """Options accepted by BondingCurvePricer operations.

    Attributes:
        timestamp: evaluation time for utilization decay (None → wall clock)
        virtual_block_cpu_limit: override of the default CPU block limit (μs)
        virtual_block_net_limit: override of the default NET block limit (bytes)
        min_payment: payment floor; quotes below it are rejected
    """

    timestamp: Timestamp | None = None
    virtual_block_cpu_limit: int | None = None
    virtual_block_net_limit: int | None = None
    min_payment: Asset | None = None

    def block_limit(self, resource: ResourceUnit) -> int:
        """Virtual block limit for `resource`, falling back to its default."""
        if resource.name == "cpu" and self.virtual_block_cpu_limit:
            return self.virtual_block_cpu_limit
        if resource.name == "net" and self.virtual_block_net_limit:
            return self.virtual_block_net_limit
        return resource.default_block_limit
