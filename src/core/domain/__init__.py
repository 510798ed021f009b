"""
Domain models and value objects.

Contains money types, resource unit descriptors, usage samples and the
read-only market snapshots consumed by the pricers.
"""

from src.core.domain.market_state import (
    Connector,
    LegacyExchangeMarketState,
    LegacyLinearMarketState,
    PrimaryMarketState,
    ResourceCurveState,
)
from src.core.domain.money import Asset, Symbol
from src.core.domain.units import (
    CPU,
    DEFAULT_BLOCK_CPU_LIMIT,
    DEFAULT_BLOCK_NET_LIMIT,
    NET,
    UNIT_GRANULARITY,
    ResourceUnit,
)
from src.core.domain.usage import UsageSample

__all__ = [
    # Money
    "Asset",
    "Symbol",
    # Units
    "CPU",
    "NET",
    "DEFAULT_BLOCK_CPU_LIMIT",
    "DEFAULT_BLOCK_NET_LIMIT",
    "UNIT_GRANULARITY",
    "ResourceUnit",
    # Usage
    "UsageSample",
    # Market state
    "ResourceCurveState",
    "PrimaryMarketState",
    "LegacyLinearMarketState",
    "Connector",
    "LegacyExchangeMarketState",
]
