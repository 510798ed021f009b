"""
ResourceQuoter — Quotes from a chain-state provider

The pricers never fetch anything. ResourceQuoter pulls snapshots from a
ChainStateProvider (an external collaborator that reads the chain's
tables and the reference account) and hands them to the pricers.

A powerup lease covers CPU and NET in one action; the contract checks the
summed fee against the market's min_fee, so quote_powerup does the same.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from src.core.config import ChainConstants
from src.core.domain.market_state import (
    LegacyExchangeMarketState,
    LegacyLinearMarketState,
    PrimaryMarketState,
)
from src.core.domain.money import Asset
from src.core.domain.units import ResourceName
from src.core.domain.usage import UsageSample
from src.core.errors import BelowMinimumPayment
from src.pricing.bancor import BancorExchangeModel
from src.pricing.bonding_curve import cpu_pricer, net_pricer
from src.pricing.constant_product import ConstantProductExchange
from src.pricing.decay import Timestamp
from src.pricing.options import PriceOptions

logger = logging.getLogger(__name__)


class ChainStateProvider(Protocol):
    """Source of market snapshots and usage samples."""

    def get_powerup_state(self) -> PrimaryMarketState: ...

    def get_rex_state(self) -> LegacyLinearMarketState: ...

    def get_ram_state(self) -> LegacyExchangeMarketState: ...

    def get_sampled_usage(self) -> UsageSample: ...


@dataclass(frozen=True)
class PowerupQuote:
    """Fee breakdown of one powerup lease."""

    cpu: Asset
    net: Asset
    total: Asset
    lease_days: int


class ResourceQuoter:
    """Facade over the three market pricers."""

    def __init__(
        self, provider: ChainStateProvider, constants: ChainConstants | None = None
    ):
        self.provider = provider
        self.constants = constants or ChainConstants()
        self.cpu = cpu_pricer(self.constants)
        self.net = net_pricer(self.constants)
        self.rex = BancorExchangeModel(self.constants)
        self.ram = ConstantProductExchange()

    def quote_powerup(
        self,
        cpu_us: int = 0,
        net_bytes: int = 0,
        timestamp: Timestamp | None = None,
        virtual_block_cpu_limit: int | None = None,
        virtual_block_net_limit: int | None = None,
    ) -> PowerupQuote:
        """
        Fee of leasing `cpu_us` μs and `net_bytes` bytes.

        A zero amount skips that resource. The total must reach the
        market's min_fee.

        Raises:
            BelowMinimumPayment: Total below state.min_fee
            BelowPrecision: A non-zero request whose price rounds to zero
        """
        state = self.provider.get_powerup_state()
        usage = self.provider.get_sampled_usage()
        options = PriceOptions(
            timestamp=timestamp,
            virtual_block_cpu_limit=virtual_block_cpu_limit,
            virtual_block_net_limit=virtual_block_net_limit,
        )
        symbol = state.cpu.symbol

        cpu = (
            self.cpu.price_per_unit(state.cpu, usage, cpu_us, options)
            if cpu_us
            else Asset.from_units(0, symbol)
        )
        net = (
            self.net.price_per_unit(state.net, usage, net_bytes, options)
            if net_bytes
            else Asset.from_units(0, state.net.symbol)
        )
        total = Asset.from_units(cpu.units + net.units, symbol)

        if total < state.min_fee:
            logger.info("powerup quote rejected: %s below min fee %s", total, state.min_fee)
            raise BelowMinimumPayment(
                "powerup", cpu_us + net_bytes, " units", total, state.min_fee
            )

        return PowerupQuote(cpu=cpu, net=net, total=total, lease_days=state.lease_days)

    def quote_cpu_ms(self, ms: int = 1, options: PriceOptions | None = None) -> Asset:
        """Primary market price of `ms` milliseconds of CPU."""
        state = self.provider.get_powerup_state()
        usage = self.provider.get_sampled_usage()
        return self.cpu.price_per_larger_unit(state.cpu, usage, ms, options)

    def quote_net_kb(self, kb: int = 1, options: PriceOptions | None = None) -> Asset:
        """Primary market price of `kb` kilobytes of NET."""
        state = self.provider.get_powerup_state()
        usage = self.provider.get_sampled_usage()
        return self.net.price_per_larger_unit(state.net, usage, kb, options)

    def quote_rex(self, units: int = 1000, resource: ResourceName = "cpu") -> Asset:
        """Staking pool price of `units` μs (cpu) or bytes (net)."""
        state = self.provider.get_rex_state()
        usage = self.provider.get_sampled_usage()
        return self.rex.price_per_unit(state, usage, units, resource)

    def quote_ram(self, num_bytes: int) -> Asset:
        """Constant-product price of `num_bytes` bytes of RAM."""
        return self.ram.price_per_unit(self.provider.get_ram_state(), num_bytes)
