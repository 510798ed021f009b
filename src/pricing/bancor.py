"""
BancorExchangeModel — Legacy linear staking market (REX)

Pool ratios of a bancor-like staking pool:

    reserved_ratio  = total_lent / total_lendable                 ∈ [0, 1]
    conversion_rate = (total_lent + total_unlent) / total_supply  (tokens per share)
    exchange(s)     = s * total_lendable / total_supply           (floor)

Resource price (price_per_unit) is a LINEAR APPROXIMATION of the pool's
marginal price, not an exact integral like the bonding curve: a fixed
reference amount of one whole base token is scaled by the rent/unlent
ratio and by the usage-sample scalar of the requested resource.

    shares_per_token = reference / (total_rent / total_unlent)
    units_per_token  = shares_per_token * sample / sample_precision
    cost             = reference / units_per_token * units         (ceil)

It ignores the price impact of the request itself, so it under-quotes
large requests.
"""

import logging
import warnings
from decimal import Decimal

from src.core.config import ChainConstants
from src.core.domain.market_state import LegacyLinearMarketState
from src.core.domain.money import Asset
from src.core.domain.units import ResourceName
from src.core.domain.usage import UsageSample
from src.core.errors import BelowPrecision
from src.core.math.fixed_point import (
    DECIMAL_ONE,
    DECIMAL_ZERO,
    ceil_to_int,
    decimal_context,
)
from src.core.math.numerical_safeguards import clamp, validate_amount

logger = logging.getLogger(__name__)


class BancorExchangeModel:
    """Valuation of the legacy staking pool."""

    def __init__(self, constants: ChainConstants | None = None):
        self.constants = constants or ChainConstants()

    # =========================================================================
    # POOL RATIOS
    # =========================================================================

    def reserved_ratio(self, state: LegacyLinearMarketState) -> Decimal:
        """
        Share of lendable tokens currently lent out.

        An empty pool (total_lendable == 0) has nothing reserved.
        """
        lendable = state.total_lendable.units
        if lendable == 0:
            return DECIMAL_ZERO
        with decimal_context(self.constants.decimal_precision):
            ratio = Decimal(state.total_lent.units) / Decimal(lendable)
        return clamp(ratio, DECIMAL_ZERO, DECIMAL_ONE)

    def conversion_rate(self, state: LegacyLinearMarketState) -> Decimal:
        """
        Base tokens backing one pool share.

        Raises:
            ValueError: If the pool has no shares outstanding
        """
        supply = state.total_supply.value
        if supply == 0:
            raise ValueError("Pool has no shares outstanding (total_supply == 0)")
        with decimal_context(self.constants.decimal_precision):
            return (state.total_lent.value + state.total_unlent.value) / supply

    def exchange(self, state: LegacyLinearMarketState, shares: Asset) -> Asset:
        """
        Redeem pool shares for base tokens.

        Args:
            state: Pool snapshot
            shares: Share amount (same symbol as total_supply)

        Returns:
            Base tokens, rounded down to the base symbol's precision

        Raises:
            ValueError: Symbol mismatch, negative shares or empty pool
        """
        if shares.symbol != state.total_supply.symbol:
            raise ValueError(
                f"Expected shares in {state.total_supply.symbol}, got {shares.symbol}"
            )
        if shares.units < 0:
            raise ValueError(f"shares must be non-negative, got {shares}")
        supply = state.total_supply.value
        if supply == 0:
            raise ValueError("Pool has no shares outstanding (total_supply == 0)")

        with decimal_context(self.constants.decimal_precision):
            tokens = shares.value * state.total_lendable.value / supply
        return Asset.from_decimal(tokens, state.symbol, rounding="down")

    # =========================================================================
    # RESOURCE PRICE
    # =========================================================================

    def price_per_unit(
        self,
        state: LegacyLinearMarketState,
        usage: UsageSample,
        units: int = 1000,
        resource: ResourceName = "cpu",
    ) -> Asset:
        """
        Approximate price of `units` smallest units (μs or bytes) rented
        from the pool.

        Args:
            state: Pool snapshot
            usage: Usage sample
            units: Requested smallest units (default: 1000)
            resource: 'cpu' or 'net' sample scalar to scale by

        Returns:
            Price rounded up to the base symbol's precision

        Raises:
            BelowPrecision: Non-zero request whose price rounds to zero
            ValueError: Empty rent/unlent balances or invalid units
        """
        validate_amount(units, "units")
        rent = state.total_rent.value
        unlent = state.total_unlent.value
        if rent == 0 or unlent == 0:
            raise ValueError(
                f"Pool rent and unlent balances must be positive, "
                f"got rent={state.total_rent} unlent={state.total_unlent}"
            )

        sample = usage.for_resource(resource)
        with decimal_context(self.constants.decimal_precision):
            reference = Decimal(state.symbol.scale)
            shares_per_token = reference / (rent / unlent)
            units_per_token = (
                shares_per_token * Decimal(sample) / Decimal(self.constants.sample_precision)
            )
            cost = reference / units_per_token * Decimal(units)

        price = Asset.from_units(ceil_to_int(cost), state.symbol)
        logger.debug(
            "rex %s quote: units=%d cost=%s price=%s", resource, units, cost, price
        )

        if units > 0 and price.is_zero():
            raise BelowPrecision(resource, units, "us" if resource == "cpu" else "bytes")
        return price

    def legacy_price_per_ms(
        self, state: LegacyLinearMarketState, usage: UsageSample, ms: int = 1
    ) -> Asset:
        """
        Deprecated: millisecond price from the unscaled CPU sample.

        Predates the sample precision scaling of usage samples and
        disagrees with price_per_unit by that factor. Use
        price_per_unit(state, usage, ms * 1000, "cpu").
        """
        warnings.warn(
            "legacy_price_per_ms is deprecated; use price_per_unit(state, usage, ms * 1000)",
            DeprecationWarning,
            stacklevel=2,
        )
        validate_amount(ms, "ms")
        with decimal_context(self.constants.decimal_precision):
            reference = Decimal(state.symbol.scale)
            shares_per_token = reference / (state.total_rent.value / state.total_unlent.value)
            microseconds = shares_per_token * Decimal(usage.cpu)
            per_microsecond = reference / microseconds
            cost = per_microsecond * 1000 * Decimal(ms)
        return Asset.from_units(ceil_to_int(cost), state.symbol)
