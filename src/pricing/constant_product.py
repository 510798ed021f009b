"""
ConstantProductExchange — Legacy AMM market (RAM)

Buying `units` of the base resource from a constant-product pool costs

    quote_balance * units / (base_balance - units)      (rounded up)

in quote token units, which keeps base * quote invariant. Requests as
large as the base pool are rejected with InsufficientLiquidity; they are
never clamped.
"""

import logging

from src.core.domain.market_state import LegacyExchangeMarketState
from src.core.domain.money import Asset
from src.core.errors import InsufficientLiquidity
from src.core.math.fixed_point import div_ceil
from src.core.math.numerical_safeguards import validate_amount

logger = logging.getLogger(__name__)


class ConstantProductExchange:
    """Quotes for a constant-product market."""

    granularity: int = 1000

    @staticmethod
    def get_input(base: int, quote: int, value: int) -> int:
        """
        Quote units required to take `value` base units out of the pool.

        Raises:
            InsufficientLiquidity: If value >= base
        """
        if value >= base:
            raise InsufficientLiquidity(value, base)
        return div_ceil(quote * value, base - value)

    def price_per_unit(self, state: LegacyExchangeMarketState, units: int) -> Asset:
        """
        Price of `units` base units (bytes for the RAM market).

        Args:
            state: Market snapshot
            units: Requested base units

        Returns:
            Price in the quote symbol, rounded up

        Raises:
            InsufficientLiquidity: Request exceeds pool depth
            ValueError: Negative or non-integer units
        """
        validate_amount(units, "units")
        base = state.base.balance.units
        quote = state.quote.balance.units
        try:
            cost = self.get_input(base, quote, units)
        except InsufficientLiquidity:
            logger.info("ram quote rejected: %d units, base pool %d", units, base)
            raise
        return Asset.from_units(cost, state.quote.balance.symbol)

    def price_per_kb(self, state: LegacyExchangeMarketState, kilobytes: int) -> Asset:
        """price_per_unit() for an amount in kb."""
        validate_amount(kilobytes, "kilobytes")
        return self.price_per_unit(state, kilobytes * self.granularity)
