"""
BondingCurvePricer — Primary market (powerup) resource quotes

Reproduces the contract's fee for leasing a share of one resource curve:

    amount (μs / bytes)
      → weight      = floor(amount * sample_precision / sample)
      → fraction    = floor(weight / curve.weight * 1e15)
      → increase    = ceil(curve.weight * fraction / 1e15)
      → adjusted    = decayed adjusted utilization at `timestamp`
      → fee         = flat catch-up segment + curve integral segment
      → price       = ceil(fee) smallest units of the curve's symbol

Price function (per 100% of capacity, in smallest units):

    exponent <= 1:  max_price
    otherwise:      min_price + (max_price - min_price) * (u / weight)^(exponent - 1)

Integral between two utilization points:

    min_price * (u1 - u0) / weight
      + (max_price - min_price) / exponent * ((u1 / weight)^exponent - (u0 / weight)^exponent)

All evaluation is done on ints and Decimals (see src.core.math.fixed_point);
there is no float path. Rounding directions:
- weight granted for a request: floor
- fraction of the curve:        floor
- utilization charged:          ceiling
- final price:                  ceiling

One pricer per resource type: the resource descriptor carries unit names
and the default block limit, ChainConstants carries the scaling factors.
"""

import logging
from decimal import Decimal

from src.core.config import ChainConstants
from src.core.domain.market_state import ResourceCurveState
from src.core.domain.money import Asset
from src.core.domain.units import CPU, NET, ResourceUnit
from src.core.domain.usage import UsageSample
from src.core.errors import BelowMinimumPayment, BelowPrecision
from src.core.math.fixed_point import (
    DECIMAL_ZERO,
    ceil_to_int,
    decimal_context,
    div_ceil,
    div_floor,
    scaled_fraction,
    to_decimal,
)
from src.core.math.numerical_safeguards import validate_amount
from src.pricing.decay import determine_adjusted_utilization
from src.pricing.options import PriceOptions

logger = logging.getLogger(__name__)


class BondingCurvePricer:
    """Quotes for one resource curve of the primary market.

    Stateless: every operation is a pure function of the snapshot, the
    usage sample, the request and the options.
    """

    def __init__(self, resource: ResourceUnit, constants: ChainConstants | None = None):
        """
        Args:
            resource: Resource descriptor (CPU or NET)
            constants: Chain constants (default: ChainConstants())
        """
        self.resource = resource
        self.constants = constants or ChainConstants()

    def __repr__(self) -> str:
        return f"BondingCurvePricer(resource={self.resource.name!r})"

    # =========================================================================
    # CAPACITY
    # =========================================================================

    def per_day(self, options: PriceOptions | None = None) -> int:
        """Chain-wide capacity per day in smallest units (μs or bytes)."""
        options = options or PriceOptions()
        return self.resource.per_day(
            options.block_limit(self.resource), self.constants.blocks_per_day
        )

    def per_day_larger(self, options: PriceOptions | None = None) -> int:
        """Chain-wide capacity per day in larger units (ms or kb)."""
        return div_floor(self.per_day(options), self.resource.granularity)

    # =========================================================================
    # UNIT / WEIGHT CONVERSION
    # =========================================================================

    def units_to_weight(self, sample: int, units: int) -> int:
        """
        Weight granted for `units` smallest units (rounded down).

        Args:
            sample: Usage-sample scalar of this resource
            units: Requested μs or bytes

        Returns:
            floor(units * sample_precision / sample)
        """
        return div_floor(units * self.constants.sample_precision, sample)

    def weight_to_units(self, sample: int, weight: int) -> int:
        """
        Smallest units represented by `weight` (rounded up).

        Returns:
            ceil(weight * sample / sample_precision)
        """
        return div_ceil(weight * sample, self.constants.sample_precision)

    def fraction(self, state: ResourceCurveState, usage: UsageSample, amount: int) -> int:
        """
        Request as a fraction of the curve's weight at 1e15 scale.

        Args:
            state: Curve snapshot
            usage: Usage sample
            amount: Requested smallest units

        Returns:
            floor(weight(amount) / state.weight * 10**fraction_precision)
        """
        validate_amount(amount, "amount")
        weight = self.units_to_weight(usage.for_resource(self.resource.name), amount)
        return scaled_fraction(weight, state.weight, self.constants.fraction_precision)

    def fraction_by_larger_unit(
        self, state: ResourceCurveState, usage: UsageSample, amount: int
    ) -> int:
        """fraction() for an amount in larger units (ms or kb)."""
        validate_amount(amount, "amount")
        return self.fraction(state, usage, self.resource.to_smallest(amount))

    def utilization_increase(self, state: ResourceCurveState, fraction: int) -> int:
        """
        Utilization this purchase adds to the curve (rounded up).

        Returns:
            ceil(state.weight * fraction / 10**fraction_precision)
        """
        return div_ceil(state.weight * fraction, self.constants.fraction_scale)

    # =========================================================================
    # CURVE
    # =========================================================================

    def price_function(self, state: ResourceCurveState, utilization: int) -> Decimal:
        """
        Marginal price at `utilization`, in smallest units per 100% of capacity.

        exponent <= 1 is the degenerate regime: the price is max_price flat.
        """
        max_price = Decimal(state.max_price.units)
        with decimal_context(self.constants.decimal_precision):
            new_exponent = to_decimal(state.exponent) - 1
            if new_exponent <= 0:
                return max_price
            min_price = Decimal(state.min_price.units)
            ratio = Decimal(utilization) / Decimal(state.weight)
            return min_price + (max_price - min_price) * ratio**new_exponent

    def price_integral_delta(
        self, state: ResourceCurveState, start_utilization: int, end_utilization: int
    ) -> Decimal:
        """
        Definite integral of price_function over [start, end] / weight.

        Returns:
            Fee in smallest units for moving utilization from start to end
        """
        with decimal_context(self.constants.decimal_precision):
            exponent = to_decimal(state.exponent)
            min_price = Decimal(state.min_price.units)
            max_price = Decimal(state.max_price.units)
            weight = Decimal(state.weight)

            coefficient = (max_price - min_price) / exponent
            start_u = Decimal(start_utilization) / weight
            end_u = Decimal(end_utilization) / weight
            return min_price * (end_u - start_u) + coefficient * (
                end_u**exponent - start_u**exponent
            )

    def fee(
        self,
        state: ResourceCurveState,
        utilization_increase: int,
        adjusted_utilization: int,
    ) -> Decimal:
        """
        Two-segment fee in smallest units (not yet rounded).

        1. While utilization is below the adjusted baseline, the flat price
           at the baseline is charged for the catch-up span.
        2. Beyond the baseline, the smooth curve integral is charged.

        Args:
            state: Curve snapshot
            utilization_increase: Weight added by the purchase
            adjusted_utilization: Decayed baseline (see determine_adjusted_utilization)

        Returns:
            Fee as Decimal smallest units
        """
        start_utilization = state.utilization
        end_utilization = start_utilization + utilization_increase
        fee = DECIMAL_ZERO

        with decimal_context(self.constants.decimal_precision):
            if start_utilization < adjusted_utilization:
                catch_up = min(utilization_increase, adjusted_utilization - start_utilization)
                fee += (
                    self.price_function(state, adjusted_utilization)
                    * Decimal(catch_up)
                    / Decimal(state.weight)
                )
                start_utilization = adjusted_utilization

            if start_utilization < end_utilization:
                fee += self.price_integral_delta(state, start_utilization, end_utilization)

        return fee

    # =========================================================================
    # QUOTES
    # =========================================================================

    def price_per_unit(
        self,
        state: ResourceCurveState,
        usage: UsageSample,
        amount: int = 1000,
        options: PriceOptions | None = None,
    ) -> Asset:
        """
        Price of leasing `amount` smallest units (μs or bytes).

        Args:
            state: Curve snapshot
            usage: Usage sample
            amount: Requested smallest units (default: 1000)
            options: Evaluation timestamp, block limits, payment floor

        Returns:
            Price rounded up to the curve symbol's precision

        Raises:
            BelowPrecision: Non-zero request whose price rounds to zero
            BelowMinimumPayment: Price below options.min_payment
            InvalidDecayConstant: state.decay_secs <= 0
            ValueError: Negative or non-integer amount
        """
        options = options or PriceOptions()

        fraction = self.fraction(state, usage, amount)
        increase = self.utilization_increase(state, fraction)
        adjusted = determine_adjusted_utilization(
            state, options.timestamp, self.constants.decimal_precision
        )
        fee = self.fee(state, increase, adjusted)
        price = Asset.from_units(ceil_to_int(fee), state.symbol)

        logger.debug(
            "%s quote: amount=%d%s fraction=%d increase=%d adjusted=%d fee=%s price=%s",
            self.resource.name,
            amount,
            self.resource.unit,
            fraction,
            increase,
            adjusted,
            fee,
            price,
        )

        if amount > 0 and price.is_zero():
            logger.info(
                "%s quote rejected: %d%s below precision",
                self.resource.name,
                amount,
                self.resource.unit,
            )
            raise BelowPrecision(self.resource.name, amount, self.resource.unit)

        if options.min_payment is not None and price < options.min_payment:
            logger.info(
                "%s quote rejected: %s below minimum payment %s",
                self.resource.name,
                price,
                options.min_payment,
            )
            raise BelowMinimumPayment(
                self.resource.name, amount, self.resource.unit, price, options.min_payment
            )

        return price

    def price_per_larger_unit(
        self,
        state: ResourceCurveState,
        usage: UsageSample,
        amount: int = 1,
        options: PriceOptions | None = None,
    ) -> Asset:
        """price_per_unit() for an amount in larger units (ms or kb)."""
        validate_amount(amount, "amount")
        return self.price_per_unit(state, usage, self.resource.to_smallest(amount), options)


def cpu_pricer(constants: ChainConstants | None = None) -> BondingCurvePricer:
    """Pricer for the compute-time curve (μs / ms)."""
    return BondingCurvePricer(CPU, constants)


def net_pricer(constants: ChainConstants | None = None) -> BondingCurvePricer:
    """Pricer for the bandwidth curve (bytes / kb)."""
    return BondingCurvePricer(NET, constants)
