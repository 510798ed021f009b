"""
Tests for BondingCurvePricer (primary leasing market)

Reference curve (tests/conftest.py): weight 1e9, min 0.0001 EOS,
max 1.0000 EOS, exponent 2. With the reference CPU sample one full day of
CPU maps onto the whole weight, so 1% of daily capacity is 1e7 weight.

Fee of a fresh curve from 0 to fraction f (smallest units):
    f * 1 + (10000 - 1) / 2 * f**2
"""

import logging
from decimal import Decimal

import pytest

from src.core.config import ChainConstants
from src.core.domain import Asset
from src.core.errors import BelowMinimumPayment, BelowPrecision, InvalidDecayConstant
from src.pricing import PriceOptions, cpu_pricer, net_pricer
from tests.conftest import CPU_SAMPLE, FIXTURE_TIMESTAMP, make_curve

ONE_PERCENT_US = 345_600_000
TEN_PERCENT_US = 3_456_000_000
FULL_DAY_US = 34_560_000_000


@pytest.fixture
def pricer():
    return cpu_pricer()


@pytest.fixture
def at_snapshot():
    return PriceOptions(timestamp=FIXTURE_TIMESTAMP)


# =============================================================================
# CAPACITY AND CONVERSIONS
# =============================================================================


class TestCapacity:
    """Daily capacity from block limits"""

    def test_cpu_per_day_default(self, pricer) -> None:
        assert pricer.per_day() == FULL_DAY_US
        assert pricer.per_day_larger() == 34_560_000

    def test_cpu_virtual_block_limit(self, pricer) -> None:
        options = PriceOptions(virtual_block_cpu_limit=100_000)
        assert pricer.per_day(options) == 17_280_000_000

    def test_net_per_day(self) -> None:
        assert net_pricer().per_day() == 181_193_932_800_000

    def test_override_applies_to_own_resource_only(self) -> None:
        options = PriceOptions(virtual_block_cpu_limit=1)
        assert net_pricer().per_day(options) == 181_193_932_800_000

    def test_custom_blocks_per_day(self) -> None:
        pricer = cpu_pricer(ChainConstants(blocks_per_day=86_400))
        assert pricer.per_day() == FULL_DAY_US // 2


class TestConversions:
    """Units ↔ weight with opposite rounding directions"""

    def test_units_to_weight(self, pricer) -> None:
        assert pricer.units_to_weight(CPU_SAMPLE, ONE_PERCENT_US) == 10_000_000

    def test_units_to_weight_floors(self, pricer) -> None:
        assert pricer.units_to_weight(CPU_SAMPLE, 1) == 0
        assert pricer.units_to_weight(CPU_SAMPLE, 100) == 2

    def test_weight_to_units_ceils(self, pricer) -> None:
        """12_930_064 * 34.56 = 446_863_011.84"""
        assert pricer.weight_to_units(CPU_SAMPLE, 12_930_064) == 446_863_012

    def test_fraction(self, pricer, curve, usage) -> None:
        assert pricer.fraction(curve, usage, ONE_PERCENT_US) == 10**13
        assert pricer.fraction(curve, usage, FULL_DAY_US) == 10**15

    def test_fraction_by_larger_unit(self, pricer, curve, usage) -> None:
        assert pricer.fraction_by_larger_unit(curve, usage, 345_600) == 10**13

    def test_utilization_increase(self, pricer, curve) -> None:
        assert pricer.utilization_increase(curve, 10**13) == 10_000_000
        # 1e9 * 1 / 1e15 rounds up to one weight unit
        assert pricer.utilization_increase(curve, 1) == 1

    @pytest.mark.parametrize("amount", [-1, 1.5, True])
    def test_invalid_amount(self, pricer, curve, usage, amount) -> None:
        with pytest.raises(ValueError):
            pricer.fraction(curve, usage, amount)


# =============================================================================
# CURVE
# =============================================================================


class TestCurve:
    """price_function / price_integral_delta / fee"""

    def test_price_function_endpoints(self, pricer, curve) -> None:
        assert pricer.price_function(curve, 0) == Decimal(1)
        assert pricer.price_function(curve, curve.weight) == Decimal(10_000)

    def test_price_function_midpoint(self, pricer, curve) -> None:
        """1 + 9999 * 0.1"""
        assert pricer.price_function(curve, 100_000_000) == Decimal("1000.9")

    @pytest.mark.parametrize("exponent", [1.0, 0.5])
    def test_degenerate_exponent_is_flat_max(self, pricer, exponent: float) -> None:
        state = make_curve(exponent=exponent)
        for utilization in (0, 123_456, state.weight):
            assert pricer.price_function(state, utilization) == Decimal(10_000)

    def test_integral_whole_curve(self, pricer, curve) -> None:
        assert pricer.price_integral_delta(curve, 0, curve.weight) == Decimal("5000.5")

    def test_integral_is_additive(self, pricer, curve) -> None:
        whole = pricer.price_integral_delta(curve, 0, 300_000_000)
        split = pricer.price_integral_delta(curve, 0, 100_000_000) + pricer.price_integral_delta(
            curve, 100_000_000, 300_000_000
        )
        assert abs(whole - split) < Decimal("1e-30")

    def test_fee_fresh_curve(self, pricer, curve) -> None:
        assert pricer.fee(curve, 10_000_000, 0) == Decimal("0.50995")

    def test_fee_catch_up_only(self, pricer, curve) -> None:
        """Whole increase charged at the flat baseline price"""
        assert pricer.fee(curve, 10_000_000, 100_000_000) == Decimal("10.009")

    def test_fee_catch_up_then_curve(self, pricer, curve) -> None:
        """100.09 flat + integral from 0.1 to 0.2 (0.1 + 4999.5 * 0.03)"""
        assert pricer.fee(curve, 200_000_000, 100_000_000) == Decimal("250.175")

    def test_fee_zero_increase(self, pricer, curve) -> None:
        assert pricer.fee(curve, 0, 0) == 0


# =============================================================================
# QUOTES
# =============================================================================


class TestPricePerUnit:
    """End-to-end quotes"""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (ONE_PERCENT_US, "0.0001 EOS"),
            (TEN_PERCENT_US, "0.0051 EOS"),
            (FULL_DAY_US, "0.5001 EOS"),
            (100, "0.0001 EOS"),
        ],
    )
    def test_fresh_curve(self, pricer, curve, usage, at_snapshot, amount, expected) -> None:
        assert str(pricer.price_per_unit(curve, usage, amount, at_snapshot)) == expected

    def test_default_amount(self, pricer, curve, usage) -> None:
        assert pricer.price_per_unit(curve, usage) == Asset.model_validate("0.0001 EOS")

    def test_zero_amount_is_free(self, pricer, curve, usage) -> None:
        assert pricer.price_per_unit(curve, usage, 0).is_zero()

    def test_catch_up_surcharge(self, pricer, usage, at_snapshot) -> None:
        state = make_curve(adjusted_utilization=100_000_000)
        assert str(pricer.price_per_unit(state, usage, ONE_PERCENT_US, at_snapshot)) == "0.0011 EOS"
        assert (
            str(pricer.price_per_unit(state, usage, 2 * TEN_PERCENT_US, at_snapshot))
            == "0.0251 EOS"
        )

    def test_surcharge_decays(self, pricer, usage) -> None:
        state = make_curve(adjusted_utilization=100_000_000, decay_secs=3600)
        later = PriceOptions(timestamp=FIXTURE_TIMESTAMP + 360_000)
        assert str(pricer.price_per_unit(state, usage, ONE_PERCENT_US, later)) == "0.0001 EOS"

    def test_below_precision(self, pricer, curve, usage, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="src.pricing.bonding_curve"):
            with pytest.raises(BelowPrecision) as exc_info:
                pricer.price_per_unit(curve, usage, 1)
        assert exc_info.value.resource == "cpu"
        assert exc_info.value.amount == 1
        assert "CPU amount (1us) below required precision" in str(exc_info.value)
        assert "below precision" in caplog.text

    def test_below_minimum_payment(self, pricer, curve, usage) -> None:
        options = PriceOptions(min_payment=Asset.model_validate("0.0010 EOS"))
        with pytest.raises(BelowMinimumPayment) as exc_info:
            pricer.price_per_unit(curve, usage, ONE_PERCENT_US, options)
        assert str(exc_info.value.price) == "0.0001 EOS"
        assert str(exc_info.value.min_payment) == "0.0010 EOS"

    def test_minimum_payment_met(self, pricer, curve, usage) -> None:
        options = PriceOptions(min_payment=Asset.model_validate("0.0051 EOS"))
        assert str(pricer.price_per_unit(curve, usage, TEN_PERCENT_US, options)) == "0.0051 EOS"

    def test_invalid_decay_constant(self, pricer, usage) -> None:
        with pytest.raises(InvalidDecayConstant):
            pricer.price_per_unit(make_curve(decay_secs=0), usage, ONE_PERCENT_US)

    def test_larger_unit(self, pricer, curve, usage) -> None:
        by_ms = pricer.price_per_larger_unit(curve, usage, 345_600)
        assert by_ms == pricer.price_per_unit(curve, usage, ONE_PERCENT_US)

    def test_net(self, curve, usage) -> None:
        """52_428_800_000 bytes → 1e7 weight with the reference NET sample"""
        price = net_pricer().price_per_unit(curve, usage, 52_428_800_000)
        assert str(price) == "0.0001 EOS"
        with pytest.raises(BelowPrecision, match="NET amount"):
            net_pricer().price_per_unit(curve, usage, 1)

    def test_debug_log(self, pricer, curve, usage, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.pricing.bonding_curve"):
            pricer.price_per_unit(curve, usage, ONE_PERCENT_US)
        assert "cpu quote" in caplog.text
