"""Shared fixtures: market snapshots and usage samples.

The reference curve has weight 1e9 and a CPU usage sample of 34_560_000,
so one full day of CPU at the default block limit
(200_000 μs × 172_800 blocks) maps exactly onto the curve's whole weight.
"""

import pytest

from src.core.domain import (
    LegacyExchangeMarketState,
    LegacyLinearMarketState,
    PrimaryMarketState,
    ResourceCurveState,
    UsageSample,
)

# 2021-03-26T18:46:36 UTC
FIXTURE_TIMESTAMP = 1616784396

CURVE_WEIGHT = 1_000_000_000
CPU_SAMPLE = 34_560_000
NET_SAMPLE = 5_242_880_000


def make_curve(**overrides) -> ResourceCurveState:
    """Reference curve: 4-decimal EOS, min 0.0001, max 1.0000, exponent 2."""
    data = {
        "version": 0,
        "weight": CURVE_WEIGHT,
        "weight_ratio": 1,
        "assumed_stake_weight": 0,
        "initial_weight_ratio": 100,
        "target_weight_ratio": 1,
        "initial_timestamp": FIXTURE_TIMESTAMP - 86400,
        "target_timestamp": FIXTURE_TIMESTAMP + 86400,
        "exponent": 2.0,
        "decay_secs": 86400,
        "min_price": "0.0001 EOS",
        "max_price": "1.0000 EOS",
        "utilization": 0,
        "adjusted_utilization": 0,
        "utilization_timestamp": FIXTURE_TIMESTAMP,
    }
    data.update(overrides)
    return ResourceCurveState.model_validate(data)


@pytest.fixture
def curve() -> ResourceCurveState:
    return make_curve()


@pytest.fixture
def usage() -> UsageSample:
    return UsageSample(cpu=CPU_SAMPLE, net=NET_SAMPLE)


@pytest.fixture
def curve_row() -> dict:
    """powup.state resource row as returned by get_table_rows."""
    return {
        "version": 0,
        "weight": "1000000000",
        "weight_ratio": "1",
        "assumed_stake_weight": "0",
        "initial_weight_ratio": "100",
        "target_weight_ratio": "1",
        "initial_timestamp": "2021-03-25T18:46:36",
        "target_timestamp": "2021-03-27T18:46:36",
        "exponent": "2.00000000000000000",
        "decay_secs": 86400,
        "min_price": "0.0001 EOS",
        "max_price": "1.0000 EOS",
        "utilization": "250000000",
        "adjusted_utilization": "300000000",
        "utilization_timestamp": "2021-03-26T18:46:36",
    }


@pytest.fixture
def powerup_row(curve_row) -> dict:
    return {
        "version": 0,
        "net": dict(curve_row),
        "cpu": dict(curve_row),
        "powerup_days": 1,
        "min_powerup_fee": "0.0001 EOS",
    }


@pytest.fixture
def powerup_state(powerup_row) -> PrimaryMarketState:
    return PrimaryMarketState.model_validate(powerup_row)


@pytest.fixture
def rex_row() -> dict:
    """rexpool row: 25% lent, 1 REX share = 0.0001 EOS."""
    return {
        "version": 0,
        "total_lent": "1000.0000 EOS",
        "total_unlent": "3000.0000 EOS",
        "total_rent": "20.0000 EOS",
        "total_lendable": "4000.0000 EOS",
        "total_rex": "40000000.0000 REX",
        "namebid_proceeds": "0.0000 EOS",
        "loan_num": "5",
    }


@pytest.fixture
def rex_state(rex_row) -> LegacyLinearMarketState:
    return LegacyLinearMarketState.model_validate(rex_row)


@pytest.fixture
def ram_row() -> dict:
    """rammarket row: 1000 bytes against 200.0000 EOS."""
    return {
        "supply": "10000000000.0000 RAMCORE",
        "base": {"balance": "1000 RAM", "weight": "0.50000000000000000"},
        "quote": {"balance": "200.0000 EOS", "weight": "0.50000000000000000"},
    }


@pytest.fixture
def ram_state(ram_row) -> LegacyExchangeMarketState:
    return LegacyExchangeMarketState.model_validate(ram_row)
