"""
Tests for ResourceQuoter (provider-backed facade)
"""

import pytest

from src.core.domain import (
    Asset,
    LegacyExchangeMarketState,
    LegacyLinearMarketState,
    PrimaryMarketState,
    UsageSample,
)
from src.core.errors import BelowMinimumPayment
from src.pricing import PowerupQuote, ResourceQuoter
from tests.conftest import CPU_SAMPLE, FIXTURE_TIMESTAMP, NET_SAMPLE, make_curve


class FakeProvider:
    """In-memory ChainStateProvider."""

    def __init__(self, powerup, rex, ram, usage):
        self.powerup = powerup
        self.rex = rex
        self.ram = ram
        self.usage = usage
        self.calls = []

    def get_powerup_state(self) -> PrimaryMarketState:
        self.calls.append("powerup")
        return self.powerup

    def get_rex_state(self) -> LegacyLinearMarketState:
        self.calls.append("rex")
        return self.rex

    def get_ram_state(self) -> LegacyExchangeMarketState:
        self.calls.append("ram")
        return self.ram

    def get_sampled_usage(self) -> UsageSample:
        self.calls.append("usage")
        return self.usage


def make_powerup(min_fee: str = "0.0001 EOS") -> PrimaryMarketState:
    curve = make_curve()
    return PrimaryMarketState(
        net=curve, cpu=curve, lease_days=1, min_fee=Asset.model_validate(min_fee)
    )


@pytest.fixture
def provider(rex_state, ram_state):
    return FakeProvider(
        powerup=make_powerup(),
        rex=rex_state,
        ram=ram_state,
        usage=UsageSample(cpu=CPU_SAMPLE, net=NET_SAMPLE),
    )


@pytest.fixture
def quoter(provider):
    return ResourceQuoter(provider)


class TestQuotePowerup:
    """Combined CPU + NET lease"""

    def test_both_resources(self, quoter) -> None:
        quote = quoter.quote_powerup(
            cpu_us=345_600_000, net_bytes=52_428_800_000, timestamp=FIXTURE_TIMESTAMP
        )
        assert isinstance(quote, PowerupQuote)
        assert str(quote.cpu) == "0.0001 EOS"
        assert str(quote.net) == "0.0001 EOS"
        assert str(quote.total) == "0.0002 EOS"
        assert quote.lease_days == 1

    def test_cpu_only(self, quoter) -> None:
        quote = quoter.quote_powerup(cpu_us=3_456_000_000, timestamp=FIXTURE_TIMESTAMP)
        assert quote.net.is_zero()
        assert str(quote.total) == "0.0051 EOS"

    def test_below_min_fee(self, provider) -> None:
        provider.powerup = make_powerup(min_fee="0.0010 EOS")
        quoter = ResourceQuoter(provider)
        with pytest.raises(BelowMinimumPayment, match="POWERUP") as exc_info:
            quoter.quote_powerup(cpu_us=345_600_000, net_bytes=52_428_800_000)
        assert str(exc_info.value.price) == "0.0002 EOS"
        assert str(exc_info.value.min_payment) == "0.0010 EOS"

    def test_empty_request_below_min_fee(self, quoter) -> None:
        with pytest.raises(BelowMinimumPayment):
            quoter.quote_powerup()

    def test_virtual_block_limit_passed_through(self, quoter) -> None:
        """Block limits only change daily capacity, not the weight of a request"""
        default = quoter.quote_powerup(cpu_us=3_456_000_000)
        halved = quoter.quote_powerup(cpu_us=3_456_000_000, virtual_block_cpu_limit=100_000)
        assert default.total == halved.total


class TestSingleMarketQuotes:
    """Per-market helpers"""

    def test_cpu_ms(self, quoter) -> None:
        assert str(quoter.quote_cpu_ms(345_600)) == "0.0001 EOS"

    def test_net_kb(self, quoter) -> None:
        assert str(quoter.quote_net_kb(52_428_800)) == "0.0001 EOS"

    def test_rex(self, quoter, provider) -> None:
        assert str(quoter.quote_rex(1_000_000)) == "0.0193 EOS"
        assert provider.calls == ["rex", "usage"]

    def test_ram(self, quoter, provider) -> None:
        assert str(quoter.quote_ram(10)) == "2.0203 EOS"
        assert provider.calls == ["ram"]
