"""
Market State — Read-only snapshots of the three resource markets

Immutable Pydantic models, one per on-chain table row:
- ResourceCurveState       — one bonding curve (powerup CPU or NET)
- PrimaryMarketState       — powerup state: NET + CPU curves, lease days, min fee
- LegacyLinearMarketState  — REX pool (bancor-like staking market)
- LegacyExchangeMarketState — RAM market (constant-product connectors)

Snapshots are created by the chain-state provider from a point-in-time
read, passed into pricer operations and never mutated. Field names follow
the chain ABI; normalized names (lease_days, min_fee, total_supply,
proceeds, counter) are accepted alongside the ABI names.

Raw JSON rows are accepted as returned by get_table_rows: assets as
"1.0000 EOS", timestamps as "2021-03-26T18:46:36" (UTC), int64 values as
numeric strings. Row shapes are described by contracts/schema/*.json.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from src.core.domain.money import Asset, Symbol
from src.core.math.numerical_safeguards import validate_finite


# =============================================================================
# HELPERS
# =============================================================================


def to_epoch_seconds(value: Any) -> Any:
    """
    Convert a chain time_point_sec to whole seconds since epoch.

    Accepts ints, datetimes and ISO strings without timezone (chain
    timestamps are UTC). Sub-second parts are truncated. Anything else is
    passed through for pydantic to reject.
    """
    if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
        value = datetime.fromisoformat(value.strip().rstrip("Z"))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return value


# =============================================================================
# BONDING CURVE STATE
# =============================================================================


class ResourceCurveState(BaseModel):
    """
    Bonding curve state of one leasable resource.

    Invariant once decay has caught up: adjusted_utilization >= utilization.
    decay_secs is not constrained here; a non-positive value is reported
    by the decay model as InvalidDecayConstant.
    """

    version: int = Field(0, ge=0, description="Row version")
    weight: int = Field(..., gt=0, description="Total capacity weight")
    weight_ratio: int = Field(..., ge=0, description="Current weight ratio (×100 scaled)")
    assumed_stake_weight: int = Field(0, ge=0, description="Assumed stake weight")
    initial_weight_ratio: int = Field(..., ge=0, description="Weight ratio at shift start")
    target_weight_ratio: int = Field(..., gt=0, description="Weight ratio at shift end")
    initial_timestamp: int = Field(..., ge=0, description="Capacity shift start (epoch s)")
    target_timestamp: int = Field(..., ge=0, description="Capacity shift end (epoch s)")
    exponent: float = Field(..., gt=0, description="Curve steepness")
    decay_secs: int = Field(..., description="Utilization decay constant (s)")
    min_price: Asset = Field(..., description="Price floor for 100% of capacity")
    max_price: Asset = Field(..., description="Price ceiling for 100% of capacity")
    utilization: int = Field(..., ge=0, description="Consumed weight")
    adjusted_utilization: int = Field(..., ge=0, description="Decayed utilization baseline")
    utilization_timestamp: int = Field(..., ge=0, description="Last utilization update (epoch s)")

    model_config = {"frozen": True}

    @field_validator(
        "initial_timestamp", "target_timestamp", "utilization_timestamp", mode="before"
    )
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        return to_epoch_seconds(value)

    @field_validator("exponent")
    @classmethod
    def _check_exponent(cls, value: float) -> float:
        validate_finite(value, "exponent")
        return value

    @model_validator(mode="after")
    def _check_prices(self) -> "ResourceCurveState":
        if self.min_price.symbol != self.max_price.symbol:
            raise ValueError(
                f"min_price and max_price symbols differ: "
                f"{self.min_price.symbol} vs {self.max_price.symbol}"
            )
        if self.min_price.units < 0 or self.max_price.units < self.min_price.units:
            raise ValueError(
                f"Expected 0 <= min_price <= max_price, got "
                f"{self.min_price} / {self.max_price}"
            )
        return self

    @property
    def symbol(self) -> Symbol:
        return self.min_price.symbol

    @property
    def allocated(self) -> Decimal:
        """Share of capacity already shifted to the market: 1 - ratio/target/100."""
        return 1 - Decimal(self.weight_ratio) / Decimal(self.target_weight_ratio) / 100

    @property
    def reserved(self) -> Decimal:
        """Share of the curve currently utilized: utilization / weight."""
        return Decimal(self.utilization) / Decimal(self.weight)


# =============================================================================
# PRIMARY MARKET (POWERUP)
# =============================================================================


class PrimaryMarketState(BaseModel):
    """
    Primary leasing market snapshot.
    """

    version: int = Field(0, ge=0, description="Row version")
    net: ResourceCurveState = Field(..., description="Bandwidth curve")
    cpu: ResourceCurveState = Field(..., description="Compute-time curve")
    lease_days: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("lease_days", "powerup_days"),
        description="Lease duration (days)",
    )
    min_fee: Asset = Field(
        ...,
        validation_alias=AliasChoices("min_fee", "min_powerup_fee"),
        description="Minimum total fee per lease",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def curve(self, name: str) -> ResourceCurveState:
        """Return the curve of the named resource ('cpu' or 'net')."""
        if name == "cpu":
            return self.cpu
        if name == "net":
            return self.net
        raise ValueError(f"Unknown resource: {name!r}")


# =============================================================================
# LEGACY LINEAR MARKET (REX)
# =============================================================================


class LegacyLinearMarketState(BaseModel):
    """
    Bancor-like staking pool snapshot.
    """

    version: int = Field(0, ge=0, description="Row version")
    total_lent: Asset = Field(..., description="Tokens lent out as resources")
    total_unlent: Asset = Field(..., description="Tokens available to lend")
    total_rent: Asset = Field(..., description="Virtual rent balance")
    total_lendable: Asset = Field(..., description="lent + unlent")
    total_supply: Asset = Field(
        ...,
        validation_alias=AliasChoices("total_supply", "total_rex"),
        description="Outstanding pool shares",
    )
    proceeds: Asset = Field(
        ...,
        validation_alias=AliasChoices("proceeds", "namebid_proceeds"),
        description="Accumulated proceeds",
    )
    counter: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("counter", "loan_num"),
        description="Loan counter",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def _check_balances(self) -> "LegacyLinearMarketState":
        for name in ("total_lent", "total_unlent", "total_rent", "total_lendable", "total_supply"):
            if getattr(self, name).units < 0:
                raise ValueError(f"{name} must be non-negative")
        return self

    @property
    def symbol(self) -> Symbol:
        return self.total_lent.symbol

    @property
    def precision(self) -> int:
        return self.total_lent.symbol.precision


# =============================================================================
# LEGACY EXCHANGE MARKET (RAM)
# =============================================================================


class Connector(BaseModel):
    """
    One side of a constant-product market.
    """

    balance: Asset = Field(..., description="Pool balance")
    weight: float = Field(..., ge=0, description="Connector weight")

    model_config = {"frozen": True}


class LegacyExchangeMarketState(BaseModel):
    """
    Constant-product market snapshot (base resource pool vs quote token pool).
    """

    supply: Asset = Field(..., description="Market token supply")
    base: Connector = Field(..., description="Resource pool (e.g. RAM bytes)")
    quote: Connector = Field(..., description="Token pool")

    model_config = {"frozen": True}
