"""
Money — Asset amounts with an explicit symbol descriptor

An Asset (MoneyAmount) is an integer magnitude in the smallest unit of its
symbol plus the symbol itself (decimal precision and ticker). This mirrors
the on-chain `asset` type: "1.0000 EOS" is units=10000 with symbol 4,EOS.

Immutable Pydantic models. Accept the chain's JSON encodings:
- Symbol: "4,EOS" or {"precision": 4, "code": "EOS"}
- Asset:  "1.0000 EOS" or {"units": 10000, "symbol": ...}
"""

import re
from decimal import Decimal
from typing import Any, Final, Literal

from pydantic import BaseModel, Field, model_validator

from src.core.math.fixed_point import ceil_to_int, decimal_context, floor_to_int

# =============================================================================
# CONSTANTS
# =============================================================================

# Largest precision accepted by the chain's symbol type
MAX_SYMBOL_PRECISION: Final[int] = 18

_ASSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\s*(-)?(\d+)(?:\.(\d+))?\s+([A-Z]{1,7})\s*$"
)
_SYMBOL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*(\d+)\s*,\s*([A-Z]{1,7})\s*$")

Rounding = Literal["up", "down"]


# =============================================================================
# SYMBOL
# =============================================================================


class Symbol(BaseModel):
    """
    Asset symbol: decimal precision plus ticker.
    """

    precision: int = Field(
        ..., ge=0, le=MAX_SYMBOL_PRECISION, description="Number of decimal places"
    )
    code: str = Field(..., pattern=r"^[A-Z]{1,7}$", description="Ticker, e.g. 'EOS'")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _parse_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            match = _SYMBOL_PATTERN.match(data)
            if match is None:
                raise ValueError(f"Invalid symbol string: {data!r}")
            return {"precision": int(match.group(1)), "code": match.group(2)}
        return data

    @property
    def scale(self) -> int:
        """10**precision — number of smallest units in one whole token."""
        return 10**self.precision

    def __str__(self) -> str:
        return f"{self.precision},{self.code}"


# =============================================================================
# ASSET
# =============================================================================


class Asset(BaseModel):
    """
    Money amount: integer units of a symbol.

    All arithmetic callers see is done on `units`; `value` is the exact
    Decimal equivalent (units / 10**precision) for display and ratios.
    """

    units: int = Field(..., description="Magnitude in smallest units")
    symbol: Symbol = Field(..., description="Precision and ticker")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _parse_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            match = _ASSET_PATTERN.match(data)
            if match is None:
                raise ValueError(f"Invalid asset string: {data!r}")
            sign, whole, fractional, code = match.groups()
            fractional = fractional or ""
            units = int(whole + fractional)
            if sign:
                units = -units
            return {
                "units": units,
                "symbol": {"precision": len(fractional), "code": code},
            }
        return data

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_units(cls, units: int, symbol: Symbol | str) -> "Asset":
        """Build an asset from a raw smallest-unit magnitude."""
        return cls(units=units, symbol=symbol)

    @classmethod
    def from_decimal(
        cls, value: Decimal, symbol: Symbol | str, rounding: Rounding
    ) -> "Asset":
        """
        Build an asset from a Decimal amount of whole tokens.

        The rounding direction is mandatory: prices round "up", amounts
        paid out to the requester round "down".

        Args:
            value: Amount in whole tokens (e.g. Decimal("0.00015"))
            symbol: Target symbol
            rounding: "up" (ceiling) or "down" (floor)

        Returns:
            Asset with units rounded to the symbol's precision
        """
        if not isinstance(symbol, Symbol):
            symbol = Symbol.model_validate(symbol)
        with decimal_context():
            scaled = value.scaleb(symbol.precision)
        if rounding == "up":
            units = ceil_to_int(scaled)
        elif rounding == "down":
            units = floor_to_int(scaled)
        else:
            raise ValueError(f"rounding must be 'up' or 'down', got {rounding!r}")
        return cls(units=units, symbol=symbol)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Decimal:
        """Exact amount in whole tokens."""
        return Decimal(self.units).scaleb(-self.symbol.precision)

    @property
    def precision(self) -> int:
        return self.symbol.precision

    def is_zero(self) -> bool:
        return self.units == 0

    def _check_symbol(self, other: "Asset") -> None:
        if other.symbol != self.symbol:
            raise ValueError(
                f"Symbol mismatch: {self.symbol} vs {other.symbol}"
            )

    def __lt__(self, other: "Asset") -> bool:
        self._check_symbol(other)
        return self.units < other.units

    def __le__(self, other: "Asset") -> bool:
        self._check_symbol(other)
        return self.units <= other.units

    def __gt__(self, other: "Asset") -> bool:
        self._check_symbol(other)
        return self.units > other.units

    def __ge__(self, other: "Asset") -> bool:
        self._check_symbol(other)
        return self.units >= other.units

    def __str__(self) -> str:
        sign = "-" if self.units < 0 else ""
        digits = str(abs(self.units))
        precision = self.symbol.precision
        if precision == 0:
            amount = digits
        else:
            digits = digits.rjust(precision + 1, "0")
            amount = f"{digits[:-precision]}.{digits[-precision:]}"
        return f"{sign}{amount} {self.symbol.code}"


__all__ = [
    "MAX_SYMBOL_PRECISION",
    "Asset",
    "Symbol",
]
