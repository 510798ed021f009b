"""Pricing — quote engines of the three resource markets.

- BondingCurvePricer: primary leasing market (CPU / NET curves)
- BancorExchangeModel: legacy linear staking pool
- ConstantProductExchange: legacy constant-product market
"""

from .bancor import BancorExchangeModel
from .bonding_curve import BondingCurvePricer, cpu_pricer, net_pricer
from .constant_product import ConstantProductExchange
from .decay import determine_adjusted_utilization
from .options import PriceOptions
from .quoter import ChainStateProvider, PowerupQuote, ResourceQuoter

__all__ = [
    "BondingCurvePricer",
    "cpu_pricer",
    "net_pricer",
    "BancorExchangeModel",
    "ConstantProductExchange",
    "determine_adjusted_utilization",
    "PriceOptions",
    "ChainStateProvider",
    "PowerupQuote",
    "ResourceQuoter",
]
