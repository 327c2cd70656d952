"""Pricing curves and liquidity math."""

from pairswap.amm.base import AMM, SwapResult
from pairswap.amm.constant_product import ConstantProduct, FeeTier, spot_price
from pairswap.amm.liquidity import deposit_amounts, shares_for_deposit, withdrawal_amounts

__all__ = [
    "AMM",
    "SwapResult",
    "ConstantProduct",
    "FeeTier",
    "spot_price",
    "deposit_amounts",
    "shares_for_deposit",
    "withdrawal_amounts",
]
