"""Liquidity provisioning and withdrawal math.

All divisions round toward zero. On deposit that means the depositor never
receives more shares than the assets they add are worth; on withdrawal the
pool keeps the rounding remainder.
"""

from __future__ import annotations

from pairswap.errors import SlippageExceeded, ZeroLiquidity
from pairswap.math import isqrt, min_amount
from pairswap.safe_int import S


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B worth amount_a of A at the current reserve ratio."""
    return (S(amount_a) * reserve_b // reserve_a).value


def deposit_amounts(
    desired_a: int,
    desired_b: int,
    min_a: int,
    min_b: int,
    reserve_a: int,
    reserve_b: int,
) -> tuple[int, int]:
    """Choose how much of each asset a deposit actually uses.

    An empty pool takes both desired amounts and so sets its initial price.
    Otherwise leg A is maxed out first; only if the matching B amount exceeds
    desired_b is leg B maxed out instead. At optimal_b == desired_b the first
    branch applies and min_b is the bound that governs.

    Args:
        desired_a: Most of asset A the caller will deposit
        desired_b: Most of asset B the caller will deposit
        min_a: Least of asset A the caller accepts to deposit
        min_b: Least of asset B the caller accepts to deposit
        reserve_a: Pool reserve of asset A
        reserve_b: Pool reserve of asset B

    Returns:
        Tuple of (used_a, used_b)

    Raises:
        SlippageExceeded: If the ratio-matched amount is below its minimum
    """
    if reserve_a == 0 and reserve_b == 0:
        return desired_a, desired_b

    optimal_b = quote(desired_a, reserve_a, reserve_b)
    if optimal_b <= desired_b:
        if optimal_b < min_b:
            raise SlippageExceeded(f"Deposit would use {optimal_b} of asset B, minimum is {min_b}")
        return desired_a, optimal_b

    optimal_a = quote(desired_b, reserve_b, reserve_a)
    if optimal_a < min_a:
        raise SlippageExceeded(f"Deposit would use {optimal_a} of asset A, minimum is {min_a}")
    return optimal_a, desired_b


def shares_for_deposit(
    used_a: int,
    used_b: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> int:
    """Shares minted for a deposit.

    First deposit: floor(sqrt(used_a * used_b)). Later deposits take the
    smaller of the two proportional amounts, so a lopsided deposit cannot
    dilute existing holders.

    Raises:
        ZeroLiquidity: If the deposit rounds down to zero shares
    """
    if total_shares == 0:
        shares = isqrt(used_a * used_b)
    else:
        shares = min_amount(
            (S(used_a) * total_shares // reserve_a).value,
            (S(used_b) * total_shares // reserve_b).value,
        )
    if shares == 0:
        raise ZeroLiquidity(f"Deposit of ({used_a}, {used_b}) mints no shares")
    return shares


def withdrawal_amounts(
    shares: int,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
) -> tuple[int, int]:
    """Assets returned for burning shares, rounded down on both sides.

    Raises:
        ZeroLiquidity: If both amounts round down to zero
    """
    amount_a = (S(shares) * reserve_a // total_shares).value
    amount_b = (S(shares) * reserve_b // total_shares).value
    if amount_a == 0 and amount_b == 0:
        raise ZeroLiquidity(f"Burning {shares} shares returns nothing")
    return amount_a, amount_b
