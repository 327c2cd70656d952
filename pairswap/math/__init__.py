"""Integer math helpers for the pool ledger."""

from pairswap.math.integer import check_amount, isqrt, min_amount

__all__ = ["check_amount", "isqrt", "min_amount"]
