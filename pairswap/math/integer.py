"""Integer square root and amount helpers.

Only integer arithmetic is used: every result rounds toward zero.
"""

from pairswap.errors import InvalidInput


def isqrt(n: int) -> int:
    """Compute floor(sqrt(n)) exactly.

    Babylonian iteration seeded at n // 2 + 1. The estimate decreases
    monotonically until it reaches the floor root, at which point the next
    estimate is no longer smaller and the loop stops.

    Args:
        n: Non-negative integer

    Returns:
        The largest integer r with r * r <= n

    Raises:
        InvalidInput: If n is negative or not an integer
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInput(f"isqrt requires an integer, got {type(n).__name__}")
    if n < 0:
        raise InvalidInput(f"isqrt of negative number: {n}")
    if n < 4:
        return 0 if n == 0 else 1

    x = n
    y = n // 2 + 1
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x


def min_amount(a: int, b: int) -> int:
    """Return the smaller of two amounts."""
    return a if a < b else b


def check_amount(name: str, value: int) -> int:
    """Validate a caller-supplied amount.

    Raises:
        InvalidInput: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidInput(f"{name} cannot be negative: {value}")
    return value
