"""Error categories raised by the pool engine.

Every error aborts the enclosing operation with no partial effect and is
reported synchronously to the caller. Nothing is retried internally.
"""


class AMMError(Exception):
    """Base error for pool engine operations."""

    code = "AMMError"


class Expired(AMMError):
    """The caller-supplied deadline has passed."""

    code = "Expired"


class IdenticalAssets(AMMError):
    """A pair was requested with two identical asset identifiers."""

    code = "IdenticalAssets"


class InvalidInput(AMMError):
    """A zero or otherwise out-of-domain argument."""

    code = "InvalidInput"


class NoLiquidity(InvalidInput):
    """The pool for the requested pair holds no liquidity."""

    code = "NoLiquidity"


class SlippageExceeded(AMMError):
    """A computed amount violates a caller-supplied bound."""

    code = "SlippageExceeded"


class InsufficientShares(AMMError):
    """Share balance is smaller than the amount being burned or moved."""

    code = "InsufficientShares"


class InsufficientAllowance(AMMError):
    """Spender allowance is smaller than the amount being moved."""

    code = "InsufficientAllowance"


class ZeroLiquidity(AMMError):
    """A liquidity computation rounded down to nothing."""

    code = "ZeroLiquidity"


class TransferFailed(AMMError):
    """The asset ledger reported failure on a pull or push."""

    code = "TransferFailed"


__all__ = [
    "AMMError",
    "Expired",
    "IdenticalAssets",
    "InvalidInput",
    "NoLiquidity",
    "SlippageExceeded",
    "InsufficientShares",
    "InsufficientAllowance",
    "ZeroLiquidity",
    "TransferFailed",
]
