"""Engine configuration."""

import os
from dataclasses import dataclass

from pairswap.constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR, PRICE_SCALE


@dataclass(frozen=True)
class EngineConfig:
    """Configuration of one pool family.

    The fee tier applies to every pool owned by an engine; it is not
    per-pool state.

    Attributes:
        fee_numerator: Share of the input amount that trades (997 for 0.3%)
        fee_denominator: Fee base (1000). Equal numerator and denominator
            give a fee-less pool family.
        price_scale: Fixed-point scale used by spot price queries (1e18)
    """

    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR
    price_scale: int = PRICE_SCALE

    def __post_init__(self) -> None:
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive: {self.fee_denominator}")
        if not 0 < self.fee_numerator <= self.fee_denominator:
            raise ValueError(
                f"fee_numerator must be in (0, {self.fee_denominator}]: {self.fee_numerator}"
            )
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive: {self.price_scale}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from PAIRSWAP_* environment variables."""
        return cls(
            fee_numerator=int(os.environ.get("PAIRSWAP_FEE_NUMERATOR", DEFAULT_FEE_NUMERATOR)),
            fee_denominator=int(
                os.environ.get("PAIRSWAP_FEE_DENOMINATOR", DEFAULT_FEE_DENOMINATOR)
            ),
            price_scale=int(os.environ.get("PAIRSWAP_PRICE_SCALE", PRICE_SCALE)),
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
