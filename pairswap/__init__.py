"""pairswap - constant product pool engine."""

from pairswap.config import EngineConfig
from pairswap.engine import Engine, LiquidityResult, WithdrawalResult, get_default_engine

__version__ = "0.1.0"
__all__ = [
    "Engine",
    "EngineConfig",
    "LiquidityResult",
    "WithdrawalResult",
    "get_default_engine",
    "__version__",
]
