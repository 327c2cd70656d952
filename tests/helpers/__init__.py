"""Test helpers module for shared test utilities.

- constants: Asset identifiers, accounts and common amounts
- factories: Engine, ledger and pool factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    DAI,
    NOW,
    STARTING_BALANCE,
    USDC,
    WETH,
)
from tests.helpers.factories import (
    FixedClock,
    FlakyLedger,
    RaisingLedger,
    fund,
    make_engine,
    seed_pool,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "ALICE",
    "BOB",
    "CAROL",
    "NOW",
    "STARTING_BALANCE",
    # Factories
    "FixedClock",
    "FlakyLedger",
    "RaisingLedger",
    "fund",
    "make_engine",
    "seed_pool",
]
