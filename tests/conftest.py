"""Pytest configuration and fixtures."""

import pytest

from pairswap import Engine
from tests.helpers import FixedClock, FlakyLedger, RaisingLedger, make_engine


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def engine(clock: FixedClock) -> Engine:
    """Engine with a 0.3% fee whose test accounts hold every test asset."""
    return make_engine(clock=clock)


@pytest.fixture
def fee_less_engine(clock: FixedClock) -> Engine:
    return make_engine(fee_numerator=1, fee_denominator=1, clock=clock)


@pytest.fixture
def flaky_ledger() -> FlakyLedger:
    return FlakyLedger()


@pytest.fixture
def flaky_engine(flaky_ledger: FlakyLedger, clock: FixedClock) -> Engine:
    """Engine whose ledger can be told to refuse transfers."""
    return make_engine(ledger=flaky_ledger, clock=clock)


@pytest.fixture
def raising_ledger() -> RaisingLedger:
    return RaisingLedger()


@pytest.fixture
def raising_engine(raising_ledger: RaisingLedger, clock: FixedClock) -> Engine:
    """Engine whose ledger can be told to raise instead of refusing."""
    return make_engine(ledger=raising_ledger, clock=clock)
