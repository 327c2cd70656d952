"""Tests for PairRegistry."""

import threading
import time

import pytest

from pairswap.errors import NoLiquidity
from pairswap.pools import PairRegistry, Pool, resolve
from tests.helpers import DAI, USDC, WETH


class TestPairRegistry:
    """Tests for pool storage and lookup."""

    def test_get_or_create_zero_initialized(self):
        registry = PairRegistry()
        pool = registry.get_or_create(resolve(WETH, USDC))
        assert pool == Pool()
        assert len(registry) == 1

    def test_get_or_create_returns_same_record(self):
        """Both argument orders reach the same record."""
        registry = PairRegistry()
        pool = registry.get_or_create(resolve(WETH, USDC))
        pool.reserve_x = 5
        assert registry.get_or_create(resolve(USDC, WETH)) is pool

    def test_get_missing_returns_none(self):
        registry = PairRegistry()
        assert registry.get(resolve(WETH, USDC)) is None
        assert resolve(WETH, USDC) not in registry

    def test_share_token_per_pair(self):
        """Each pair gets its own share token, created with its pool."""
        registry = PairRegistry()
        registry.get_or_create(resolve(WETH, USDC))
        registry.get_or_create(resolve(WETH, DAI))
        token_a = registry.share_token(resolve(WETH, USDC))
        token_b = registry.share_token(resolve(WETH, DAI))
        assert token_a is not token_b
        assert token_a is registry.share_token(resolve(USDC, WETH))

    def test_share_token_lookup_does_not_create(self):
        registry = PairRegistry()
        assert registry.find_share_token(resolve(WETH, USDC)) is None
        with pytest.raises(KeyError):
            registry.share_token(resolve(WETH, USDC))
        assert len(registry) == 0

    def test_pairs_sorted(self):
        registry = PairRegistry()
        registry.get_or_create(resolve(WETH, USDC))
        registry.get_or_create(resolve(DAI, USDC))
        assert registry.pairs() == sorted([resolve(WETH, USDC), resolve(DAI, USDC)])


class TestPairLocks:
    """Tests for per-pair mutual exclusion."""

    def test_locked_yields_pool(self):
        registry = PairRegistry()
        with registry.locked(resolve(WETH, USDC), create=True) as pool:
            assert pool is registry.get(resolve(WETH, USDC))

    def test_locked_unknown_pair_raises(self):
        registry = PairRegistry()
        with pytest.raises(NoLiquidity):
            with registry.locked(resolve(WETH, USDC)):
                pass
        assert registry.pairs() == []

    def test_same_pair_serializes(self):
        """Read-modify-write under the pair lock never loses an update."""
        registry = PairRegistry()
        pair_id = resolve(WETH, USDC)

        def bump() -> None:
            for _ in range(200):
                with registry.locked(pair_id, create=True) as pool:
                    current = pool.reserve_x
                    time.sleep(0)
                    pool.reserve_x = current + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert registry.get(pair_id).reserve_x == 800

    def test_different_pairs_do_not_block(self):
        """Holding one pair's lock leaves other pairs available."""
        registry = PairRegistry()
        entered = threading.Event()

        def other_pair() -> None:
            with registry.locked(resolve(WETH, DAI), create=True):
                entered.set()

        with registry.locked(resolve(WETH, USDC), create=True):
            thread = threading.Thread(target=other_pair)
            thread.start()
            assert entered.wait(timeout=5)
        thread.join()
