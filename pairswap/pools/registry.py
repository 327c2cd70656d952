"""Pair registry: one pool record and one share token per canonical pair.

The registry is an explicit mapping owned by a single engine. Each pair has
its own lock, so operations on the same pair serialize while operations on
different pairs proceed independently.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from pairswap.errors import NoLiquidity
from pairswap.pools.pair import PairId
from pairswap.pools.types import Pool
from pairswap.tokens import ShareToken

logger = structlog.get_logger()


class PairRegistry:
    """Registry of pool records keyed by canonical pair id."""

    def __init__(self) -> None:
        self._pools: dict[PairId, Pool] = {}
        self._share_tokens: dict[PairId, ShareToken] = {}
        self._locks: dict[PairId, threading.RLock] = {}
        # Guards creation of the per-pair entries above
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, pair_id: object) -> bool:
        return pair_id in self._pools

    def get(self, pair_id: PairId) -> Pool | None:
        return self._pools.get(pair_id)

    def get_or_create(self, pair_id: PairId) -> Pool:
        """Return the pair's pool record, creating a zeroed one if needed."""
        pool = self._pools.get(pair_id)
        if pool is not None:
            return pool
        with self._registry_lock:
            pool = self._pools.get(pair_id)
            if pool is None:
                pool = Pool()
                self._share_tokens[pair_id] = ShareToken(f"{pair_id}-LP")
                self._locks[pair_id] = threading.RLock()
                # Published last: a visible pool always has its token and lock
                self._pools[pair_id] = pool
                logger.debug("pool_created", pair=str(pair_id))
        return pool

    def share_token(self, pair_id: PairId) -> ShareToken:
        """Return the share token created alongside the pair's pool.

        Raises:
            KeyError: If the pair has no pool record
        """
        return self._share_tokens[pair_id]

    def find_share_token(self, pair_id: PairId) -> ShareToken | None:
        return self._share_tokens.get(pair_id)

    @contextmanager
    def locked(self, pair_id: PairId, *, create: bool = False) -> Iterator[Pool]:
        """Hold the pair's lock and yield its pool record.

        Only create=True makes a record for an unknown pair; otherwise an
        unknown pair raises NoLiquidity.
        """
        if create:
            pool = self.get_or_create(pair_id)
        else:
            pool = self._pools.get(pair_id)
            if pool is None:
                raise NoLiquidity(f"No pool for {pair_id}")
        with self._locks[pair_id]:
            yield pool

    def pairs(self) -> list[PairId]:
        """All pairs that have a pool record, in canonical order."""
        return sorted(self._pools)
