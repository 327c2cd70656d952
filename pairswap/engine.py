"""Pool engine: liquidity provisioning, withdrawal, swaps and price queries.

Every mutating operation runs under its pair's lock and as one atomic unit.
Completed transfers and bookkeeping changes are journaled as they happen;
if any later step fails, the journal is replayed backwards so the caller
observes either the whole operation or none of it.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from pairswap.amm import ConstantProduct, FeeTier, SwapResult, spot_price
from pairswap.amm.liquidity import deposit_amounts, shares_for_deposit, withdrawal_amounts
from pairswap.assets import AssetLedger, InMemoryAssetLedger, ledger_from_env
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.errors import (
    Expired,
    InvalidInput,
    NoLiquidity,
    SlippageExceeded,
    TransferFailed,
)
from pairswap.math import check_amount
from pairswap.pools import PairId, PairRegistry, Pool, resolve, slot_for
from pairswap.tokens import ShareToken

logger = structlog.get_logger()


@dataclass(frozen=True)
class LiquidityResult:
    """Outcome of add_liquidity, in the caller's asset order."""

    used_a: int
    used_b: int
    shares: int


@dataclass(frozen=True)
class WithdrawalResult:
    """Outcome of remove_liquidity, in the caller's asset order."""

    amount_a: int
    amount_b: int


class _Journal:
    """Compensating actions for the steps an operation has completed."""

    def __init__(self) -> None:
        self._undo: list[tuple[str, Callable[[], object]]] = []

    def __len__(self) -> int:
        return len(self._undo)

    def record(self, description: str, action: Callable[[], object]) -> None:
        self._undo.append((description, action))

    def rollback(self) -> None:
        """Run every compensation, newest first, even when one of them fails."""
        while self._undo:
            description, action = self._undo.pop()
            try:
                outcome = action()
            except Exception:
                logger.error("rollback_failed", step=description, exc_info=True)
                continue
            # Ledger compensations report failure by returning False
            if outcome is False:
                logger.error("rollback_failed", step=description)


class Engine:
    """Constant product pool engine for one fee tier.

    Owns its pair registry; nothing is shared through module state. Asset
    movement is delegated to the asset ledger, which the engine calls
    synchronously inside each operation.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        ledger: AssetLedger | None = None,
        registry: PairRegistry | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or DEFAULT_ENGINE_CONFIG
        self.ledger: AssetLedger = ledger if ledger is not None else InMemoryAssetLedger()
        self.registry = registry if registry is not None else PairRegistry()
        self.amm = ConstantProduct(FeeTier(self.config.fee_numerator, self.config.fee_denominator))
        self._clock = clock

    # --- Liquidity ---

    def add_liquidity(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        desired_a: int,
        desired_b: int,
        min_a: int,
        min_b: int,
        recipient: str,
        *,
        deadline: float | None = None,
    ) -> LiquidityResult:
        """Deposit both assets of a pair and mint shares to recipient.

        The first deposit into an empty pool uses both desired amounts and
        sets the pool's initial price. Later deposits are matched to the
        current reserve ratio (see deposit_amounts).

        Args:
            caller: Account the assets are pulled from
            asset_a: First asset of the pair (any order)
            asset_b: Second asset of the pair
            desired_a: Most of asset_a to deposit
            desired_b: Most of asset_b to deposit
            min_a: Least of asset_a the caller accepts to deposit
            min_b: Least of asset_b the caller accepts to deposit
            recipient: Account credited with the minted shares
            deadline: Latest clock() value at which the call is accepted

        Returns:
            LiquidityResult with the amounts used and shares minted

        Raises:
            Expired, IdenticalAssets, InvalidInput, SlippageExceeded,
            ZeroLiquidity, TransferFailed
        """
        self._check_deadline(deadline)
        for name, value in (
            ("desired_a", desired_a),
            ("desired_b", desired_b),
            ("min_a", min_a),
            ("min_b", min_b),
        ):
            check_amount(name, value)
        pair_id = resolve(asset_a, asset_b)

        with self._atomic("add_liquidity", pair_id, create=True) as (pool, journal):
            reserve_a, reserve_b = pool.reserves_for(pair_id, asset_a, asset_b)
            used_a, used_b = deposit_amounts(
                desired_a, desired_b, min_a, min_b, reserve_a, reserve_b
            )
            shares = shares_for_deposit(used_a, used_b, reserve_a, reserve_b, pool.total_shares)

            self._pull(journal, asset_a, caller, used_a)
            self._pull(journal, asset_b, caller, used_b)

            self._journal_pool(journal, pool)
            self._credit_reserve(pool, pair_id, asset_a, used_a)
            self._credit_reserve(pool, pair_id, asset_b, used_b)
            pool.total_shares += shares
            self.registry.share_token(pair_id).mint(recipient, shares)

        logger.info(
            "liquidity_added",
            pair=str(pair_id),
            caller=caller,
            recipient=recipient,
            used_a=used_a,
            used_b=used_b,
            shares=shares,
        )
        return LiquidityResult(used_a=used_a, used_b=used_b, shares=shares)

    def remove_liquidity(
        self,
        caller: str,
        asset_a: str,
        asset_b: str,
        shares: int,
        min_a: int,
        min_b: int,
        recipient: str,
        *,
        deadline: float | None = None,
    ) -> WithdrawalResult:
        """Burn caller's shares and send the matching reserves to recipient.

        Each side is shares * reserve // total_shares; the pool keeps the
        rounding remainder.

        Raises:
            Expired, IdenticalAssets, InvalidInput, InsufficientShares,
            SlippageExceeded, ZeroLiquidity, TransferFailed
        """
        self._check_deadline(deadline)
        check_amount("shares", shares)
        check_amount("min_a", min_a)
        check_amount("min_b", min_b)
        if shares == 0:
            raise InvalidInput("shares must be positive")
        pair_id = resolve(asset_a, asset_b)

        with self._atomic("remove_liquidity", pair_id) as (pool, journal):
            token = self.registry.share_token(pair_id)
            # Burn first: raises InsufficientShares before anything else moves
            token.burn(caller, shares)
            journal.record("restore_shares", lambda: token.mint(caller, shares))

            reserve_a, reserve_b = pool.reserves_for(pair_id, asset_a, asset_b)
            amount_a, amount_b = withdrawal_amounts(shares, reserve_a, reserve_b, pool.total_shares)
            if amount_a < min_a:
                raise SlippageExceeded(
                    f"Withdrawal returns {amount_a} of asset A, minimum is {min_a}"
                )
            if amount_b < min_b:
                raise SlippageExceeded(
                    f"Withdrawal returns {amount_b} of asset B, minimum is {min_b}"
                )

            self._journal_pool(journal, pool)
            self._debit_reserve(pool, pair_id, asset_a, amount_a)
            self._debit_reserve(pool, pair_id, asset_b, amount_b)
            pool.total_shares -= shares

            self._push(journal, asset_a, recipient, amount_a)
            self._push(journal, asset_b, recipient, amount_b)

        logger.info(
            "liquidity_removed",
            pair=str(pair_id),
            caller=caller,
            recipient=recipient,
            shares=shares,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return WithdrawalResult(amount_a=amount_a, amount_b=amount_b)

    # --- Swaps ---

    def swap_exact(
        self,
        caller: str,
        asset_in: str,
        asset_out: str,
        amount_in: int,
        min_amount_out: int,
        recipient: str,
        *,
        deadline: float | None = None,
    ) -> SwapResult:
        """Sell exactly amount_in of asset_in for as much asset_out as the curve gives.

        Raises:
            Expired, IdenticalAssets, InvalidInput (NoLiquidity on an empty
            pool), SlippageExceeded, TransferFailed
        """
        self._check_deadline(deadline)
        check_amount("amount_in", amount_in)
        check_amount("min_amount_out", min_amount_out)
        if amount_in == 0:
            raise InvalidInput("amount_in must be positive")
        pair_id = resolve(asset_in, asset_out)

        with self._atomic("swap_exact", pair_id) as (pool, journal):
            reserve_in, reserve_out = self._swap_reserves(pool, pair_id, asset_in, asset_out)
            amount_out = self.amm.get_amount_out(amount_in, reserve_in, reserve_out)
            if amount_out == 0:
                raise InvalidInput(f"Swapping {amount_in} yields no output")
            if amount_out < min_amount_out:
                raise SlippageExceeded(
                    f"Swap returns {amount_out}, minimum is {min_amount_out}"
                )
            result = SwapResult(
                asset_in=asset_in, asset_out=asset_out, amount_in=amount_in, amount_out=amount_out
            )
            self._settle_swap(journal, pool, pair_id, caller, recipient, result)

        self._log_swap(pair_id, caller, recipient, result)
        return result

    def swap_for_exact(
        self,
        caller: str,
        asset_in: str,
        asset_out: str,
        amount_out: int,
        max_amount_in: int,
        recipient: str,
        *,
        deadline: float | None = None,
    ) -> SwapResult:
        """Buy exactly amount_out of asset_out, paying at most max_amount_in.

        Raises:
            Expired, IdenticalAssets, InvalidInput (NoLiquidity on an empty
            pool), SlippageExceeded, TransferFailed
        """
        self._check_deadline(deadline)
        check_amount("amount_out", amount_out)
        check_amount("max_amount_in", max_amount_in)
        if amount_out == 0:
            raise InvalidInput("amount_out must be positive")
        pair_id = resolve(asset_in, asset_out)

        with self._atomic("swap_for_exact", pair_id) as (pool, journal):
            reserve_in, reserve_out = self._swap_reserves(pool, pair_id, asset_in, asset_out)
            amount_in = self.amm.get_amount_in(amount_out, reserve_in, reserve_out)
            if amount_in > max_amount_in:
                raise SlippageExceeded(f"Swap costs {amount_in}, maximum is {max_amount_in}")
            result = SwapResult(
                asset_in=asset_in, asset_out=asset_out, amount_in=amount_in, amount_out=amount_out
            )
            self._settle_swap(journal, pool, pair_id, caller, recipient, result)

        self._log_swap(pair_id, caller, recipient, result)
        return result

    # --- Queries ---

    def quote_swap(self, asset_in: str, asset_out: str, amount_in: int) -> SwapResult:
        """Estimate swap_exact against current reserves without executing it."""
        check_amount("amount_in", amount_in)
        pair_id = resolve(asset_in, asset_out)
        reserve_in, reserve_out = self._read_reserves(pair_id, asset_in, asset_out)
        amount_out = self.amm.get_amount_out(amount_in, reserve_in, reserve_out)
        return SwapResult(
            asset_in=asset_in, asset_out=asset_out, amount_in=amount_in, amount_out=amount_out
        )

    def spot_price(self, asset_base: str, asset_quote: str) -> int:
        """Quote units per base unit, scaled by config.price_scale.

        Raises:
            NoLiquidity: If the pool is empty
        """
        pair_id = resolve(asset_base, asset_quote)
        reserve_base, reserve_quote = self._read_reserves(pair_id, asset_base, asset_quote)
        return spot_price(reserve_base, reserve_quote, self.config.price_scale)

    def quote_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Pure constant product quote, independent of any pool.

        Raises:
            InvalidInput: If any argument is zero
        """
        return self.amm.get_amount_out(amount_in, reserve_in, reserve_out)

    def reserves(self, asset_a: str, asset_b: str) -> tuple[int, int]:
        """Current reserves ordered as the caller named the assets."""
        pair_id = resolve(asset_a, asset_b)
        if self.registry.get(pair_id) is None:
            return 0, 0
        with self.registry.locked(pair_id) as pool:
            return pool.reserves_for(pair_id, asset_a, asset_b)

    def total_shares(self, asset_a: str, asset_b: str) -> int:
        pool = self.registry.get(resolve(asset_a, asset_b))
        return 0 if pool is None else pool.total_shares

    def share_token(self, asset_a: str, asset_b: str) -> ShareToken:
        """The share token of the pair's pool.

        Raises:
            NoLiquidity: If no deposit has ever created the pair's pool
        """
        pair_id = resolve(asset_a, asset_b)
        token = self.registry.find_share_token(pair_id)
        if token is None:
            raise NoLiquidity(f"No pool for {pair_id}")
        return token

    def share_balance(self, asset_a: str, asset_b: str, account: str) -> tuple[int, int]:
        """(balance of account, total supply) of the pair's shares; zeros for an unknown pair."""
        token = self.registry.find_share_token(resolve(asset_a, asset_b))
        if token is None:
            return 0, 0
        return token.balance_of(account), token.total_supply

    def pairs(self) -> list[PairId]:
        return self.registry.pairs()

    # --- Internals ---

    def _check_deadline(self, deadline: float | None) -> None:
        if deadline is not None and self._clock() > deadline:
            raise Expired(f"Deadline {deadline} has passed")

    @contextmanager
    def _atomic(
        self, operation: str, pair_id: PairId, *, create: bool = False
    ) -> Iterator[tuple[Pool, _Journal]]:
        """Run an operation under the pair lock, undoing completed steps on failure.

        The original error always propagates, whatever the rollback runs into.
        """
        journal = _Journal()
        with self.registry.locked(pair_id, create=create) as pool:
            try:
                yield pool, journal
            except Exception as err:
                if len(journal):
                    logger.warning(
                        "operation_rolled_back",
                        operation=operation,
                        pair=str(pair_id),
                        steps=len(journal),
                        error=type(err).__name__,
                    )
                    journal.rollback()
                raise

    def _read_reserves(self, pair_id: PairId, asset_a: str, asset_b: str) -> tuple[int, int]:
        with self.registry.locked(pair_id) as pool:
            if pool.is_empty:
                raise NoLiquidity(f"Pool {pair_id} holds no liquidity")
            return pool.reserves_for(pair_id, asset_a, asset_b)

    def _swap_reserves(
        self, pool: Pool, pair_id: PairId, asset_in: str, asset_out: str
    ) -> tuple[int, int]:
        if pool.is_empty:
            raise NoLiquidity(f"Pool {pair_id} holds no liquidity")
        return pool.reserves_for(pair_id, asset_in, asset_out)

    def _settle_swap(
        self,
        journal: _Journal,
        pool: Pool,
        pair_id: PairId,
        caller: str,
        recipient: str,
        result: SwapResult,
    ) -> None:
        self._pull(journal, result.asset_in, caller, result.amount_in)
        self._push(journal, result.asset_out, recipient, result.amount_out)
        self._journal_pool(journal, pool)
        # Slots re-derived here, not carried over from the read
        self._credit_reserve(pool, pair_id, result.asset_in, result.amount_in)
        self._debit_reserve(pool, pair_id, result.asset_out, result.amount_out)

    def _log_swap(self, pair_id: PairId, caller: str, recipient: str, result: SwapResult) -> None:
        logger.info(
            "swap_executed",
            pair=str(pair_id),
            caller=caller,
            recipient=recipient,
            asset_in=result.asset_in,
            asset_out=result.asset_out,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
        )

    @staticmethod
    def _journal_pool(journal: _Journal, pool: Pool) -> None:
        snapshot = pool.snapshot()
        journal.record("restore_pool", lambda: pool.restore(snapshot))

    @staticmethod
    def _credit_reserve(pool: Pool, pair_id: PairId, asset: str, amount: int) -> None:
        slot = slot_for(pair_id, asset)
        pool.set_reserve(slot, pool.reserve(slot) + amount)

    @staticmethod
    def _debit_reserve(pool: Pool, pair_id: PairId, asset: str, amount: int) -> None:
        slot = slot_for(pair_id, asset)
        pool.set_reserve(slot, pool.reserve(slot) - amount)

    def _pull(self, journal: _Journal, asset: str, account: str, amount: int) -> None:
        self._transfer("pull", self.ledger.pull, asset, account, amount)
        journal.record(f"refund_{asset}", lambda: self.ledger.push(asset, account, amount))

    def _push(self, journal: _Journal, asset: str, account: str, amount: int) -> None:
        self._transfer("push", self.ledger.push, asset, account, amount)
        journal.record(f"reclaim_{asset}", lambda: self.ledger.pull(asset, account, amount))

    @staticmethod
    def _transfer(
        direction: str, move: Callable[[str, str, int], bool], asset: str, account: str, amount: int
    ) -> None:
        """Call the ledger; a False return and a raised error both become TransferFailed."""
        try:
            moved = move(asset, account, amount)
        except Exception as err:
            logger.warning(
                "transfer_failed",
                direction=direction,
                asset=asset,
                account=account,
                amount=amount,
                error=repr(err),
            )
            raise TransferFailed(
                f"Ledger {direction} of {amount} {asset} for {account} raised {err!r}"
            ) from err
        if not moved:
            logger.warning(
                "transfer_failed", direction=direction, asset=asset, account=account, amount=amount
            )
            raise TransferFailed(f"Ledger refused {direction} of {amount} {asset} for {account}")


def get_default_engine() -> Engine:
    """Engine built from PAIRSWAP_* environment configuration."""
    return Engine(config=EngineConfig.from_env(), ledger=ledger_from_env())
