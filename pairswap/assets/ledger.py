"""Asset-ledger collaborator.

The engine moves pooled assets only through this interface. A ledger
reports failure by returning False; it never raises for an ordinary
refusal such as an insufficient balance.
"""

from __future__ import annotations

import importlib
import os
import threading
from typing import Protocol, runtime_checkable

import structlog

from pairswap.constants import POOL_CUSTODY_ACCOUNT
from pairswap.math import check_amount
from pairswap.models.types import normalize_asset

logger = structlog.get_logger()


@runtime_checkable
class AssetLedger(Protocol):
    """Transfers of pooled assets in and out of pool custody."""

    def pull(self, asset: str, account: str, amount: int) -> bool:
        """Move amount of asset from a (pre-authorizing) account into custody."""
        ...

    def push(self, asset: str, account: str, amount: int) -> bool:
        """Move amount of asset out of custody to account."""
        ...


class InMemoryAssetLedger:
    """Balances of any number of assets, held in memory.

    Pooled assets sit in a custody account. Pulls fail when the account's
    balance is too small and pushes fail when custody is too small.
    """

    def __init__(self, custody_account: str = POOL_CUSTODY_ACCOUNT) -> None:
        self.custody_account = custody_account
        self._balances: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()

    def balance_of(self, asset: str, account: str) -> int:
        return self._balances.get((normalize_asset(asset), account), 0)

    def custody_balance(self, asset: str) -> int:
        return self.balance_of(asset, self.custody_account)

    def credit(self, asset: str, account: str, amount: int) -> None:
        """Create amount of asset in account (seeding and tests)."""
        check_amount("amount", amount)
        key = (normalize_asset(asset), account)
        with self._lock:
            self._balances[key] = self._balances.get(key, 0) + amount

    def pull(self, asset: str, account: str, amount: int) -> bool:
        return self._move(normalize_asset(asset), account, self.custody_account, amount)

    def push(self, asset: str, account: str, amount: int) -> bool:
        return self._move(normalize_asset(asset), self.custody_account, account, amount)

    def _move(self, asset: str, sender: str, to: str, amount: int) -> bool:
        check_amount("amount", amount)
        with self._lock:
            balance = self._balances.get((asset, sender), 0)
            if balance < amount:
                logger.debug(
                    "ledger_transfer_refused",
                    asset=asset,
                    sender=sender,
                    balance=balance,
                    amount=amount,
                )
                return False
            self._balances[(asset, sender)] = balance - amount
            self._balances[(asset, to)] = self._balances.get((asset, to), 0) + amount
        return True


def ledger_from_env() -> AssetLedger:
    """Build the asset ledger named by PAIRSWAP_LEDGER_FACTORY.

    The variable holds a "module:callable" reference, in the form uvicorn
    takes for applications; the callable is invoked with no arguments.
    Unset, the engine gets an empty InMemoryAssetLedger.

    Raises:
        ValueError: If the reference is not of the form "module:callable"
        TypeError: If the factory does not return an AssetLedger
    """
    target = os.environ.get("PAIRSWAP_LEDGER_FACTORY", "").strip()
    if not target:
        return InMemoryAssetLedger()

    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(f"PAIRSWAP_LEDGER_FACTORY must be 'module:callable', got {target!r}")
    factory = getattr(importlib.import_module(module_name), attr)
    ledger = factory()
    if not isinstance(ledger, AssetLedger):
        raise TypeError(f"{target} returned {type(ledger).__name__}, not an AssetLedger")
    logger.info("ledger_loaded", factory=target, ledger=type(ledger).__name__)
    return ledger
