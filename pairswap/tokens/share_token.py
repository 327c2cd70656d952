"""Share (LP) token accounting.

Each canonical pair owns its own ShareToken, so shares of unrelated pools
never mix. The engine mints on deposit and burns on withdrawal; holders
move shares with the usual transfer / approve / transfer_from operations.
"""

from __future__ import annotations

import threading

import structlog

from pairswap.errors import InsufficientAllowance, InsufficientShares
from pairswap.math import check_amount

logger = structlog.get_logger()


class ShareToken:
    """Fungible claim on one pool's reserves.

    Invariant: the sum of all balances equals total_supply, which the
    engine keeps equal to the pool's total_shares.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"ShareToken({self.name!r}, total_supply={self._total_supply})"

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def holders(self) -> dict[str, int]:
        """Return a copy of all non-zero balances."""
        with self._lock:
            return dict(self._balances)

    # --- Engine-side supply changes ---

    def mint(self, to: str, amount: int) -> None:
        check_amount("amount", amount)
        with self._lock:
            self._balances[to] = self._balances.get(to, 0) + amount
            self._total_supply += amount

    def burn(self, owner: str, amount: int) -> None:
        """Destroy shares held by owner.

        Raises:
            InsufficientShares: If owner holds fewer than amount shares
        """
        check_amount("amount", amount)
        with self._lock:
            balance = self._balances.get(owner, 0)
            if balance < amount:
                raise InsufficientShares(
                    f"{owner} holds {balance} {self.name} shares, cannot burn {amount}"
                )
            self._set_balance(owner, balance - amount)
            self._total_supply -= amount

    # --- Holder operations ---

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move shares from sender to another account.

        Raises:
            InsufficientShares: If sender holds fewer than amount shares
        """
        check_amount("amount", amount)
        with self._lock:
            self._move(sender, to, amount)
        logger.debug("shares_transferred", token=self.name, sender=sender, to=to, amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set the number of owner's shares spender may move."""
        check_amount("amount", amount)
        with self._lock:
            if amount == 0:
                self._allowances.pop((owner, spender), None)
            else:
                self._allowances[(owner, spender)] = amount

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move owner's shares on their behalf, consuming allowance.

        Raises:
            InsufficientAllowance: If spender's allowance is too small
            InsufficientShares: If owner holds fewer than amount shares
        """
        check_amount("amount", amount)
        with self._lock:
            allowed = self._allowances.get((owner, spender), 0)
            if allowed < amount:
                raise InsufficientAllowance(
                    f"{spender} may move {allowed} of {owner}'s shares, requested {amount}"
                )
            self._move(owner, to, amount)
            remaining = allowed - amount
            if remaining == 0:
                self._allowances.pop((owner, spender), None)
            else:
                self._allowances[(owner, spender)] = remaining

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientShares(
                f"{sender} holds {balance} {self.name} shares, cannot transfer {amount}"
            )
        self._set_balance(sender, balance - amount)
        self._set_balance(to, self._balances.get(to, 0) + amount)

    def _set_balance(self, account: str, value: int) -> None:
        if value == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = value
