"""Pool record."""

from __future__ import annotations

from dataclasses import dataclass, replace

from pairswap.pools.pair import PairId, Slot, slot_for


@dataclass
class Pool:
    """Reserve state for one canonical pair.

    A pool is either untouched (no shares, no reserves) or holds both
    reserves and outstanding shares. The ratio reserve_x / reserve_y is
    only changed by deposits, withdrawals and swaps.
    """

    reserve_x: int = 0
    reserve_y: int = 0
    total_shares: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total_shares == 0

    def reserve(self, slot: Slot) -> int:
        return self.reserve_x if slot is Slot.X else self.reserve_y

    def set_reserve(self, slot: Slot, value: int) -> None:
        if value < 0:
            raise ValueError(f"Reserve cannot be negative: {value}")
        if slot is Slot.X:
            self.reserve_x = value
        else:
            self.reserve_y = value

    def reserves_for(self, pair_id: PairId, asset_a: str, asset_b: str) -> tuple[int, int]:
        """Get reserves ordered as the caller named the assets."""
        return (
            self.reserve(slot_for(pair_id, asset_a)),
            self.reserve(slot_for(pair_id, asset_b)),
        )

    def snapshot(self) -> Pool:
        return replace(self)

    def restore(self, snapshot: Pool) -> None:
        self.reserve_x = snapshot.reserve_x
        self.reserve_y = snapshot.reserve_y
        self.total_shares = snapshot.total_shares
