"""Canonical pair identifiers and reserve-slot mapping.

A pool is stored under one canonical key no matter which order a caller
names its assets in. Reserves are stored in canonical order too, so every
read and every write re-derives which slot holds the caller's asset through
slot_for(). The mapping is never cached.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from pairswap.errors import IdenticalAssets, InvalidInput
from pairswap.models.types import normalize_asset


class Slot(str, Enum):
    """Stored reserve slot of a pool."""

    X = "x"
    Y = "y"

    @property
    def other(self) -> Slot:
        return Slot.Y if self is Slot.X else Slot.X


class PairId(NamedTuple):
    """Order-independent pool key: asset_x sorts before asset_y."""

    asset_x: str
    asset_y: str

    def __str__(self) -> str:
        return f"{self.asset_x}/{self.asset_y}"


def resolve(asset_a: str, asset_b: str) -> PairId:
    """Canonicalize two asset identifiers into a pair id.

    Args:
        asset_a: First asset (any order, any case)
        asset_b: Second asset

    Returns:
        PairId with the assets in lexicographic order

    Raises:
        IdenticalAssets: If both identifiers name the same asset
    """
    a = normalize_asset(asset_a)
    b = normalize_asset(asset_b)
    if a == b:
        raise IdenticalAssets(f"Pair requires two distinct assets, got {a} twice")
    if a < b:
        return PairId(a, b)
    return PairId(b, a)


def slot_for(pair_id: PairId, asset: str) -> Slot:
    """Map a caller-supplied asset onto its stored reserve slot.

    Raises:
        InvalidInput: If the asset is not part of the pair
    """
    asset_norm = normalize_asset(asset)
    if asset_norm == pair_id.asset_x:
        return Slot.X
    if asset_norm == pair_id.asset_y:
        return Slot.Y
    raise InvalidInput(f"Asset {asset} not in pair {pair_id}")
