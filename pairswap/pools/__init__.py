"""Pair registry, canonical pair ids and pool records."""

from .pair import PairId, Slot, resolve, slot_for
from .registry import PairRegistry
from .types import Pool

__all__ = [
    "PairId",
    "PairRegistry",
    "Pool",
    "Slot",
    "resolve",
    "slot_for",
]
