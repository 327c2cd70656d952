"""Base classes for pricing curves."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SwapResult:
    """Amounts exchanged by a swap (executed or quoted)."""

    asset_in: str
    asset_out: str
    amount_in: int
    amount_out: int


class AMM(ABC):
    """Abstract pricing curve over a pair of reserves."""

    @abstractmethod
    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount for a given input.

        Args:
            amount_in: Input asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool

        Returns:
            Output asset amount
        """
        ...

    @abstractmethod
    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for a desired output.

        Args:
            amount_out: Desired output asset amount
            reserve_in: Reserve of input asset in pool
            reserve_out: Reserve of output asset in pool

        Returns:
            Required input asset amount
        """
        ...
