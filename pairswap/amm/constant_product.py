"""Constant product pricing: x * y = k.

The fee is taken from the input amount before it is priced, so the product
of the reserves never decreases across a swap and strictly increases when a
fee is charged.
"""

from __future__ import annotations

from dataclasses import dataclass

from pairswap.amm.base import AMM
from pairswap.errors import InvalidInput
from pairswap.math import check_amount
from pairswap.safe_int import S


@dataclass(frozen=True)
class FeeTier:
    """Fraction of the input amount that is priced (numerator / denominator).

    FeeTier(997, 1000) charges 0.3%; FeeTier(1, 1) charges nothing.
    """

    numerator: int = 997
    denominator: int = 1000

    def __post_init__(self) -> None:
        if self.denominator <= 0 or not 0 < self.numerator <= self.denominator:
            raise ValueError(f"Invalid fee tier {self.numerator}/{self.denominator}")

    @property
    def is_fee_less(self) -> bool:
        return self.numerator == self.denominator


def _require_positive(**amounts: int) -> None:
    for name, value in amounts.items():
        check_amount(name, value)
        if value == 0:
            raise InvalidInput(f"{name} must be positive")


class ConstantProduct(AMM):
    """Constant product curve with a single fee tier.

    Formula: amount_out = (in * num * res_out) / (res_in * den + in * num)

    which is floor(in_eff * res_out / (res_in + in_eff)) with
    in_eff = in * num / den kept exact by scaling both terms by den.
    """

    def __init__(self, fee: FeeTier | None = None) -> None:
        self.fee = fee or FeeTier()

    def __repr__(self) -> str:
        return f"ConstantProduct(fee={self.fee.numerator}/{self.fee.denominator})"

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount using the constant product formula.

        Raises:
            InvalidInput: If any argument is zero or negative
        """
        _require_positive(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)

        amount_in_with_fee = S(amount_in) * self.fee.numerator
        numerator = amount_in_with_fee * reserve_out
        denominator = S(reserve_in) * self.fee.denominator + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for a desired output.

        Formula: amount_in = (res_in * out * den) / ((res_out - out) * num) + 1

        Rounds up, so the returned input always buys at least amount_out.

        Raises:
            InvalidInput: If any argument is zero, or amount_out would drain
                the output reserve
        """
        _require_positive(amount_out=amount_out, reserve_in=reserve_in, reserve_out=reserve_out)
        if amount_out >= reserve_out:
            raise InvalidInput(
                f"Cannot take {amount_out} out of a reserve of {reserve_out}"
            )

        numerator = S(reserve_in) * amount_out * self.fee.denominator
        denominator = (S(reserve_out) - amount_out) * self.fee.numerator

        return ((numerator // denominator) + 1).value


def spot_price(reserve_base: int, reserve_quote: int, scale: int) -> int:
    """Price of one base unit in quote units, as a fixed-point integer.

    Raises:
        InvalidInput: If either reserve is zero
    """
    _require_positive(reserve_base=reserve_base, reserve_quote=reserve_quote)
    return (S(reserve_quote) * scale // reserve_base).value
