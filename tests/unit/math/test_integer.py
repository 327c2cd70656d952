"""Tests for integer square root and amount helpers."""

import math

import pytest

from pairswap.errors import InvalidInput
from pairswap.math import check_amount, isqrt, min_amount


class TestIsqrt:
    """Tests for isqrt."""

    def test_zero(self):
        assert isqrt(0) == 0

    @pytest.mark.parametrize("n,expected", [(1, 1), (2, 1), (3, 1), (4, 2), (5, 2), (8, 2), (9, 3)])
    def test_small_values(self, n, expected):
        assert isqrt(n) == expected

    def test_perfect_squares(self):
        """Perfect squares return their exact root."""
        for root in (10, 1000, 2000, 10**9, 2**128 - 1):
            assert isqrt(root * root) == root

    def test_one_below_perfect_square(self):
        for root in (10, 2000, 10**18):
            assert isqrt(root * root - 1) == root - 1

    def test_first_deposit_bootstrap(self):
        """sqrt(1000 * 4000) is exactly 2000."""
        assert isqrt(1000 * 4000) == 2000

    def test_matches_math_isqrt_on_large_values(self):
        for n in (2**255 + 12345, 10**60 + 7, 3**200):
            assert isqrt(n) == math.isqrt(n)

    def test_negative_raises(self):
        with pytest.raises(InvalidInput):
            isqrt(-1)

    def test_float_raises(self):
        with pytest.raises(InvalidInput):
            isqrt(4.0)  # type: ignore


class TestAmountHelpers:
    """Tests for min_amount and check_amount."""

    def test_min_amount(self):
        assert min_amount(200, 199) == 199
        assert min_amount(0, 5) == 0
        assert min_amount(7, 7) == 7

    def test_check_amount_accepts_non_negative(self):
        assert check_amount("x", 0) == 0
        assert check_amount("x", 10**40) == 10**40

    def test_check_amount_rejects_negative(self):
        with pytest.raises(InvalidInput, match="x cannot be negative"):
            check_amount("x", -1)

    def test_check_amount_rejects_bool_and_float(self):
        with pytest.raises(InvalidInput):
            check_amount("x", True)  # type: ignore
        with pytest.raises(InvalidInput):
            check_amount("x", 1.5)  # type: ignore
