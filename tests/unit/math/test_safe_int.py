"""Tests for SafeInt checked arithmetic."""

import pytest

from pairswap.safe_int import DivisionByZero, S, SafeInt, SafeIntError, Underflow


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        assert SafeInt(SafeInt(42)).value == 42

    def test_rejects_float_and_bool(self):
        """Ledger arithmetic never accepts floats."""
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add_and_multiply(self):
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15
        assert (S(10) * S(3)).value == 30
        assert (3 * S(10)).value == 30

    def test_floordiv_rounds_down(self):
        assert (S(9_970_000_000) // 10_997_000).value == 906
        assert (S(7) // S(2)).value == 3

    def test_division_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            S(10) // 0

    def test_underflow_raises(self):
        with pytest.raises(Underflow):
            S(5) - 6

    def test_subtract_to_zero_allowed(self):
        assert (S(5) - 5).value == 0

    def test_errors_are_arithmetic_errors(self):
        assert issubclass(DivisionByZero, SafeIntError)
        assert issubclass(Underflow, ArithmeticError)


class TestSafeIntComparison:
    """Tests for comparison and conversion."""

    def test_comparisons_with_int(self):
        assert S(5) == 5
        assert S(5) < 6
        assert S(5) <= 5
        assert S(5) > 4
        assert S(5) >= 5

    def test_conversion(self):
        assert int(S(7)) == 7
        assert bool(S(0)) is False
        assert [0, 1, 2][S(1)] == 1
