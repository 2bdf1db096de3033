"""Tests for signed 64-bit arithmetic helpers."""

import pytest

from bytecalc.vm.arithmetic import (
    checked_div,
    checked_pow,
    checked_rem,
    fits_i64,
    to_i64,
    trunc_div,
    trunc_rem,
    wrapping_pow,
)
from bytecalc.vm.instruction import I64_MAX, I64_MIN


class TestRange:
    """Test range helpers."""

    def test_fits_i64(self):
        assert fits_i64(I64_MAX)
        assert fits_i64(I64_MIN)
        assert not fits_i64(I64_MAX + 1)
        assert not fits_i64(I64_MIN - 1)

    def test_to_i64(self):
        assert to_i64(0) == 0
        assert to_i64(-1) == -1
        assert to_i64(I64_MAX + 1) == I64_MIN
        assert to_i64(I64_MIN - 1) == I64_MAX
        assert to_i64(2**64) == 0
        assert to_i64(2**64 + 5) == 5


class TestTruncation:
    """Test truncating division."""

    @pytest.mark.parametrize(
        "left,right,quotient,remainder",
        [
            (7, 2, 3, 1),
            (-7, 2, -3, -1),
            (7, -2, -3, 1),
            (-7, -2, 3, -1),
            (0, 5, 0, 0),
            (6, 3, 2, 0),
        ],
    )
    def test_quotient_and_remainder(self, left, right, quotient, remainder):
        assert trunc_div(left, right) == quotient
        assert trunc_rem(left, right) == remainder
        assert quotient * right + remainder == left

    def test_checked_division_limits(self):
        assert checked_div(I64_MIN, -1) is None
        assert checked_rem(I64_MIN, -1) is None
        assert checked_div(I64_MIN, 1) == I64_MIN
        assert checked_rem(I64_MIN, 2) == 0


class TestPower:
    """Test exponentiation."""

    def test_checked_pow(self):
        assert checked_pow(2, 10) == 1024
        assert checked_pow(-3, 3) == -27
        assert checked_pow(2, 63) is None
        assert checked_pow(-2, 63) == I64_MIN
        assert checked_pow(10, 19) is None
        assert checked_pow(10, 18) == 10**18

    def test_wrapping_pow(self):
        assert wrapping_pow(2, 10) == 1024
        assert wrapping_pow(-3, 3) == -27
        assert wrapping_pow(2, 64) == 0
        assert wrapping_pow(0, 0) == 1
