"""
Signed 64-bit integer arithmetic.

Python integers are unbounded, so fixed-width behaviour is modelled
explicitly. ``checked_*`` functions return ``None`` when the exact result
does not fit in an i64; ``wrapping_*`` functions reduce the exact result
modulo 2**64 into two's complement. Division and remainder truncate toward
zero and callers must reject a zero divisor beforehand.
"""

from typing import Callable, Dict, Optional

from .instruction import I64_MAX, I64_MIN, Operation

_MODULUS = 2**64
U32_MAX = 2**32 - 1


def fits_i64(value: int) -> bool:
    return I64_MIN <= value <= I64_MAX


def to_i64(value: int) -> int:
    """Reduce an arbitrary integer to its two's-complement i64 value."""
    return ((value - I64_MIN) % _MODULUS) + I64_MIN


def _checked(value: int) -> Optional[int]:
    return value if fits_i64(value) else None


def trunc_div(left: int, right: int) -> int:
    """Exact quotient truncated toward zero."""
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def trunc_rem(left: int, right: int) -> int:
    """Remainder whose sign follows the dividend."""
    return left - right * trunc_div(left, right)


def checked_add(left: int, right: int) -> Optional[int]:
    return _checked(left + right)


def checked_sub(left: int, right: int) -> Optional[int]:
    return _checked(left - right)


def checked_mul(left: int, right: int) -> Optional[int]:
    return _checked(left * right)


def checked_div(left: int, right: int) -> Optional[int]:
    # Only MIN / -1 can leave the range.
    return _checked(trunc_div(left, right))


def checked_rem(left: int, right: int) -> Optional[int]:
    # MIN % -1 is mathematically 0 but traps like the matching division.
    if left == I64_MIN and right == -1:
        return None
    return trunc_rem(left, right)


def checked_pow(base: int, exponent: int) -> Optional[int]:
    """Exponentiation by a non-negative exponent, ``None`` on overflow."""
    if base in (0, 1):
        return 1 if exponent == 0 else base
    if base == -1:
        return -1 if exponent % 2 else 1
    # |base| >= 2 overflows for every exponent past 63.
    if exponent >= 64:
        return None
    return _checked(base**exponent)


def wrapping_add(left: int, right: int) -> int:
    return to_i64(left + right)


def wrapping_sub(left: int, right: int) -> int:
    return to_i64(left - right)


def wrapping_mul(left: int, right: int) -> int:
    return to_i64(left * right)


def wrapping_div(left: int, right: int) -> int:
    return to_i64(trunc_div(left, right))


def wrapping_rem(left: int, right: int) -> int:
    return to_i64(trunc_rem(left, right))


def wrapping_pow(base: int, exponent: int) -> int:
    return to_i64(pow(base, exponent, _MODULUS))


CHECKED: Dict[Operation, Callable[[int, int], Optional[int]]] = {
    Operation.ADD: checked_add,
    Operation.SUBTRACT: checked_sub,
    Operation.MULTIPLY: checked_mul,
    Operation.DIVIDE: checked_div,
    Operation.MODULO: checked_rem,
    Operation.POWER: checked_pow,
}

WRAPPING: Dict[Operation, Callable[[int, int], int]] = {
    Operation.ADD: wrapping_add,
    Operation.SUBTRACT: wrapping_sub,
    Operation.MULTIPLY: wrapping_mul,
    Operation.DIVIDE: wrapping_div,
    Operation.MODULO: wrapping_rem,
    Operation.POWER: wrapping_pow,
}
