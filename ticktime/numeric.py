"""
Integer width casts and rounding policies.

Two rounding modes are used across the package and must stay distinct:

- round_half_away: ties away from zero. Used for tick arithmetic and for
  float-to-tick conversion.
- round_half_even: Python's round(). Used for frame counts at float rates.

Integer results are computed on unbounded Python ints and narrowed to the
storage width only at the end.
"""

import math

import numpy as np


def int_bounds(bits: int = 64, signed: bool = True) -> tuple[int, int]:
    """Return the (min, max) range of an integer of the given width."""
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def wrap_int(value: int, bits: int = 64, signed: bool = True) -> int:
    """
    Cast an integer to a fixed width with two's-complement wraparound.

    Args:
        value: Any integer
        bits: Target width
        signed: Whether the target is signed

    Returns:
        value modulo 2**bits, reinterpreted as signed when requested
    """
    mask = (1 << bits) - 1
    value = int(value) & mask
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def float_to_int(x: float, bits: int = 64, signed: bool = True) -> int:
    """
    Truncate a float toward zero, saturating at the bounds of the width.

    NaN maps to 0 and infinities to the nearest bound.
    """
    x = float(x)
    lo, hi = int_bounds(bits, signed)
    if math.isnan(x):
        return 0
    if math.isinf(x):
        return hi if x > 0 else lo
    return max(lo, min(hi, math.trunc(x)))


def round_half_away(x: float) -> int:
    """Round to nearest, ties away from zero, saturating to 64 bits."""
    x = float(x)
    if x >= 0:
        return float_to_int(x + 0.5)
    return float_to_int(x - 0.5)


def round_half_even(x: float) -> int:
    """Round to nearest, ties to even, saturating to 64 bits."""
    x = float(x)
    if not math.isfinite(x):
        return float_to_int(x)
    lo, hi = int_bounds()
    return max(lo, min(hi, round(x)))


def div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero (floor division rounds down)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def rem_trunc(a: int, b: int) -> int:
    """Remainder matching div_trunc; takes the sign of the dividend."""
    return a - b * div_trunc(a, b)


def is_integer_scalar(value) -> bool:
    """True for Python and numpy integers, excluding bool."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def is_float_scalar(value) -> bool:
    """True for Python and numpy floats."""
    return isinstance(value, (float, np.floating))

