"""
Exact rational frame rates.
"""

from fractions import Fraction
from typing import Optional, Union

from . import TICKS_PER_SECOND
from .numeric import is_integer_scalar

U32_MAX = 0xFFFFFFFF


class FrameRate:
    """
    Frames per second as an exact fraction num/den.

    Both terms are strictly positive unsigned 32-bit integers. The fraction is
    kept exactly as given, 60000/1001 stays 60000/1001.

    Named rates:
    - FILM: 24/1
    - PAL: 25/1
    - FPS_30: 30/1
    - FPS_60: 60/1
    - NTSC_FILM: 24000/1001 (23.976)
    - NTSC: 30000/1001 (29.97)
    - NTSC_HD: 60000/1001 (59.94)
    """

    __slots__ = ("_num", "_den")

    def __init__(self, num: int, den: int = 1):
        """
        Initialize a frame rate.

        Args:
            num: Numerator (frames), 1 to 2**32 - 1
            den: Denominator (seconds), 1 to 2**32 - 1

        Raises:
            ValueError: If either term is zero or not a 32-bit unsigned integer
        """
        if not (is_integer_scalar(num) and is_integer_scalar(den)):
            raise ValueError(f"frame rate terms must be integers, got {num!r}/{den!r}")
        if not 0 < num <= U32_MAX:
            raise ValueError(f"numerator must be 32-bit unsigned and non-zero, got {num}")
        if not 0 < den <= U32_MAX:
            raise ValueError(f"denominator must be 32-bit unsigned and non-zero, got {den}")

        object.__setattr__(self, "_num", int(num))
        object.__setattr__(self, "_den", int(den))

    @classmethod
    def new(cls, num: int, den: int) -> Optional["FrameRate"]:
        """
        Create a frame rate.

        Returns:
            FrameRate, or None if either term is zero or out of range
        """
        try:
            return cls(num, den)
        except ValueError:
            return None

    @classmethod
    def from_int(cls, fps: int) -> Optional["FrameRate"]:
        """Shorthand for new(fps, 1)."""
        return cls.new(fps, 1)

    @classmethod
    def coerce(cls, value: Union["FrameRate", int]) -> "FrameRate":
        """Promote a bare positive integer to a FrameRate with den = 1."""
        if isinstance(value, cls):
            return value
        if is_integer_scalar(value):
            return cls(value, 1)
        raise TypeError(f"cannot convert {type(value).__name__} to FrameRate")

    @property
    def num(self) -> int:
        return self._num

    @property
    def den(self) -> int:
        return self._den

    @property
    def fps(self) -> float:
        return self._num / self._den

    @property
    def is_integer(self) -> bool:
        return self._num % self._den == 0

    def ticks_per_frame(self) -> Fraction:
        """Exact duration of one frame in ticks."""
        return Fraction(TICKS_PER_SECOND * self._den, self._num)

    def is_exact(self) -> bool:
        """Whether every frame boundary falls on a whole tick."""
        return (TICKS_PER_SECOND * self._den) % self._num == 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, FrameRate):
            return NotImplemented
        return (self._num, self._den) == (other._num, other._den)

    def __hash__(self) -> int:
        return hash((FrameRate, self._num, self._den))

    def __setattr__(self, name, value):
        raise AttributeError("FrameRate is immutable")

    def __reduce__(self):
        return (FrameRate, (self._num, self._den))

    def __repr__(self) -> str:
        return f"FrameRate({self._num}/{self._den})"

    def __str__(self) -> str:
        if self._den == 1:
            return f"{self._num} fps"
        return f"{self._num}/{self._den} fps"


FrameRate.FILM = FrameRate(24, 1)
FrameRate.PAL = FrameRate(25, 1)
FrameRate.FPS_30 = FrameRate(30, 1)
FrameRate.FPS_60 = FrameRate(60, 1)
FrameRate.NTSC_FILM = FrameRate(24000, 1001)
FrameRate.NTSC = FrameRate(30000, 1001)
FrameRate.NTSC_HD = FrameRate(60000, 1001)
