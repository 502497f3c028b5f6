"""
Tick - fixed-point time value.
"""

import datetime
import functools
import numbers
import operator
import re
import struct
from typing import Optional, Union

import numpy as np

from . import TICKS_PER_SECOND, INT64_MIN, INT64_MAX
from .framerate import FrameRate
from .frames import Rate, ticks_to_frames, frames_to_ticks
from .numeric import (
    div_trunc,
    float_to_int,
    is_integer_scalar,
    round_half_away,
    wrap_int,
)
from .timecode import Timecode, ticks_to_timecode, timecode_to_ticks

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class TickParseError(ValueError):
    """Text is not a signed 64-bit decimal integer."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"cannot parse {text!r} as Tick: {reason}")


@functools.total_ordering
class Tick:
    """
    Signed 64-bit count of ticks, TICKS_PER_SECOND to the second.

    Negative values are allowed and represent time before the origin, as is
    common on editor and animation timelines.

    Rounding:
    - from_seconds() truncates toward zero.
    - Tick * Tick, Tick / Tick, Tick * float, Tick / float and lerp() round
      to the nearest tick, ties away from zero.
    - Tick * int and Tick / int are exact integer operations; division
      truncates toward zero.
    - Integer results wrap at 64 bits. Float results saturate.

    Division by a zero Tick or zero scalar is not guarded and raises
    ZeroDivisionError, except for numpy float scalars which produce inf/nan
    and then saturate.
    """

    __slots__ = ("_value",)

    # Make numpy scalars defer to Tick's reflected operators.
    __array_ufunc__ = None

    def __init__(self, value: int = 0):
        """
        Initialize from a raw tick count.

        Args:
            value: Raw count; integers outside the 64-bit range wrap
        """
        if not is_integer_scalar(value):
            raise TypeError(
                f"Tick() takes an integer, got {type(value).__name__}; "
                f"use Tick.from_seconds() or Tick.from_number()"
            )
        object.__setattr__(self, "_value", wrap_int(value))

    # Construction / conversion

    @classmethod
    def from_seconds(cls, secs: float) -> "Tick":
        """Create ticks from seconds, truncating toward zero."""
        return cls(float_to_int(float(secs) * TICKS_PER_SECOND))

    def to_seconds(self) -> float:
        """Convert ticks to seconds."""
        return self._value / TICKS_PER_SECOND

    @classmethod
    def from_number(cls, value: numbers.Real) -> "Tick":
        """
        Create ticks from a numeric scalar of any width.

        Integers (Python or numpy) are cast to 64 bits and wrap on narrowing.
        Floats round to the nearest tick, ties away from zero.
        """
        if is_integer_scalar(value):
            return cls(value)
        if isinstance(value, numbers.Real):
            return cls(round_half_away(value))
        raise TypeError(f"cannot convert {type(value).__name__} to Tick")

    def astype(self, dtype) -> np.generic:
        """
        Convert the raw count to a numpy scalar.

        Args:
            dtype: Any numpy integer or float dtype

        Returns:
            Scalar of that dtype; integer narrowing wraps
        """
        dtype = np.dtype(dtype)
        if dtype.kind in "iu":
            return dtype.type(wrap_int(self._value, dtype.itemsize * 8, dtype.kind == "i"))
        if dtype.kind == "f":
            return dtype.type(self._value)
        raise TypeError(f"unsupported dtype: {dtype}")

    def to_int(self, bits: int = 64, signed: bool = True) -> int:
        """Raw count cast to an integer of the given width (e.g. 128)."""
        return wrap_int(self._value, bits, signed)

    @property
    def raw(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    # Text

    @classmethod
    def parse(cls, text: str) -> "Tick":
        """
        Parse a signed decimal integer.

        Raises:
            TickParseError: If text is not a signed 64-bit decimal integer
        """
        if not isinstance(text, str):
            raise TickParseError(repr(text), "not a string")
        if not _DECIMAL_RE.fullmatch(text):
            raise TickParseError(text, "invalid digit")
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            raise TickParseError(text, "number too large to fit in 64 bits")
        return cls(value)

    def __repr__(self) -> str:
        return f"Tick({self._value})"

    __str__ = __repr__

    # Serialization

    def to_bytes(self) -> bytes:
        """Encode as 8 bytes, big-endian signed."""
        return struct.pack(">q", self._value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional["Tick"]:
        """
        Decode from 8 big-endian bytes.

        Returns:
            Tick, or None if data is not 8 bytes long
        """
        if len(data) != 8:
            return None
        (value,) = struct.unpack(">q", data)
        return cls(value)

    def __reduce__(self):
        return (Tick, (self._value,))

    # Host duration

    @classmethod
    def from_timedelta(cls, duration: datetime.timedelta) -> "Tick":
        """Create ticks from a timedelta (truncating, via from_seconds)."""
        return cls.from_seconds(duration.total_seconds())

    def to_timedelta(self) -> datetime.timedelta:
        return datetime.timedelta(seconds=self.to_seconds())

    # Frames and timecode

    @classmethod
    def from_frames(cls, frame: int, frame_rate: Rate) -> "Tick":
        """Convert a frame number at the given rate to ticks."""
        return cls(frames_to_ticks(frame, frame_rate))

    def to_frames(self, frame_rate: Rate) -> int:
        """Convert ticks to a frame number at the given rate."""
        return ticks_to_frames(self._value, frame_rate)

    @classmethod
    def from_timecode(
        cls,
        hours: int,
        minutes: int,
        seconds: int,
        frames: int,
        frame_rate: Union[FrameRate, int],
    ) -> "Tick":
        """Convert HH:MM:SS:FF at the given rate to ticks."""
        return cls(timecode_to_ticks(hours, minutes, seconds, frames, frame_rate))

    def to_timecode(self, frame_rate: Union[FrameRate, int]) -> Timecode:
        """Convert ticks to HH:MM:SS:FF, snapping to the nearest frame."""
        return ticks_to_timecode(self._value, frame_rate)

    # Arithmetic

    def __add__(self, other: "Tick") -> "Tick":
        if not isinstance(other, Tick):
            return NotImplemented
        return Tick(self._value + other._value)

    def __sub__(self, other: "Tick") -> "Tick":
        if not isinstance(other, Tick):
            return NotImplemented
        return Tick(self._value - other._value)

    def __mul__(self, other) -> "Tick":
        if isinstance(other, Tick):
            return Tick(round_half_away(float(self._value) * float(other._value)))
        if is_integer_scalar(other):
            return Tick(self._value * int(other))
        if isinstance(other, numbers.Real):
            return Tick(self._scale(other, operator.mul))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Tick":
        if isinstance(other, Tick):
            return Tick(round_half_away(float(self._value) / float(other._value)))
        if is_integer_scalar(other):
            return Tick(div_trunc(self._value, int(other)))
        if isinstance(other, numbers.Real):
            return Tick(self._scale(other, operator.truediv))
        return NotImplemented

    def _scale(self, scalar, op) -> int:
        """Apply op in the scalar's own float precision and round."""
        if isinstance(scalar, np.floating):
            with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
                return round_half_away(op(scalar.dtype.type(self._value), scalar))
        return round_half_away(op(float(self._value), float(scalar)))

    def __neg__(self) -> "Tick":
        return Tick(-self._value)

    def __abs__(self) -> "Tick":
        return Tick(abs(self._value))

    def lerp(self, other: "Tick", t: float) -> "Tick":
        """
        Linear interpolation between self (t=0) and other (t=1).

        t is clamped to [0, 1]. The blend is done in double precision, so the
        endpoints are exact only while both values fit in a double's mantissa.
        """
        t = min(max(float(t), 0.0), 1.0)
        return Tick(round_half_away(self._value * (1.0 - t) + other._value * t))

    # Comparison

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tick):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other) -> bool:
        if not isinstance(other, Tick):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash((Tick, self._value))

    def __setattr__(self, name, value):
        raise AttributeError("Tick is immutable")

    # Enumeration

    def forward(self) -> range:
        """Raw counts from this tick upward, stopping before INT64_MAX."""
        return range(self._value, INT64_MAX)

    def backward(self) -> range:
        """Raw counts from this tick downward, stopping before INT64_MIN."""
        return range(self._value, INT64_MIN, -1)
