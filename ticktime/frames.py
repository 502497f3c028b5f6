"""
Tick <-> frame number conversion.

The rate decides the arithmetic:

- int: exact integer math, truncating toward zero.
- float: double precision, rounded half to even.
- FrameRate: exact rational math, truncating toward zero.
"""

import functools
import logging
import math
from typing import Union

from . import TICKS_PER_SECOND
from .framerate import FrameRate, U32_MAX
from .numeric import (
    div_trunc,
    is_float_scalar,
    is_integer_scalar,
    round_half_even,
    wrap_int,
)

# Module-level logger
_logger = logging.getLogger(__name__)

Rate = Union[int, float, FrameRate]


@functools.lru_cache(maxsize=128)
def _note_inexact(num: int, den: int):
    """Log once per rate whose frames do not land on whole ticks."""
    if (TICKS_PER_SECOND * den) % num:
        _logger.debug(
            f"{num}/{den} fps is not tick-exact at {TICKS_PER_SECOND} ticks/s; "
            f"frame boundaries will be truncated"
        )


def _int_rate(fps) -> int:
    fps = int(fps)
    if not 0 < fps <= U32_MAX:
        raise ValueError(f"integer frame rate must be in 1..{U32_MAX}, got {fps}")
    _note_inexact(fps, 1)
    return fps


def _float_rate(rate) -> float:
    rate = float(rate)
    if not (math.isfinite(rate) and rate > 0):
        raise ValueError(f"float frame rate must be finite and positive, got {rate}")
    return rate


def ticks_to_frames(ticks: int, rate: Rate) -> int:
    """
    Convert a raw tick count to a frame number.

    Args:
        ticks: Raw tick count
        rate: Frames per second (int, float or FrameRate)

    Returns:
        Frame number (signed 64-bit)
    """
    ticks = int(ticks)
    if isinstance(rate, FrameRate):
        _note_inexact(rate.num, rate.den)
        return wrap_int(div_trunc(ticks * rate.num, TICKS_PER_SECOND * rate.den))
    if is_integer_scalar(rate):
        return wrap_int(div_trunc(ticks * _int_rate(rate), TICKS_PER_SECOND))
    if is_float_scalar(rate):
        return round_half_even(float(ticks) * _float_rate(rate) / TICKS_PER_SECOND)
    raise TypeError(f"unsupported frame rate type: {type(rate).__name__}")


def frames_to_ticks(frame: int, rate: Rate) -> int:
    """
    Convert a frame number to a raw tick count.

    Args:
        frame: Frame number
        rate: Frames per second (int, float or FrameRate)

    Returns:
        Raw tick count (signed 64-bit)
    """
    frame = int(frame)
    if isinstance(rate, FrameRate):
        _note_inexact(rate.num, rate.den)
        return wrap_int(div_trunc(frame * TICKS_PER_SECOND * rate.den, rate.num))
    if is_integer_scalar(rate):
        return wrap_int(div_trunc(frame * TICKS_PER_SECOND, _int_rate(rate)))
    if is_float_scalar(rate):
        return round_half_even(float(frame) * TICKS_PER_SECOND / _float_rate(rate))
    raise TypeError(f"unsupported frame rate type: {type(rate).__name__}")
