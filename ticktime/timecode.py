"""
Tick <-> HH:MM:SS:FF timecode conversion.

Timecode counts frames at the exact rational rate but lays them out against
the nominal (ceiling) rate, so 29.97 fps material displays frames 00-29 in
every second. This is non-drop-frame timecode: no frame numbers are skipped,
and displayed time drifts from wall-clock time by 0.1% at NTSC rates.
"""

import re
from typing import NamedTuple, Union

from . import TICKS_PER_SECOND
from .framerate import FrameRate
from .numeric import div_trunc, rem_trunc, wrap_int


class Timecode(NamedTuple):
    """Timecode fields. Compares equal to a plain (h, m, s, f) tuple."""

    hours: int
    minutes: int
    seconds: int
    frames: int


_TIMECODE_RE = re.compile(r"(-)?(\d+):(\d{1,2}):(\d{1,2})[:;](\d+)")


def nominal_fps(rate: Union[FrameRate, int]) -> int:
    """Ceiling of num/den; 30000/1001 -> 30, 24/1 -> 24."""
    rate = FrameRate.coerce(rate)
    return -(-rate.num // rate.den)


def ticks_to_timecode(ticks: int, rate: Union[FrameRate, int]) -> Timecode:
    """
    Convert a raw tick count to timecode.

    The tick is first snapped to the nearest frame at the exact rate (ties
    away from zero), then split into fields at the nominal rate. Negative
    ticks produce fields that are all zero or negative.

    Args:
        ticks: Raw tick count
        rate: Frame rate

    Returns:
        Timecode
    """
    ticks = int(ticks)
    rate = FrameRate.coerce(rate)
    nominal = nominal_fps(rate)

    divisor = TICKS_PER_SECOND * rate.den
    magnitude = (abs(ticks) * rate.num + divisor // 2) // divisor
    total_frames = -magnitude if ticks < 0 else magnitude

    total_seconds = div_trunc(total_frames, nominal)
    return Timecode(
        hours=div_trunc(total_seconds, 3600),
        minutes=rem_trunc(div_trunc(total_seconds, 60), 60),
        seconds=rem_trunc(total_seconds, 60),
        frames=rem_trunc(total_frames, nominal),
    )


def timecode_to_ticks(
    hours: int,
    minutes: int,
    seconds: int,
    frames: int,
    rate: Union[FrameRate, int],
) -> int:
    """
    Convert timecode fields to a raw tick count, truncating toward zero.

    Fields are not range-checked; frames >= nominal_fps simply carry over.
    """
    hours, minutes, seconds, frames = int(hours), int(minutes), int(seconds), int(frames)
    rate = FrameRate.coerce(rate)
    nominal = nominal_fps(rate)

    total_frames = ((hours * 60 + minutes) * 60 + seconds) * nominal + frames
    return wrap_int(div_trunc(total_frames * TICKS_PER_SECOND * rate.den, rate.num))


def format_timecode(tc: Timecode) -> str:
    """Format timecode as HH:MM:SS:FF, with a leading '-' when negative."""
    if tc is None:
        return "--:--:--:--"

    sign = "-" if any(field < 0 for field in tc) else ""
    hours, minutes, seconds, frames = (abs(field) for field in tc)
    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}:{frames:02d}"


def parse_timecode(text: str) -> Timecode:
    """
    Parse HH:MM:SS:FF (or HH:MM:SS;FF) into a Timecode.

    A leading '-' negates every field, mirroring format_timecode().

    Raises:
        ValueError: If text is not a timecode
    """
    match = _TIMECODE_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid timecode: {text!r}")

    sign = -1 if match.group(1) else 1
    hours, minutes, seconds, frames = (sign * int(g) for g in match.groups()[1:])
    return Timecode(hours, minutes, seconds, frames)
