"""
ticktime - Frame-exact fixed-point time.

Each second is divided into TICKS_PER_SECOND indivisible ticks. The default
resolution, 3,603,600, is a common multiple of the usual display and media
rates, so frames at 24, 25, 30, 48, 50, 60, 72, 90, 120, 144 and 240 fps
start on whole ticks. It is also a multiple of 1001, so the NTSC family
(23.976, 29.97, 59.94) stays within a fraction of a tick per frame and
timecode at those rates round-trips exactly.
"""

import logging
import os

__version__ = "0.1.0"

_logger = logging.getLogger(__name__)

# Resolution
HIGH_RES_TICKS_PER_SECOND = 3_603_600  # 2^4 * 3^2 * 5^2 * 7 * 11 * 13
LOW_RES_TICKS_PER_SECOND = 25_200  # for constrained environments

# Set TICKTIME_LOW_RES=1 before import to select the low resolution.
LOW_RES_ENV = "TICKTIME_LOW_RES"
LOW_RES = os.environ.get(LOW_RES_ENV, "").strip().lower() in ("1", "true", "yes", "on")

TICKS_PER_SECOND = LOW_RES_TICKS_PER_SECOND if LOW_RES else HIGH_RES_TICKS_PER_SECOND

# Storage range (signed 64-bit)
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_logger.debug(f"TICKS_PER_SECOND={TICKS_PER_SECOND} (low_res={LOW_RES})")

from .framerate import FrameRate
from .frames import ticks_to_frames, frames_to_ticks
from .timecode import (
    Timecode,
    nominal_fps,
    ticks_to_timecode,
    timecode_to_ticks,
    format_timecode,
    parse_timecode,
)
from .tick import Tick, TickParseError

__all__ = [
    "TICKS_PER_SECOND",
    "HIGH_RES_TICKS_PER_SECOND",
    "LOW_RES_TICKS_PER_SECOND",
    "INT64_MIN",
    "INT64_MAX",
    "Tick",
    "TickParseError",
    "FrameRate",
    "Timecode",
    "nominal_fps",
    "ticks_to_frames",
    "frames_to_ticks",
    "ticks_to_timecode",
    "timecode_to_ticks",
    "format_timecode",
    "parse_timecode",
]
