"""
ticktime CLI - Convert between ticks, seconds, frames and timecode.
"""

import logging
import sys
from typing import Union

import click

from . import TICKS_PER_SECOND, LOW_RES
from .framerate import FrameRate
from .tick import Tick, TickParseError
from .timecode import format_timecode, parse_timecode

NAMED_RATES = {
    "film": FrameRate.FILM,
    "pal": FrameRate.PAL,
    "30": FrameRate.FPS_30,
    "60": FrameRate.FPS_60,
    "ntsc-film": FrameRate.NTSC_FILM,
    "ntsc": FrameRate.NTSC,
    "ntsc-hd": FrameRate.NTSC_HD,
}


def parse_rate(text: str) -> Union[FrameRate, int, float]:
    """
    Parse a frame rate argument.

    Formats:
    - "ntsc", "film", ... -> named FrameRate
    - "30000/1001" -> FrameRate(30000, 1001)
    - "24" -> 24
    - "29.97" -> 29.97

    Raises:
        ValueError: If text is not a frame rate
    """
    text = text.strip().lower()

    if text in NAMED_RATES:
        return NAMED_RATES[text]

    if "/" in text:
        num, den = text.split("/", 1)
        return FrameRate(int(num), int(den))

    try:
        return int(text)
    except ValueError:
        return float(text)


def _rate_option(ctx, param, value):
    try:
        return parse_rate(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_tick(text: str) -> Tick:
    try:
        return Tick.parse(text)
    except TickParseError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


# Let "-3603600" through as a positional value instead of an unknown option.
NEGATIVE_ARGS = {"ignore_unknown_options": True}


rate_option = click.option(
    "-r", "--rate",
    type=str,
    required=True,
    callback=_rate_option,
    help="Frame rate: integer, float, NUM/DEN or a name (film, pal, ntsc, ...)",
)


@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def main(verbose: bool):
    """
    Convert between ticks, seconds, frames and timecode.

    Examples:

        ticktime from-seconds 2.5

        ticktime to-timecode 19459440 -r ntsc

        ticktime from-timecode 01:30:45:15 -r 30000/1001

        ticktime to-frames -3603600 -r 60
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


@main.command("from-seconds", context_settings=NEGATIVE_ARGS)
@click.argument("seconds", type=float)
def from_seconds(seconds: float):
    """Convert SECONDS to a raw tick count."""
    click.echo(Tick.from_seconds(seconds).raw)


@main.command("to-seconds", context_settings=NEGATIVE_ARGS)
@click.argument("ticks", type=str)
def to_seconds(ticks: str):
    """Convert a raw tick count to seconds."""
    click.echo(_parse_tick(ticks).to_seconds())


@main.command("to-frames", context_settings=NEGATIVE_ARGS)
@click.argument("ticks", type=str)
@rate_option
def to_frames(ticks: str, rate):
    """Convert a raw tick count to a frame number."""
    try:
        click.echo(_parse_tick(ticks).to_frames(rate))
    except (TypeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("from-frames", context_settings=NEGATIVE_ARGS)
@click.argument("frame", type=int)
@rate_option
def from_frames(frame: int, rate):
    """Convert a frame number to a raw tick count."""
    try:
        click.echo(Tick.from_frames(frame, rate).raw)
    except (TypeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("to-timecode", context_settings=NEGATIVE_ARGS)
@click.argument("ticks", type=str)
@rate_option
def to_timecode(ticks: str, rate):
    """Convert a raw tick count to HH:MM:SS:FF."""
    try:
        click.echo(format_timecode(_parse_tick(ticks).to_timecode(rate)))
    except (TypeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("from-timecode", context_settings=NEGATIVE_ARGS)
@click.argument("timecode", type=str)
@rate_option
def from_timecode(timecode: str, rate):
    """Convert HH:MM:SS:FF to a raw tick count."""
    try:
        tc = parse_timecode(timecode)
        click.echo(Tick.from_timecode(*tc, rate).raw)
    except (TypeError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
def info():
    """Show the tick resolution and which named rates are exact."""
    click.echo(f"Ticks per second: {TICKS_PER_SECOND}" + (" (low resolution)" if LOW_RES else ""))
    click.echo("-" * 48)
    for name, rate in NAMED_RATES.items():
        marker = "exact" if rate.is_exact() else "inexact"
        click.echo(f"  {name:<10} {str(rate):<16} {float(rate.ticks_per_frame()):>12.2f}  {marker}")


if __name__ == "__main__":
    main()
