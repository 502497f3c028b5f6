"""
Tests for the Tick value type.
"""

import copy
import datetime
import pickle
from fractions import Fraction
from itertools import islice

import numpy as np
import pytest

from ticktime import INT64_MAX, INT64_MIN, TICKS_PER_SECOND, FrameRate, Tick, TickParseError


class TestConstruction:
    """Test raw and seconds construction."""

    def test_raw(self):
        assert Tick(5).raw == 5
        assert Tick(-5).raw == -5
        assert Tick() == Tick(0)
        assert Tick(np.int64(7)).raw == 7

    def test_raw_wraps(self):
        assert Tick(INT64_MAX + 1) == Tick(INT64_MIN)
        assert Tick(1 << 64) == Tick(0)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            Tick(1.5)

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            Tick(True)
        with pytest.raises(TypeError):
            Tick(False)

    def test_from_seconds(self):
        assert Tick.from_seconds(1.0).raw == TICKS_PER_SECOND
        assert Tick.from_seconds(-1.0).raw == -TICKS_PER_SECOND
        assert Tick.from_seconds(0).raw == 0

    def test_from_seconds_truncates(self):
        assert Tick.from_seconds(1.5 / TICKS_PER_SECOND).raw == 1
        assert Tick.from_seconds(-1.5 / TICKS_PER_SECOND).raw == -1

    @pytest.mark.parametrize("secs", [0.0, 1.0, 2.5, -1.0, -2.5, 0.001, 3600.0])
    def test_seconds_round_trip(self, secs):
        assert Tick.from_seconds(secs).to_seconds() == pytest.approx(secs, abs=1.0 / TICKS_PER_SECOND)

    def test_whole_seconds_exact(self):
        assert Tick.from_seconds(1.0).to_seconds() == 1.0
        assert Tick.from_seconds(2.5).to_seconds() == 2.5


class TestNumericConversion:
    """Test casts to and from numeric scalars of various widths."""

    @pytest.mark.parametrize("value,expected", [
        (np.int8(-3), -3),
        (np.uint16(65535), 65535),
        (np.uint64((1 << 64) - 1), -1),
        ((1 << 64) + 5, 5),
        ((1 << 127) - 1, -1),
        (2.5, 3),
        (-2.5, -3),
        (0.49, 0),
        (np.float32(1.5), 2),
        (np.float64(-0.5), -1),
        (Fraction(7, 2), 4),
    ])
    def test_from_number(self, value, expected):
        assert Tick.from_number(value) == Tick(expected)

    def test_from_number_saturates(self):
        assert Tick.from_number(1e300) == Tick(INT64_MAX)
        assert Tick.from_number(float("-inf")) == Tick(INT64_MIN)
        assert Tick.from_number(float("nan")) == Tick(0)

    def test_from_number_rejects_text(self):
        with pytest.raises(TypeError):
            Tick.from_number("5")

    def test_astype_integer(self):
        assert Tick(300).astype(np.int8) == 44
        assert Tick(300).astype(np.uint8) == 44
        assert Tick(-1).astype(np.uint16) == 65535
        assert Tick(-1).astype(np.int32) == -1
        assert Tick(INT64_MIN).astype(np.uint64) == 1 << 63
        assert isinstance(Tick(1).astype(np.int16), np.int16)

    def test_astype_float(self):
        value = Tick(5).astype(np.float32)
        assert isinstance(value, np.float32)
        assert value == np.float32(5.0)
        assert Tick(16777217).astype("float32") == np.float32(16777216)

    def test_astype_unsupported(self):
        with pytest.raises(TypeError):
            Tick(1).astype(np.bool_)

    def test_to_int(self):
        assert Tick(-1).to_int(128, signed=False) == (1 << 128) - 1
        assert Tick(-1).to_int(128) == -1
        assert Tick(258).to_int(8, signed=False) == 2

    def test_builtin_conversions(self):
        assert int(Tick(7)) == 7
        assert float(Tick(-7)) == -7.0


class TestText:
    """Test display and parsing."""

    def test_display(self):
        assert str(Tick(42)) == "Tick(42)"
        assert repr(Tick(-1)) == "Tick(-1)"

    @pytest.mark.parametrize("text,expected", [
        ("123", 123),
        ("-123", -123),
        ("+5", 5),
        ("0", 0),
        (str(INT64_MAX), INT64_MAX),
        (str(INT64_MIN), INT64_MIN),
    ])
    def test_parse(self, text, expected):
        assert Tick.parse(text) == Tick(expected)

    @pytest.mark.parametrize("text", [
        "", "abc", "1.5", " 1", "1 ", "1_000", "--1", "Tick(1)",
        str(INT64_MAX + 1), str(INT64_MIN - 1),
    ])
    def test_parse_invalid(self, text):
        with pytest.raises(TickParseError) as excinfo:
            Tick.parse(text)
        assert excinfo.value.text == text
        assert excinfo.value.reason

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            Tick.parse("x")

    def test_parse_non_string(self):
        with pytest.raises(TickParseError):
            Tick.parse(5)


class TestSerialization:
    """Test the 64-bit integer record and pickling."""

    def test_to_bytes(self):
        assert Tick(1).to_bytes() == b"\x00" * 7 + b"\x01"
        assert Tick(-2).to_bytes() == b"\xff" * 7 + b"\xfe"

    def test_round_trip(self):
        for value in (0, 1, -1, INT64_MAX, INT64_MIN, TICKS_PER_SECOND):
            assert Tick.from_bytes(Tick(value).to_bytes()) == Tick(value)

    def test_wrong_length(self):
        assert Tick.from_bytes(b"123") is None
        assert Tick.from_bytes(b"\x00" * 9) is None

    def test_pickle_and_copy(self):
        t = Tick(123456789)
        assert pickle.loads(pickle.dumps(t)) == t
        assert copy.copy(t) == t
        assert copy.deepcopy(t) == t


class TestDuration:
    """Test timedelta interop."""

    def test_from_timedelta(self):
        tick = Tick.from_timedelta(datetime.timedelta(seconds=2.5))
        assert tick.raw == int(2.5 * TICKS_PER_SECOND)

    def test_subsecond(self):
        tick = Tick.from_timedelta(datetime.timedelta(seconds=1, microseconds=500_000))
        assert tick.raw == int(1.5 * TICKS_PER_SECOND)

    def test_zero(self):
        assert Tick.from_timedelta(datetime.timedelta(0)) == Tick(0)

    def test_to_timedelta(self):
        duration = Tick.from_seconds(2.5).to_timedelta()
        assert abs(duration.total_seconds() - 2.5) < 1e-6


class TestValueSemantics:
    """Test immutability, ordering and hashing."""

    def test_immutable(self):
        t = Tick(1)
        with pytest.raises(AttributeError):
            t._value = 2
        with pytest.raises(AttributeError):
            t.other = 2

    def test_ordering(self):
        assert Tick(1) < Tick(2)
        assert Tick(-1) <= Tick(-1)
        assert Tick(3) > Tick(-3)
        assert sorted([Tick(3), Tick(-1), Tick(2)]) == [Tick(-1), Tick(2), Tick(3)]
        assert max(Tick(3), Tick(9)) == Tick(9)

    def test_not_equal_to_int(self):
        assert Tick(1) != 1
        with pytest.raises(TypeError):
            Tick(1) < 2

    def test_hashable(self):
        assert len({Tick(1), Tick(1), Tick(2)}) == 2
        assert {Tick(5): "a"}[Tick(5)] == "a"


class TestArithmetic:
    """Test operators and their rounding."""

    def test_basic_ops(self):
        ticks = Tick.from_seconds(1.0)

        assert ticks + ticks == Tick.from_seconds(2.0)
        assert ticks + Tick.from_seconds(0.5) == Tick.from_seconds(1.5)

        assert ticks - ticks == Tick.from_seconds(0.0)
        assert ticks - Tick.from_seconds(0.5) == Tick.from_seconds(0.5)

        assert ticks * 2.0 == Tick.from_seconds(2.0)
        assert ticks * 0.5 == Tick.from_seconds(0.5)

        assert ticks / 2.0 == Tick.from_seconds(0.5)
        assert ticks / 0.5 == Tick.from_seconds(2.0)

    def test_add_wraps(self):
        assert Tick(INT64_MAX) + Tick(1) == Tick(INT64_MIN)
        assert Tick(INT64_MIN) - Tick(1) == Tick(INT64_MAX)

    def test_add_requires_tick(self):
        with pytest.raises(TypeError):
            Tick(1) + 1
        with pytest.raises(TypeError):
            Tick(1) - 1.0

    def test_tick_by_tick(self):
        assert Tick(3) * Tick(4) == Tick(12)
        assert Tick(7) / Tick(2) == Tick(4)
        assert Tick(-7) / Tick(2) == Tick(-4)
        assert Tick(1) / Tick(3) == Tick(0)

    def test_tick_by_zero_tick(self):
        with pytest.raises(ZeroDivisionError):
            Tick(1) / Tick(0)

    def test_integer_scalar_is_exact(self):
        assert Tick(7) * 3 == Tick(21)
        assert 3 * Tick(7) == Tick(21)
        assert Tick(7) * np.int16(3) == Tick(21)
        assert Tick(7) / 2 == Tick(3)
        assert Tick(-7) / 2 == Tick(-3)
        assert Tick(7) / np.uint8(2) == Tick(3)

    def test_integer_scalar_wraps(self):
        assert Tick(INT64_MAX) * 2 == Tick(-2)

    def test_integer_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            Tick(5) / 0

    def test_float_scalar_rounds_half_away(self):
        assert Tick(5) * 0.5 == Tick(3)
        assert Tick(-5) * 0.5 == Tick(-3)
        assert Tick(5) / 2.0 == Tick(3)
        assert 0.5 * Tick(5) == Tick(3)

    def test_float_and_integer_division_differ(self):
        assert Tick(5) / 2 == Tick(2)
        assert Tick(5) / 2.0 == Tick(3)

    def test_float32_scales_in_single_precision(self):
        assert Tick(16777217) * 1.0 == Tick(16777217)
        assert Tick(16777217) * np.float32(1.0) == Tick(16777216)

    def test_float32_division_by_zero_saturates(self):
        assert Tick(5) / np.float32(0.0) == Tick(INT64_MAX)
        assert Tick(-5) / np.float32(0.0) == Tick(INT64_MIN)

    def test_fraction_scalar(self):
        assert Tick(10) * Fraction(1, 4) == Tick(3)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            Tick(1) * "2"
        with pytest.raises(TypeError):
            Tick(1) / None

    def test_unary(self):
        assert -Tick(5) == Tick(-5)
        assert -Tick(INT64_MIN) == Tick(INT64_MIN)
        assert abs(Tick(-3)) == Tick(3)


class TestLerp:
    """Test interpolation between two ticks."""

    def test_endpoints(self):
        a, b = Tick(-250), Tick(1000)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b

    def test_midpoint(self):
        assert Tick(0).lerp(Tick(100), 0.5) == Tick(50)

    def test_clamps(self):
        a, b = Tick(0), Tick(100)
        assert a.lerp(b, -1.0) == a
        assert a.lerp(b, 2.0) == b

    def test_rounds_half_away(self):
        assert Tick(0).lerp(Tick(5), 0.5) == Tick(3)
        assert Tick(0).lerp(Tick(-5), 0.5) == Tick(-3)

    def test_seconds(self):
        a = Tick.from_seconds(1.0)
        b = Tick.from_seconds(3.0)
        assert a.lerp(b, 0.25) == Tick.from_seconds(1.5)


class TestEnumeration:
    """Test forward and backward raw sequences."""

    def test_forward(self):
        assert list(islice(Tick(5).forward(), 3)) == [5, 6, 7]

    def test_backward(self):
        assert list(islice(Tick(5).backward(), 3)) == [5, 4, 3]

    def test_forward_stops_before_max(self):
        assert list(Tick(INT64_MAX - 2).forward()) == [INT64_MAX - 2, INT64_MAX - 1]
        assert list(Tick(INT64_MAX).forward()) == []

    def test_backward_stops_before_min(self):
        assert list(Tick(INT64_MIN + 2).backward()) == [INT64_MIN + 2, INT64_MIN + 1]
        assert list(Tick(INT64_MIN).backward()) == []

    def test_restartable(self):
        seq = Tick(-3).forward()
        assert list(islice(seq, 4)) == [-3, -2, -1, 0]
        assert list(islice(seq, 4)) == [-3, -2, -1, 0]


class TestFramesAndTimecode:
    """Test the Tick-level conversion entry points."""

    def test_scaling_identity(self):
        assert Tick.from_seconds(1.0).to_frames(120) == 120
        assert Tick.from_frames(60, 60).raw == TICKS_PER_SECOND

    def test_negative_symmetry(self):
        tick = Tick(-TICKS_PER_SECOND)
        assert tick.to_frames(60) == -60
        assert Tick.from_frames(-60, 60) == tick

    def test_fractional_rate(self):
        assert Tick.from_seconds(100.0).to_frames(29.97) == 2997
        assert Tick.from_seconds(1001.0).to_frames(FrameRate.NTSC) == 30000

    def test_timecode(self):
        tick = Tick.from_timecode(1, 30, 45, 15, FrameRate.NTSC)
        assert tick.to_timecode(FrameRate.NTSC) == (1, 30, 45, 15)
        assert Tick.from_timecode(*tick.to_timecode(24), 24).to_timecode(24) == tick.to_timecode(24)
