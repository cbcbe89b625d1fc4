from datetime import datetime

import pytest

from sleepcycle.core.errors import InvalidTimeFormat
from sleepcycle.core.models.data_models import ClockTime
from sleepcycle.core.timing.clock_math import (
    add_minutes,
    circular_distance,
    clock_time_from_datetime,
    diff_minutes,
    format_clock_time,
    format_duration,
    from_minutes,
    next_occurrence,
    parse_clock_time,
    to_minutes,
)


def _t(hours, minutes=0):
    return ClockTime(hours=hours, minutes=minutes)


def test_to_minutes():
    assert to_minutes(_t(0, 0)) == 0
    assert to_minutes(_t(7, 30)) == 450
    assert to_minutes(_t(23, 59)) == 1439


def test_from_minutes_wraps_negative_and_overflowing_offsets():
    assert from_minutes(-60) == _t(23)
    assert from_minutes(-1441) == _t(23, 59)
    assert from_minutes(1440) == _t(0)
    assert from_minutes(1500) == _t(1)
    assert from_minutes(3 * 1440 + 5) == _t(0, 5)


def test_from_minutes_normalization_is_idempotent():
    for m in range(-4000, 4000, 37):
        once = from_minutes(m)
        assert from_minutes(to_minutes(once)) == once


def test_diff_after_add_recovers_offset():
    for t in (_t(0), _t(7, 15), _t(22, 0), _t(23, 59)):
        for d in range(-3000, 3000, 113):
            step = d % 1440
            assert diff_minutes(t, add_minutes(t, step)) == step


def test_diff_minutes_crosses_midnight():
    assert diff_minutes(_t(23), _t(7)) == 480
    assert diff_minutes(_t(7), _t(23)) == 960
    assert diff_minutes(_t(12), _t(12)) == 0


def test_add_minutes_backwards_past_midnight():
    assert add_minutes(_t(7), -540) == _t(22)
    assert add_minutes(_t(0, 30), -45) == _t(23, 45)


def test_circular_distance_takes_shorter_way_round():
    assert circular_distance(_t(23, 30), _t(0, 10)) == 40
    assert circular_distance(_t(0, 10), _t(23, 30)) == 40
    assert circular_distance(_t(6), _t(18)) == 720


def test_clock_times_order_by_minutes():
    times = [_t(22), _t(7), _t(7, 5), _t(0)]
    assert sorted(times) == [_t(0), _t(7), _t(7, 5), _t(22)]
    assert _t(22) > _t(7)
    assert _t(7) <= _t(7)


def test_clock_time_is_hashable_and_printable():
    assert len({_t(7), _t(7), _t(8)}) == 2
    assert str(_t(7, 5)) == "07:05"


@pytest.mark.parametrize("text, expected", [
    ("07:00", (7, 0)),
    ("7:05", (7, 5)),
    (" 23:59 ", (23, 59)),
    ("00:00", (0, 0)),
])
def test_parse_clock_time_valid(text, expected):
    parsed = parse_clock_time(text)
    assert (parsed.hours, parsed.minutes) == expected


@pytest.mark.parametrize("text", ["24:00", "12:60", "7", "ab:cd", "12:5", "", "7:00 PM", None, 700])
def test_parse_clock_time_invalid(text):
    with pytest.raises(InvalidTimeFormat):
        parse_clock_time(text)


def test_invalid_time_format_is_a_value_error():
    with pytest.raises(ValueError):
        parse_clock_time("99:99")


def test_parse_clock_time_passes_clock_time_through():
    t = _t(6, 45)
    assert parse_clock_time(t) is t


def test_format_clock_time():
    assert format_clock_time(_t(22, 30)) == "22:30"
    assert format_clock_time(_t(22, 30), use_24_hour=False) == "10:30 PM"
    assert format_clock_time(_t(0, 5), use_24_hour=False) == "12:05 AM"
    assert format_clock_time(_t(12, 0), use_24_hour=False) == "12:00 PM"


def test_format_duration():
    assert format_duration(555) == "9h 15m"
    assert format_duration(540) == "9h 0m"


def test_clock_time_from_datetime_drops_seconds():
    assert clock_time_from_datetime(datetime(2026, 10, 19, 14, 5, 59)) == _t(14, 5)


def test_next_occurrence():
    evening = datetime(2026, 10, 19, 20, 15)
    assert next_occurrence(_t(22), evening) == datetime(2026, 10, 19, 22, 0)
    assert next_occurrence(_t(7), evening) == datetime(2026, 10, 20, 7, 0)
    # Same minute resolves to today
    assert next_occurrence(_t(20, 15), datetime(2026, 10, 19, 20, 15, 30)) == datetime(2026, 10, 19, 20, 15)


@pytest.mark.parametrize("text", ["０７:００", "٠٧:٣٠"])
def test_parse_clock_time_rejects_non_ascii_digits(text):
    with pytest.raises(InvalidTimeFormat):
        parse_clock_time(text)
