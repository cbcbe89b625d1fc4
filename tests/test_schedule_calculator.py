from datetime import datetime

import pytest

from sleepcycle.core.errors import InvalidDuration, InvalidTimeFormat, SleepEngineError, UnknownAgeProfile
from sleepcycle.core.models.data_models import AgeProfile, ClockTime, ScheduleKind
from sleepcycle.core.scheduling.age_profiles import AGE_PROFILES, get_age_profile, get_sleep_hours_range
from sleepcycle.core.scheduling.schedule_calculator import FallAsleepPolicy, ScheduleCalculator


def _t(hours, minutes=0):
    return ClockTime(hours=hours, minutes=minutes)


def test_bedtime_for_adult(calculator):
    schedule = calculator.calculate_bedtime("07:00", "adult")

    assert schedule.kind == ScheduleKind.BEDTIME
    assert schedule.bedtime == _t(22)
    assert schedule.wakeup == _t(7)
    assert len(schedule.cycles) == 6
    assert all(c.duration_minutes == 90 for c in schedule.cycles)
    assert schedule.total_sleep_hours == 9.0
    assert schedule.age_profile_id == "adult"
    assert schedule.fall_asleep_minutes == 0
    assert schedule.created_at is None


def test_wakeup_crosses_midnight(calculator):
    schedule = calculator.calculate_wakeup("23:00", "adult")

    assert schedule.kind == ScheduleKind.WAKEUP
    assert schedule.wakeup == _t(8)
    assert schedule.cycles[0].start == _t(23)
    assert schedule.cycles[-1].end == _t(8)
    assert schedule.total_sleep_hours == 9.0


def test_bedtime_wraps_to_previous_evening_for_teen(calculator):
    schedule = calculator.calculate_bedtime("06:30", "teen")
    assert schedule.bedtime == _t(18, 30)
    assert len(schedule.cycles) == 8
    assert schedule.total_sleep_hours == 12.0


def test_total_sleep_matches_cycle_durations(calculator):
    for profile_id in AGE_PROFILES:
        schedule = calculator.calculate_wakeup("21:15", profile_id)
        assert schedule.total_sleep_hours == schedule.total_sleep_minutes / 60


def test_accepts_clock_time_and_profile_objects(calculator):
    profile = AgeProfile(id="shift", recommended_cycles=4, min_sleep_hours=5, max_sleep_hours=7)
    schedule = calculator.calculate_wakeup(_t(8), profile)
    assert schedule.wakeup == _t(14)
    assert schedule.age_profile_id == "shift"


def test_created_at_is_passed_through(calculator, now):
    assert calculator.calculate_bedtime("07:00", "adult", now=now).created_at == now


def test_fall_asleep_offset_moves_times_not_sleep(offset_calculator):
    bedtime = offset_calculator.calculate_bedtime("07:00", "adult")
    assert bedtime.bedtime == _t(21, 45)
    assert bedtime.cycles[0].start == _t(22)
    assert bedtime.total_sleep_hours == 9.0
    assert bedtime.fall_asleep_minutes == 15

    wakeup = offset_calculator.calculate_wakeup("23:00", "adult")
    assert wakeup.wakeup == _t(8, 15)
    assert wakeup.cycles[0].start == _t(23, 15)


def test_nap_keeps_full_cycles_only(calculator):
    start = datetime(2026, 10, 19, 14, 0, 30)
    nap = calculator.calculate_nap(100, now=start)

    assert nap.kind == ScheduleKind.NAP
    assert nap.bedtime == _t(14)
    assert nap.wakeup == _t(15, 40)
    assert len(nap.cycles) == 1
    assert nap.cycles[0].duration_minutes == 90
    assert nap.total_sleep_hours == 1.5
    assert nap.age_profile_id is None
    assert nap.created_at == start


def test_short_nap_has_no_cycles(calculator, now):
    nap = calculator.calculate_nap(45, now=now)
    assert nap.cycles == ()
    assert nap.total_sleep_hours == 0.0


def test_nap_across_midnight(calculator):
    nap = calculator.calculate_nap(200, now=datetime(2026, 10, 19, 23, 0))
    assert nap.wakeup == _t(2, 20)
    assert len(nap.cycles) == 2


@pytest.mark.parametrize("duration", [0, -5, True, "30", None, 10.5, 1440])
def test_invalid_nap_duration(calculator, now, duration):
    with pytest.raises(InvalidDuration):
        calculator.calculate_nap(duration, now=now)


def test_unknown_profile(calculator):
    with pytest.raises(UnknownAgeProfile):
        calculator.calculate_bedtime("07:00", "toddler-ish")


def test_invalid_time(calculator):
    with pytest.raises(InvalidTimeFormat):
        calculator.calculate_wakeup("25:00", "adult")


def test_bedtime_options(calculator, offset_calculator):
    options = calculator.bedtime_options("07:00")
    assert [(o.cycles, o.time, o.duration) for o in options] == [
        (6, _t(22), "9h 0m"),
        (5, _t(23, 30), "7h 30m"),
    ]

    options = offset_calculator.bedtime_options("07:00")
    assert [(o.cycles, o.time, o.duration) for o in options] == [
        (6, _t(21, 45), "9h 15m"),
        (5, _t(23, 15), "7h 45m"),
    ]


def test_wakeup_options(offset_calculator):
    options = offset_calculator.wakeup_options("23:00")
    assert [(o.cycles, o.time, o.duration) for o in options] == [
        (5, _t(6, 45), "7h 45m"),
        (6, _t(8, 15), "9h 15m"),
    ]


def test_wakeup_options_from_now(calculator):
    options = calculator.wakeup_options_from_now(datetime(2026, 10, 19, 22, 10), cycle_range=(4, 6))
    assert [o.time for o in options] == [_t(4, 10), _t(5, 40), _t(7, 10)]


def test_fall_asleep_policies():
    assert FallAsleepPolicy.named("none").offset_minutes == 0
    assert FallAsleepPolicy.named("standard").offset_minutes == 15
    with pytest.raises(SleepEngineError):
        ScheduleCalculator(fall_asleep_policy="siesta")


def test_custom_fall_asleep_policy():
    calculator = ScheduleCalculator(fall_asleep_policy=FallAsleepPolicy(name="slow", offset_minutes=30))
    assert calculator.calculate_bedtime("07:00", "adult").bedtime == _t(21, 30)


def test_profile_catalog():
    adult = get_age_profile("adult")
    assert adult.recommended_cycles == 6
    assert (adult.min_sleep_hours, adult.max_sleep_hours) == (7, 9)
    assert get_age_profile(adult) is adult
    assert get_sleep_hours_range("newborn").max_hours == 17
    with pytest.raises(UnknownAgeProfile):
        get_sleep_hours_range("teenager")


def test_schedule_carries_profile_sleep_hours(calculator):
    profile = AgeProfile(id="shift", recommended_cycles=4, min_sleep_hours=5, max_sleep_hours=7)
    schedule = calculator.calculate_bedtime("14:00", profile)
    assert (schedule.min_sleep_hours, schedule.max_sleep_hours) == (5, 7)

    adult = calculator.calculate_wakeup("23:00", "adult")
    assert (adult.min_sleep_hours, adult.max_sleep_hours) == (7, 9)
    assert calculator.calculate_nap(100, now=datetime(2026, 10, 19, 14, 0)).min_sleep_hours is None
