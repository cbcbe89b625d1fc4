from datetime import datetime

import pytest

from sleepcycle.core.models.data_models import Schedule, ScheduleKind
from sleepcycle.core.scheduling.schedule_calculator import ScheduleCalculator
from sleepcycle.core.scoring.quality_score import QualityScorer
from sleepcycle.core.timing.clock_math import diff_minutes, parse_clock_time
from sleepcycle.core.timing.cycle_engine import CyclePolicy, generate_cycles


def make_schedule(bedtime="22:00", wakeup="07:00", cycles=None, hours=None, profile='adult',
                  created_at=None, kind=ScheduleKind.BEDTIME):
    """Build a schedule directly, bypassing the calculator"""
    bed = parse_clock_time(bedtime)
    wake = parse_clock_time(wakeup)
    if cycles is None:
        cycles = diff_minutes(bed, wake) // 90
    sequence = generate_cycles(bed, wake, policy=CyclePolicy.SCHEDULE_DRIVEN, cycle_count=cycles)
    if hours is None:
        hours = sequence.total_minutes / 60
    return Schedule(
        kind=kind,
        bedtime=bed,
        wakeup=wake,
        cycles=sequence.to_tuple(),
        total_sleep_hours=hours,
        age_profile_id=profile,
        created_at=created_at,
    )


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 20, 0)


@pytest.fixture
def calculator():
    return ScheduleCalculator()


@pytest.fixture
def offset_calculator():
    return ScheduleCalculator(fall_asleep_policy='standard')


@pytest.fixture
def scorer():
    return QualityScorer()


@pytest.fixture
def schedule_factory():
    return make_schedule
