import pytest

from sleepcycle.core.errors import SleepEngineError
from sleepcycle.core.models.data_models import AgeProfile, ScheduleKind, SleepRecord
from sleepcycle.core.scoring.quality_score import CycleWindow, QualityScorer


def test_optimal_record_without_previous_scores_100(scorer, schedule_factory):
    record = schedule_factory(cycles=6, hours=8.0)
    assert scorer.score(record) == 100


def test_calculated_adult_bedtime_scores_100(scorer, calculator):
    assert scorer.score(calculator.calculate_bedtime("07:00", "adult")) == 100


@pytest.mark.parametrize("hours, expected", [
    (7.0, 40),
    (9.0, 40),
    (6.5, 20),
    (6.0, 20),
    (10.0, 20),
    (5.5, 10),
    (10.5, 10),
])
def test_duration_band(scorer, schedule_factory, hours, expected):
    breakdown = scorer.score_breakdown(schedule_factory(cycles=6, hours=hours))
    assert breakdown.duration == expected


@pytest.mark.parametrize("cycles, expected", [
    (5, 40),
    (7, 40),
    (4, 20),
    (8, 20),
    (3, 10),
    (9, 10),
])
def test_cycle_band(scorer, schedule_factory, cycles, expected):
    breakdown = scorer.score_breakdown(schedule_factory(cycles=cycles, hours=8.0))
    assert breakdown.cycles == expected


def test_legacy_cycle_window(schedule_factory):
    scorer = QualityScorer(cycle_window='legacy')
    assert scorer.score_breakdown(schedule_factory(cycles=4, hours=8.0)).cycles == 40
    assert scorer.score_breakdown(schedule_factory(cycles=7, hours=8.0)).cycles == 20


def test_unknown_cycle_window():
    with pytest.raises(SleepEngineError):
        CycleWindow.named('bimodal')


def test_consistency_bonus_across_midnight(scorer, schedule_factory):
    previous = schedule_factory(bedtime="23:30", wakeup="08:30")
    current = schedule_factory(bedtime="00:10", wakeup="09:10")
    assert scorer.score_breakdown(current, previous).consistency == 20


def test_consistency_bonus_window_is_inclusive(scorer, schedule_factory):
    previous = schedule_factory(bedtime="22:00", wakeup="07:00")
    current = schedule_factory(bedtime="23:00", wakeup="08:00")
    assert scorer.score_breakdown(current, previous).consistency == 20


def test_consistency_bonus_lost_for_large_drift(scorer, schedule_factory):
    previous = schedule_factory(bedtime="21:00", wakeup="06:00")
    current = schedule_factory(bedtime="23:00", wakeup="08:00")
    assert scorer.score(current, previous) == 80


def test_profile_ranges_drive_duration_band(scorer, schedule_factory):
    # 9.5 hours is too long for an adult but ideal for a teen
    assert scorer.score_breakdown(schedule_factory(cycles=6, hours=9.5, profile='adult')).duration == 20
    assert scorer.score_breakdown(schedule_factory(cycles=6, hours=9.5, profile='teen')).duration == 40


def test_schedule_without_profile_uses_default(scorer, calculator, now):
    nap = calculator.calculate_nap(100, now=now)
    breakdown = scorer.score_breakdown(nap)
    # 1.5 hours and one cycle are far outside the adult ranges
    assert (breakdown.duration, breakdown.cycles, breakdown.consistency) == (10, 10, 20)
    assert breakdown.total == 40


def test_accepts_records(scorer, schedule_factory):
    previous = SleepRecord(schedule=schedule_factory(bedtime="21:00", wakeup="06:00"), quality=100)
    current = SleepRecord(schedule=schedule_factory(bedtime="23:30", wakeup="07:00", cycles=5), quality=0)
    assert scorer.score(current, previous) == 80


def test_score_stays_in_range(scorer, schedule_factory):
    worst = schedule_factory(bedtime="12:00", wakeup="13:00", cycles=0, hours=0.0, kind=ScheduleKind.NAP)
    previous = schedule_factory(bedtime="22:00", wakeup="07:00")
    assert scorer.score(worst, previous) == 20


def test_custom_profile_hours_on_schedule(scorer, calculator):
    night_shift = AgeProfile(id="night-shift", recommended_cycles=5, min_sleep_hours=5, max_sleep_hours=6)
    schedule = calculator.calculate_wakeup("08:00", night_shift)
    # 7.5 hours would be ideal for an adult but is well over this profile's range
    assert scorer.score_breakdown(schedule).duration == 10
