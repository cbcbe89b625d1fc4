import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

from pydantic import Field

from sleepcycle.core.errors import InvalidDuration, SleepEngineError
from sleepcycle.core.models.data_models import AgeProfile, ClockTime, EngineModel, Schedule, ScheduleKind
from sleepcycle.core.models.output_models import ScheduleOption
from sleepcycle.core.scheduling.age_profiles import get_age_profile
from sleepcycle.core.timing.clock_math import (
    add_minutes,
    clock_time_from_datetime,
    format_duration,
    parse_clock_time,
)
from sleepcycle.core.timing.cycle_engine import CyclePolicy, generate_cycles
from sleepcycle.utils.constants import CYCLE_LENGTH_MINUTES, MINUTES_PER_DAY, MINUTES_PER_HOUR, cycles_for_good_sleep, fall_asleep_policies

logger = logging.getLogger(__name__)

TimeInput = Union[str, ClockTime]
ProfileInput = Union[str, AgeProfile]


class FallAsleepPolicy(EngineModel):
    """Minutes budgeted between going to bed and falling asleep"""
    name: str
    offset_minutes: int = Field(0, ge=0, le=180)

    @classmethod
    def named(cls, name: str) -> "FallAsleepPolicy":
        if name not in fall_asleep_policies:
            raise SleepEngineError(
                f"Unknown fall-asleep policy '{name}'. Must be one of: {', '.join(fall_asleep_policies)}"
            )
        return cls(name=name, offset_minutes=fall_asleep_policies[name])


FALL_ASLEEP_POLICIES: Dict[str, FallAsleepPolicy] = {
    name: FallAsleepPolicy.named(name) for name in fall_asleep_policies
}


class ScheduleCalculator:
    """
    Computes bedtimes, wake-up times and naps aligned to whole sleep cycles.

    The number of cycles for a night comes from the age profile; wrapping past
    midnight is left entirely to clock arithmetic.
    """

    def __init__(
        self,
        cycle_length_minutes: int = CYCLE_LENGTH_MINUTES,
        fall_asleep_policy: Union[str, FallAsleepPolicy] = 'none',
        option_cycle_range: Tuple[int, int] = cycles_for_good_sleep,
    ):
        if cycle_length_minutes <= 0:
            raise SleepEngineError(f"Cycle length must be positive, got {cycle_length_minutes}")
        if isinstance(fall_asleep_policy, str):
            fall_asleep_policy = FallAsleepPolicy.named(fall_asleep_policy)

        self.cycle_length_minutes = cycle_length_minutes
        self.fall_asleep_policy = fall_asleep_policy
        self.option_cycle_range = option_cycle_range

        logger.info(
            f"Schedule calculator initialized (cycle length {cycle_length_minutes} min, "
            f"fall-asleep policy '{fall_asleep_policy.name}')"
        )

    @property
    def fall_asleep_minutes(self) -> int:
        return self.fall_asleep_policy.offset_minutes

    def calculate_bedtime(self, wake_time: TimeInput, profile: ProfileInput, now: Optional[datetime] = None) -> Schedule:
        """
        Calculate when to go to bed to wake up at the end of a sleep cycle.

        Args:
            wake_time: Desired wake-up time ('HH:MM' or ClockTime)
            profile: Age profile or its id
            now: Optional creation timestamp for the schedule

        Returns:
            Schedule: BEDTIME schedule with the profile's recommended cycles
        """
        wake = parse_clock_time(wake_time)
        age_profile = get_age_profile(profile)

        sleep_minutes = age_profile.recommended_cycles * self.cycle_length_minutes
        bedtime = add_minutes(wake, -(sleep_minutes + self.fall_asleep_minutes))
        sleep_onset = add_minutes(bedtime, self.fall_asleep_minutes)

        cycles = generate_cycles(
            sleep_onset, wake, self.cycle_length_minutes,
            policy=CyclePolicy.SCHEDULE_DRIVEN,
            cycle_count=age_profile.recommended_cycles,
        )

        logger.debug(f"Bedtime for wake-up {wake} ({age_profile.id}): {bedtime}")
        return self._build_schedule(ScheduleKind.BEDTIME, bedtime, wake, cycles, age_profile, now)

    def calculate_wakeup(self, bed_time: TimeInput, profile: ProfileInput, now: Optional[datetime] = None) -> Schedule:
        """Calculate when to wake up after going to bed at `bed_time`"""
        bedtime = parse_clock_time(bed_time)
        age_profile = get_age_profile(profile)

        sleep_minutes = age_profile.recommended_cycles * self.cycle_length_minutes
        sleep_onset = add_minutes(bedtime, self.fall_asleep_minutes)
        wakeup = add_minutes(sleep_onset, sleep_minutes)

        cycles = generate_cycles(
            sleep_onset, wakeup, self.cycle_length_minutes,
            policy=CyclePolicy.SCHEDULE_DRIVEN,
            cycle_count=age_profile.recommended_cycles,
        )

        logger.debug(f"Wake-up for bedtime {bedtime} ({age_profile.id}): {wakeup}")
        return self._build_schedule(ScheduleKind.WAKEUP, bedtime, wakeup, cycles, age_profile, now)

    def calculate_nap(self, duration_minutes: int, now: datetime) -> Schedule:
        """
        Plan a nap starting at `now`.

        Only complete cycles are counted, so naps shorter than one cycle have none.
        Naps must be shorter than a full day.

        Raises:
            InvalidDuration: If the duration is not a whole number of minutes in (0, 1440)
        """
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, (int, float)):
            raise InvalidDuration(duration_minutes)
        if not 0 < duration_minutes < MINUTES_PER_DAY or duration_minutes != int(duration_minutes):
            raise InvalidDuration(duration_minutes)
        duration = int(duration_minutes)

        start = clock_time_from_datetime(now)
        end = add_minutes(start, duration)
        cycles = generate_cycles(start, end, self.cycle_length_minutes, policy=CyclePolicy.FULL_CYCLES_ONLY)

        logger.debug(f"Nap of {duration} min from {start}: {len(cycles)} full cycles")
        return Schedule(
            kind=ScheduleKind.NAP,
            bedtime=start,
            wakeup=end,
            cycles=cycles.to_tuple(),
            total_sleep_hours=cycles.total_minutes / MINUTES_PER_HOUR,
            age_profile_id=None,
            fall_asleep_minutes=0,
            created_at=now,
        )

    def bedtime_options(self, wake_time: TimeInput, cycle_range: Optional[Tuple[int, int]] = None) -> List[ScheduleOption]:
        """Bedtimes for each cycle count in the range, most cycles (earliest bedtime) first"""
        wake = parse_clock_time(wake_time)
        low, high = cycle_range or self.option_cycle_range

        options = []
        for cycles in range(low, high + 1):
            total_minutes = cycles * self.cycle_length_minutes + self.fall_asleep_minutes
            options.append(ScheduleOption(
                time=add_minutes(wake, -total_minutes),
                cycles=cycles,
                duration=format_duration(total_minutes),
            ))

        return list(reversed(options))

    def wakeup_options(self, bed_time: TimeInput, cycle_range: Optional[Tuple[int, int]] = None) -> List[ScheduleOption]:
        """Wake-up times for each cycle count in the range, fewest cycles first"""
        bedtime = parse_clock_time(bed_time)
        sleep_onset = add_minutes(bedtime, self.fall_asleep_minutes)
        low, high = cycle_range or self.option_cycle_range

        options = []
        for cycles in range(low, high + 1):
            sleep_minutes = cycles * self.cycle_length_minutes
            options.append(ScheduleOption(
                time=add_minutes(sleep_onset, sleep_minutes),
                cycles=cycles,
                duration=format_duration(sleep_minutes + self.fall_asleep_minutes),
            ))

        return options

    def wakeup_options_from_now(self, now: datetime, cycle_range: Optional[Tuple[int, int]] = None) -> List[ScheduleOption]:
        return self.wakeup_options(clock_time_from_datetime(now), cycle_range)

    def _build_schedule(self, kind, bedtime, wakeup, cycles, profile, now):
        return Schedule(
            kind=kind,
            bedtime=bedtime,
            wakeup=wakeup,
            cycles=cycles.to_tuple(),
            total_sleep_hours=cycles.total_minutes / MINUTES_PER_HOUR,
            age_profile_id=profile.id,
            min_sleep_hours=profile.min_sleep_hours,
            max_sleep_hours=profile.max_sleep_hours,
            fall_asleep_minutes=self.fall_asleep_minutes,
            created_at=now,
        )
