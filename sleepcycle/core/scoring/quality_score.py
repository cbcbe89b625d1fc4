import logging
from typing import Dict, Optional, Tuple, Union

from pydantic import Field, model_validator

from sleepcycle.core.errors import SleepEngineError
from sleepcycle.core.models.data_models import EngineModel, Schedule, SleepRecord
from sleepcycle.core.models.output_models import QualityBreakdown
from sleepcycle.core.scheduling.age_profiles import DEFAULT_PROFILE_ID, get_age_profile
from sleepcycle.core.timing.clock_math import circular_distance
from sleepcycle.utils.constants import cycle_windows, default_values, quality_weights

logger = logging.getLogger(__name__)

ScoredInput = Union[SleepRecord, Schedule]


class CycleWindow(EngineModel):
    """Range of nightly cycle counts considered optimal"""
    name: str
    min_cycles: int = Field(..., ge=0)
    max_cycles: int = Field(..., ge=0)

    @model_validator(mode='after')
    def validate_window(self):
        if self.max_cycles < self.min_cycles:
            raise ValueError('max_cycles must not be below min_cycles')
        return self

    @classmethod
    def named(cls, name: str) -> "CycleWindow":
        if name not in cycle_windows:
            raise SleepEngineError(f"Unknown cycle window '{name}'. Must be one of: {', '.join(cycle_windows)}")
        low, high = cycle_windows[name]
        return cls(name=name, min_cycles=low, max_cycles=high)


def _as_schedule(value: Optional[ScoredInput]) -> Optional[Schedule]:
    if isinstance(value, SleepRecord):
        return value.schedule
    return value


class QualityScorer:
    """
    Scores a single sleep record from 0 to 100.

    The score is the sum of three bands: duration against the age profile's
    recommended hours (40), cycle count against the optimal window (40) and
    bedtime consistency with the immediately preceding record (20).
    """

    def __init__(
        self,
        cycle_window: Union[str, CycleWindow] = 'standard',
        default_profile_id: str = DEFAULT_PROFILE_ID,
        consistency_window_minutes: int = default_values['consistency_window_minutes'],
    ):
        if isinstance(cycle_window, str):
            cycle_window = CycleWindow.named(cycle_window)

        self.cycle_window = cycle_window
        self.default_profile = get_age_profile(default_profile_id)
        self.consistency_window_minutes = consistency_window_minutes

        self.weights: Dict[str, int] = dict(quality_weights)
        self.tolerances = {
            'duration': default_values['band_tolerance_hours'],
            'cycles': default_values['band_tolerance_cycles'],
        }
        self.baseline = default_values['band_baseline']

        logger.info(f"Quality scorer initialized (cycle window {cycle_window.min_cycles}-{cycle_window.max_cycles})")

    def score(self, record: ScoredInput, previous: Optional[ScoredInput] = None) -> int:
        """
        Calculate the quality score of a record.

        Args:
            record: SleepRecord or Schedule to score
            previous: The record saved immediately before it, if any

        Returns:
            int: Quality score (0-100)
        """
        return self.score_breakdown(record, previous).total

    def score_breakdown(self, record: ScoredInput, previous: Optional[ScoredInput] = None) -> QualityBreakdown:
        schedule = _as_schedule(record)
        previous_schedule = _as_schedule(previous)

        breakdown = QualityBreakdown(
            duration=self._score_duration(schedule),
            cycles=self._score_cycles(schedule),
            consistency=self._score_consistency(schedule, previous_schedule),
        )
        logger.debug(
            f"Quality for {schedule.kind.value} {schedule.bedtime}-{schedule.wakeup}: "
            f"duration={breakdown.duration} cycles={breakdown.cycles} "
            f"consistency={breakdown.consistency} total={breakdown.total}"
        )
        return breakdown

    def _sleep_hours_for(self, schedule: Schedule) -> Tuple[float, float]:
        """Recommended hours carried on the schedule, else those of its catalog profile"""
        if schedule.min_sleep_hours is not None:
            return schedule.min_sleep_hours, schedule.max_sleep_hours
        if schedule.age_profile_id is None:
            profile = self.default_profile
        else:
            profile = get_age_profile(schedule.age_profile_id)
        return profile.min_sleep_hours, profile.max_sleep_hours

    def _score_duration(self, schedule):
        """Score sleep duration against the profile's recommended hours"""
        low, high = self._sleep_hours_for(schedule)
        return self._band_score(
            schedule.total_sleep_hours,
            low,
            high,
            self.tolerances['duration'],
            self.weights['duration'],
        )

    def _score_cycles(self, schedule):
        """Score the number of completed cycles against the optimal window"""
        return self._band_score(
            schedule.cycle_count,
            self.cycle_window.min_cycles,
            self.cycle_window.max_cycles,
            self.tolerances['cycles'],
            self.weights['cycles'],
        )

    def _score_consistency(self, schedule, previous):
        """Full bonus when bedtime stays close to the previous record's bedtime"""
        if previous is None:
            return self.weights['consistency']
        drift = circular_distance(schedule.bedtime, previous.bedtime)
        if drift <= self.consistency_window_minutes:
            return self.weights['consistency']
        return 0

    def _band_score(self, value, low, high, tolerance, weight):
        if low <= value <= high:
            # Ideal range - full weight
            return weight
        elif low - tolerance <= value <= high + tolerance:
            # Near the range - half weight
            return weight // 2
        else:
            return min(self.baseline, weight)
