# sleepcycle/core/models/data_models.py

from functools import total_ordering
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, Tuple
from datetime import datetime
from enum import Enum

from sleepcycle.utils.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR


def as_local_naive(moment: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive local wall-clock time; naive values pass through"""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


class EngineModel(BaseModel):
    """Immutable base for every value the engine produces"""
    model_config = ConfigDict(frozen=True)


# Enum types for better validation
class CycleStage(str, Enum):
    LIGHT = "light"
    DEEP = "deep"
    REM = "rem"


class ScheduleKind(str, Enum):
    BEDTIME = "bedtime"
    WAKEUP = "wakeup"
    NAP = "nap"


# Clock Models
@total_ordering
class ClockTime(EngineModel):
    """Time of day on a 24-hour clock that wraps at midnight"""
    hours: int = Field(..., ge=0, le=23)
    minutes: int = Field(..., ge=0, le=59)

    def to_minutes(self) -> int:
        return self.hours * MINUTES_PER_HOUR + self.minutes

    @classmethod
    def from_minutes(cls, minutes: int) -> "ClockTime":
        # Normalize negative offsets and offsets beyond 24h into [0, 1440)
        normalized = ((minutes % MINUTES_PER_DAY) + MINUTES_PER_DAY) % MINUTES_PER_DAY
        return cls(hours=normalized // MINUTES_PER_HOUR, minutes=normalized % MINUTES_PER_HOUR)

    def __lt__(self, other):
        if not isinstance(other, ClockTime):
            return NotImplemented
        return self.to_minutes() < other.to_minutes()

    def __str__(self):
        return f"{self.hours:02d}:{self.minutes:02d}"


# Profile Models
class AgeProfile(EngineModel):
    id: str
    recommended_cycles: int = Field(..., ge=1)
    min_sleep_hours: float = Field(..., ge=0.0, le=24.0)
    max_sleep_hours: float = Field(..., ge=0.0, le=24.0)

    @model_validator(mode='after')
    def validate_hours_range(self):
        if self.max_sleep_hours < self.min_sleep_hours:
            raise ValueError('max_sleep_hours must not be below min_sleep_hours')
        return self


class SleepHoursRange(EngineModel):
    """Recommended nightly sleep for an age range"""
    id: str
    min_hours: float = Field(..., ge=0.0, le=24.0)
    max_hours: float = Field(..., ge=0.0, le=24.0)


# Schedule Models
class Cycle(EngineModel):
    index: int = Field(..., ge=0)
    start: ClockTime
    end: ClockTime
    duration_minutes: int = Field(..., gt=0)
    stage: CycleStage


class Schedule(EngineModel):
    kind: ScheduleKind
    bedtime: ClockTime
    wakeup: ClockTime
    cycles: Tuple[Cycle, ...] = ()
    total_sleep_hours: float = Field(..., ge=0.0)
    age_profile_id: Optional[str] = None
    # Recommended hours of the profile the schedule was built for
    min_sleep_hours: Optional[float] = Field(None, ge=0.0, le=24.0)
    max_sleep_hours: Optional[float] = Field(None, ge=0.0, le=24.0)
    fall_asleep_minutes: int = Field(0, ge=0)
    created_at: Optional[datetime] = None

    @field_validator('created_at')
    @classmethod
    def normalize_created_at(cls, v):
        return as_local_naive(v)

    @model_validator(mode='after')
    def validate_hours_range(self):
        if (self.min_sleep_hours is None) != (self.max_sleep_hours is None):
            raise ValueError('min_sleep_hours and max_sleep_hours must be set together')
        if self.min_sleep_hours is not None and self.max_sleep_hours < self.min_sleep_hours:
            raise ValueError('max_sleep_hours must not be below min_sleep_hours')
        return self

    @property
    def cycle_count(self) -> int:
        return len(self.cycles)

    @property
    def total_sleep_minutes(self) -> int:
        return sum(cycle.duration_minutes for cycle in self.cycles)


class SleepRecord(EngineModel):
    """A saved schedule together with the quality score it earned when saved"""
    schedule: Schedule
    quality: int = Field(..., ge=0, le=100)

    @property
    def created_at(self) -> Optional[datetime]:
        return self.schedule.created_at

    @property
    def bedtime(self) -> ClockTime:
        return self.schedule.bedtime

    @property
    def wakeup(self) -> ClockTime:
        return self.schedule.wakeup

    @property
    def total_sleep_hours(self) -> float:
        return self.schedule.total_sleep_hours

    @property
    def cycle_count(self) -> int:
        return self.schedule.cycle_count


# Preference Models
class UserPreferences(EngineModel):
    show_sleep_cycles: bool = True
    show_tips: bool = True
    use_24_hour_format: bool = True
    age_group: str = 'adult'


class NotificationSettings(EngineModel):
    enabled: bool = False
    bedtime_reminder: bool = True
    wakeup_reminder: bool = True
    reminder_minutes: int = Field(30, ge=0, le=720)
