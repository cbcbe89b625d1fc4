# sleepcycle/core/models/output_models.py

from pydantic import Field
from datetime import date

from sleepcycle.core.models.data_models import ClockTime, EngineModel


class Trends(EngineModel):
    """Aggregate view over the whole sleep history"""
    average_sleep_duration: float = Field(0.0, ge=0.0)
    average_cycles: float = Field(0.0, ge=0.0)
    consistency_score: float = Field(0.0, ge=0.0, le=100.0)


class AnalyticsBucket(EngineModel):
    """Per-day or per-week means for charting"""
    key: date
    count: int = Field(..., ge=1)
    average_duration: float
    average_cycles: float
    average_quality: float


class QualityBreakdown(EngineModel):
    """Band-by-band quality score"""
    duration: int = Field(..., ge=0, le=40)
    cycles: int = Field(..., ge=0, le=40)
    consistency: int = Field(..., ge=0, le=20)

    @property
    def total(self) -> int:
        return self.duration + self.cycles + self.consistency


class ScheduleOption(EngineModel):
    """One entry in a quick list of bedtime or wake-up choices"""
    time: ClockTime
    cycles: int = Field(..., ge=1)
    duration: str


class SleepTip(EngineModel):
    category: str
    title: str
    description: str


class Reminder(EngineModel):
    """A one-shot reminder ready to hand to a scheduling collaborator"""
    kind: str
    when_epoch_millis: int
    title: str
    body: str
    tag: str
