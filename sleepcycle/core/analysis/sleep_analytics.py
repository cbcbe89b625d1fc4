"""
Module for aggregating a history of saved sleep records into trends and buckets.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from pydantic import Field

from sleepcycle.core.errors import SleepEngineError
from sleepcycle.core.models.data_models import EngineModel, Schedule, SleepRecord, as_local_naive
from sleepcycle.core.models.output_models import AnalyticsBucket, Trends
from sleepcycle.core.scoring.quality_score import QualityScorer
from sleepcycle.utils.constants import consistency_models, default_values

logger = logging.getLogger(__name__)


class ConsistencyModel(EngineModel):
    """
    Turns bed/wake-time variance into a 0-100 consistency score.

    A variance equal to `max_variance` (minutes squared) scores 0; anything
    above is floored at 0.
    """
    name: str
    max_variance: float = Field(..., gt=0)

    @classmethod
    def named(cls, name: str) -> "ConsistencyModel":
        if name not in consistency_models:
            raise SleepEngineError(
                f"Unknown consistency model '{name}'. Must be one of: {', '.join(consistency_models)}"
            )
        return cls(name=name, max_variance=consistency_models[name])

    def score(self, minutes: Sequence[int]) -> float:
        """Score one series of minutes-since-midnight values"""
        # Population variance of the raw values, not of consecutive deltas
        variance = float(np.var(np.asarray(minutes, dtype=float)))
        return max(0.0, 100.0 - (variance / self.max_variance) * 100.0)


def day_key(moment: datetime) -> date:
    return moment.date()


def week_key(moment: datetime) -> date:
    """Sunday that starts the week containing `moment`"""
    day = moment.date()
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _group(records: Iterable[SleepRecord], key_func: Callable[[datetime], date]) -> List[AnalyticsBucket]:
    rows = []
    for record in records:
        if record.created_at is None:
            logger.debug("Skipping record without created_at while grouping")
            continue
        rows.append({
            'bucket': key_func(record.created_at),
            'duration': record.total_sleep_hours,
            'cycles': record.cycle_count,
            'quality': record.quality,
        })

    if not rows:
        return []

    data = pd.DataFrame(rows)
    grouped = data.groupby('bucket', sort=True).agg(
        count=('duration', 'size'),
        average_duration=('duration', 'mean'),
        average_cycles=('cycles', 'mean'),
        average_quality=('quality', 'mean'),
    )

    return [
        AnalyticsBucket(
            key=bucket,
            count=int(row['count']),
            average_duration=float(row['average_duration']),
            average_cycles=float(row['average_cycles']),
            average_quality=float(row['average_quality']),
        )
        for bucket, row in grouped.iterrows()
    ]


def group_by_day(records: Iterable[SleepRecord]) -> List[AnalyticsBucket]:
    """
    Group records by the local calendar date of their creation.

    Args:
        records: Sleep records to group

    Returns:
        list: One AnalyticsBucket per date, oldest first; empty for no records
    """
    return _group(records, day_key)


def group_by_week(records: Iterable[SleepRecord]) -> List[AnalyticsBucket]:
    """Group records by Sunday-aligned week, oldest week first"""
    return _group(records, week_key)


class AnalyticsAggregator:
    """
    Owns the history of saved sleep records, keeping the most recent `max_history`.

    Trends are recomputed on every mutation and kept as an immutable snapshot,
    so reading them never touches the history.
    """

    def __init__(
        self,
        history: Optional[Iterable[SleepRecord]] = None,
        scorer: Optional[QualityScorer] = None,
        consistency_model: Union[str, ConsistencyModel] = 'squared_half_day',
        max_history: Optional[int] = default_values['max_history'],
    ):
        if isinstance(consistency_model, str):
            consistency_model = ConsistencyModel.named(consistency_model)
        if max_history is not None and max_history < 1:
            raise SleepEngineError(f"max_history must be at least 1, got {max_history}")

        self.scorer = scorer or QualityScorer()
        self.consistency_model = consistency_model
        self.max_history = max_history
        self._records: Tuple[SleepRecord, ...] = self._cap(tuple(history or ()))
        self._trends = self._compute_trends()

        logger.info(
            f"Analytics aggregator initialized with {len(self._records)} records "
            f"(consistency model '{consistency_model.name}')"
        )

    @property
    def records(self) -> Tuple[SleepRecord, ...]:
        return self._records

    def __len__(self):
        return len(self._records)

    def add_record(self, schedule: Schedule, now: Optional[datetime] = None) -> SleepRecord:
        """
        Score a schedule against the latest saved record and append it.

        Args:
            schedule: The accepted schedule
            now: Creation time used when the schedule has none (defaults to local now)

        Returns:
            SleepRecord: The record that was appended
        """
        return self.append_record(self.build_record(schedule, now))

    def build_record(self, schedule: Schedule, now: Optional[datetime] = None) -> SleepRecord:
        """Score a schedule against the latest saved record without appending it"""
        if schedule.created_at is None:
            schedule = schedule.model_copy(update={'created_at': as_local_naive(now) or datetime.now()})

        previous = self._records[-1] if self._records else None
        return SleepRecord(schedule=schedule, quality=self.scorer.score(schedule, previous))

    def append_record(self, record: SleepRecord) -> SleepRecord:
        """Append an already scored record, dropping the oldest beyond max_history"""
        self._records = self.with_record(record)
        self._trends = self._compute_trends()

        logger.debug(
            f"Added {record.schedule.kind.value} record with quality {record.quality}; "
            f"history size {len(self._records)}"
        )
        return record

    def with_record(self, record: SleepRecord) -> Tuple[SleepRecord, ...]:
        """History as it would be after appending `record`, without changing it"""
        return self._cap(self._records + (record,))

    def _cap(self, records: Tuple[SleepRecord, ...]) -> Tuple[SleepRecord, ...]:
        if self.max_history is None or len(records) <= self.max_history:
            return records
        return records[-self.max_history:]

    def clear_history(self):
        self._records = ()
        self._trends = self._compute_trends()
        logger.info("Sleep history cleared")

    def trends(self) -> Trends:
        return self._trends

    def history(self, days: int, now: Optional[datetime] = None) -> List[SleepRecord]:
        """Records created within the last `days` days, most recent last"""
        now = as_local_naive(now) or datetime.now()
        cutoff = now - timedelta(days=days)
        recent = [
            record for record in self._records
            if record.created_at is not None and record.created_at >= cutoff
        ]
        return sorted(recent, key=lambda record: record.created_at)

    def weekly_analytics(self, now: Optional[datetime] = None) -> List[AnalyticsBucket]:
        """Per-day buckets for the trailing week"""
        return group_by_day(self.history(default_values['weekly_window_days'], now))

    def monthly_analytics(self, now: Optional[datetime] = None) -> List[AnalyticsBucket]:
        """Per-week buckets for the trailing month"""
        return group_by_week(self.history(default_values['monthly_window_days'], now))

    group_by_day = staticmethod(group_by_day)
    group_by_week = staticmethod(group_by_week)

    def _compute_trends(self) -> Trends:
        if not self._records:
            return Trends()

        durations = np.array([record.total_sleep_hours for record in self._records], dtype=float)
        cycles = np.array([record.cycle_count for record in self._records], dtype=float)

        return Trends(
            average_sleep_duration=float(durations.mean()),
            average_cycles=float(cycles.mean()),
            consistency_score=self._consistency_score(),
        )

    def _consistency_score(self) -> float:
        # A single record has no spread to measure
        if len(self._records) < 2:
            return 0.0

        bedtimes = [record.bedtime.to_minutes() for record in self._records]
        wake_times = [record.wakeup.to_minutes() for record in self._records]

        bedtime_score = self.consistency_model.score(bedtimes)
        wake_time_score = self.consistency_model.score(wake_times)
        return (bedtime_score + wake_time_score) / 2
