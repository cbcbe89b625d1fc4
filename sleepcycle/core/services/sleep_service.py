# sleepcycle/core/services/sleep_service.py
import logging
from datetime import datetime
from typing import Any, List, Optional

from sleepcycle.config.config_manager import ConfigManager, EngineSettings
from sleepcycle.core.analysis.sleep_analytics import AnalyticsAggregator
from sleepcycle.core.models.data_models import Schedule, SleepRecord
from sleepcycle.core.models.output_models import AnalyticsBucket, Reminder, SleepTip, Trends
from sleepcycle.core.notifications.reminder_planner import ReminderPlanner, ReminderScheduler
from sleepcycle.core.recommendation.sleep_tips import cycle_tips, trend_tips
from sleepcycle.core.repositories.history_repository import HistoryRepository, KeyValueStore
from sleepcycle.core.scheduling.schedule_calculator import ScheduleCalculator
from sleepcycle.core.scoring.quality_score import QualityScorer

logger = logging.getLogger(__name__)


class SleepService:
    """
    Facade wiring the calculator, aggregator, repository and reminder planner.

    Owned by the caller. Every method is synchronous; persistence errors raised
    by the store propagate unchanged.
    """

    def __init__(self, calculator, aggregator, repository, reminder_planner):
        self.calculator = calculator
        self.aggregator = aggregator
        self.repository = repository
        self.reminder_planner = reminder_planner

    @classmethod
    def from_config(cls, store: KeyValueStore, config: Optional[ConfigManager] = None) -> "SleepService":
        """Build a service from configuration, seeding the history from the store"""
        settings: EngineSettings = (config or ConfigManager()).settings()

        repository = HistoryRepository(
            store,
            error_handling=settings.storage_error_handling,
            max_history=settings.max_history,
        )
        calculator = ScheduleCalculator(
            cycle_length_minutes=settings.cycle_length_minutes,
            fall_asleep_policy=settings.fall_asleep_policy,
        )
        scorer = QualityScorer(
            cycle_window=settings.cycle_window,
            default_profile_id=settings.default_profile,
            consistency_window_minutes=settings.consistency_window_minutes,
        )
        aggregator = AnalyticsAggregator(
            history=repository.load_history(),
            scorer=scorer,
            consistency_model=settings.consistency_model,
            max_history=settings.max_history,
        )
        planner = ReminderPlanner(
            reminder_minutes=settings.reminder_minutes,
            use_24_hour=settings.use_24_hour_format,
        )
        return cls(calculator, aggregator, repository, planner)

    def calculate_bedtime(self, wake_time, profile=None, now: Optional[datetime] = None) -> Schedule:
        return self.calculator.calculate_bedtime(wake_time, profile or self._preferred_profile(), now)

    def calculate_wakeup(self, bed_time, profile=None, now: Optional[datetime] = None) -> Schedule:
        return self.calculator.calculate_wakeup(bed_time, profile or self._preferred_profile(), now)

    def calculate_nap(self, duration_minutes: int, now: datetime) -> Schedule:
        return self.calculator.calculate_nap(duration_minutes, now)

    def save_schedule(self, schedule: Schedule, now: Optional[datetime] = None) -> SleepRecord:
        """
        Accept a schedule: score it, persist the new history, then append it in memory.

        If the store fails the error propagates and the in-memory history is unchanged.
        """
        record = self.aggregator.build_record(schedule, now)
        self.repository.save_history(self.aggregator.with_record(record))
        self.aggregator.append_record(record)
        logger.info(f"Saved {schedule.kind.value} schedule (quality {record.quality})")
        return record

    def trends(self) -> Trends:
        return self.aggregator.trends()

    def history(self, days: int, now: Optional[datetime] = None) -> List[SleepRecord]:
        return self.aggregator.history(days, now)

    def weekly_analytics(self, now: Optional[datetime] = None) -> List[AnalyticsBucket]:
        return self.aggregator.weekly_analytics(now)

    def monthly_analytics(self, now: Optional[datetime] = None) -> List[AnalyticsBucket]:
        return self.aggregator.monthly_analytics(now)

    def tips(self, schedule: Optional[Schedule] = None) -> List[SleepTip]:
        """Tips for a schedule's cycles (when given) followed by history tips"""
        tips = []
        if schedule is not None:
            tips.extend(cycle_tips(schedule.cycle_count))
        tips.extend(trend_tips(self.aggregator.trends(), len(self.aggregator)))
        return tips

    def plan_reminders(self, schedule: Schedule, now: datetime) -> List[Reminder]:
        settings = self.repository.get_notification_settings()
        return self.reminder_planner.plan(schedule, settings, now)

    def schedule_reminders(self, scheduler: ReminderScheduler, schedule: Schedule, now: datetime) -> List[Any]:
        """Plan reminders for a schedule and hand them to the scheduler"""
        return self.reminder_planner.dispatch(scheduler, self.plan_reminders(schedule, now))

    def clear_history(self):
        self.aggregator.clear_history()
        self.repository.clear_history()

    def _preferred_profile(self) -> str:
        return self.repository.get_preferences().age_group
