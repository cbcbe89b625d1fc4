"""
Data models for the Sleep Cycle Engine.

Input-side values (clock times, profiles, schedules, records) live in
data_models; derived results (trends, buckets, reminders) in output_models.
"""

from sleepcycle.core.models.data_models import (
    AgeProfile,
    ClockTime,
    Cycle,
    CycleStage,
    NotificationSettings,
    Schedule,
    ScheduleKind,
    SleepHoursRange,
    SleepRecord,
    UserPreferences,
)
from sleepcycle.core.models.output_models import (
    AnalyticsBucket,
    QualityBreakdown,
    Reminder,
    ScheduleOption,
    SleepTip,
    Trends,
)

__all__ = [
    'AgeProfile', 'ClockTime', 'Cycle', 'CycleStage', 'NotificationSettings',
    'Schedule', 'ScheduleKind', 'SleepHoursRange', 'SleepRecord', 'UserPreferences',
    'AnalyticsBucket', 'QualityBreakdown', 'Reminder', 'ScheduleOption', 'SleepTip', 'Trends',
]
