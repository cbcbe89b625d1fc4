import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional, Protocol

from sleepcycle.core.models.data_models import NotificationSettings, Schedule, ScheduleKind
from sleepcycle.core.models.output_models import Reminder
from sleepcycle.core.timing.clock_math import format_clock_time, next_occurrence
from sleepcycle.utils.constants import default_values

logger = logging.getLogger(__name__)


class ReminderScheduler(Protocol):
    """Collaborator that fires a reminder once at or after an absolute time"""

    def schedule_at(self, when_epoch_millis: int, title: str, body: str) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


def to_epoch_millis(moment: datetime) -> int:
    """Epoch milliseconds; naive datetimes are read as local wall-clock time"""
    return int(moment.timestamp() * 1000)


class ReminderPlanner:
    """
    Computes when bedtime, wake-up and nap reminders should fire.

    The planner never starts timers. It produces absolute fire times and leaves
    the firing to a ReminderScheduler.
    """

    def __init__(self, reminder_minutes: int = default_values['reminder_minutes'], use_24_hour: bool = True):
        self.reminder_minutes = reminder_minutes
        self.use_24_hour = use_24_hour
        logger.info(f"Reminder planner initialized ({reminder_minutes} min bedtime lead)")

    def bedtime_reminder(self, schedule: Schedule, now: datetime, minutes_before: Optional[int] = None) -> Reminder:
        if minutes_before is None:
            minutes_before = self.reminder_minutes
        bedtime = next_occurrence(schedule.bedtime, now)
        fire_at = bedtime - timedelta(minutes=minutes_before)
        return Reminder(
            kind='bedtime',
            when_epoch_millis=to_epoch_millis(fire_at),
            title='Bedtime Reminder',
            body=f"Time to start preparing for bed! Your target bedtime is "
                 f"{format_clock_time(schedule.bedtime, self.use_24_hour)}.",
            tag='bedtime-reminder',
        )

    def wakeup_reminder(self, schedule: Schedule, now: datetime) -> Reminder:
        fire_at = next_occurrence(schedule.wakeup, now)
        return Reminder(
            kind='wakeup',
            when_epoch_millis=to_epoch_millis(fire_at),
            title='Wake Up Time!',
            body="Rise and shine! It's time to wake up refreshed.",
            tag='wakeup-reminder',
        )

    def nap_reminder(self, schedule: Schedule, now: datetime) -> Reminder:
        fire_at = next_occurrence(schedule.wakeup, now)
        return Reminder(
            kind='nap',
            when_epoch_millis=to_epoch_millis(fire_at),
            title='Nap Time Over',
            body='Time to wake up from your power nap!',
            tag='nap-reminder',
        )

    def plan(self, schedule: Schedule, settings: NotificationSettings, now: datetime) -> List[Reminder]:
        """
        Build the reminders the notification settings ask for.

        Args:
            schedule: Schedule to remind about
            settings: User notification settings
            now: Current local time

        Returns:
            list: Reminders whose fire time is strictly after `now`
        """
        if not settings.enabled:
            return []

        candidates = []
        if schedule.kind == ScheduleKind.NAP:
            candidates.append(self.nap_reminder(schedule, now))
        else:
            if settings.bedtime_reminder:
                candidates.append(self.bedtime_reminder(schedule, now, settings.reminder_minutes))
            if settings.wakeup_reminder:
                candidates.append(self.wakeup_reminder(schedule, now))

        now_millis = to_epoch_millis(now)
        reminders = []
        for reminder in candidates:
            if reminder.when_epoch_millis <= now_millis:
                logger.info(f"Skipping {reminder.kind} reminder: fire time is not in the future")
                continue
            reminders.append(reminder)
        return reminders

    def dispatch(self, scheduler: ReminderScheduler, reminders: Iterable[Reminder]) -> List[Any]:
        """Hand each reminder to the scheduler and return its handles in order"""
        handles = []
        for reminder in reminders:
            handles.append(scheduler.schedule_at(reminder.when_epoch_millis, reminder.title, reminder.body))
            logger.debug(f"Scheduled {reminder.kind} reminder at {reminder.when_epoch_millis}")
        return handles
