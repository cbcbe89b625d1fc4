"""
Notifications module for reminder planning.
"""

from sleepcycle.core.notifications.reminder_planner import ReminderPlanner, ReminderScheduler, to_epoch_millis

__all__ = ['ReminderPlanner', 'ReminderScheduler', 'to_epoch_millis']
