"""
Scheduling module for bedtime, wake-up and nap calculations.

This module contains the age profile catalog and the calculator that turns a
target time and a profile into a cycle-aligned schedule.
"""

from sleepcycle.core.scheduling.age_profiles import AGE_PROFILES, DEFAULT_PROFILE_ID, get_age_profile
from sleepcycle.core.scheduling.schedule_calculator import FallAsleepPolicy, ScheduleCalculator

__all__ = ['AGE_PROFILES', 'DEFAULT_PROFILE_ID', 'get_age_profile', 'FallAsleepPolicy', 'ScheduleCalculator']
