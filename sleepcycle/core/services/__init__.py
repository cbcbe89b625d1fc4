"""
Service layer combining the engine components for an application shell.
"""

from sleepcycle.core.services.sleep_service import SleepService

__all__ = ['SleepService']
