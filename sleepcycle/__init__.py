
"""
Core modules for the Sleep Cycle Engine.

This package contains the core functionality for:
- Clock arithmetic on a wrapping 24-hour clock
- Sleep cycle generation and schedule calculation
- Sleep quality scoring
- Trend and consistency analytics
- Reminder planning and history persistence
"""

__version__ = "0.3.0"
