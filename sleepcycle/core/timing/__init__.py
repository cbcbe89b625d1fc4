"""
Timing module for clock arithmetic and sleep cycle generation.
"""

from sleepcycle.core.timing.clock_math import (
    add_minutes,
    circular_distance,
    diff_minutes,
    format_clock_time,
    from_minutes,
    parse_clock_time,
    to_minutes,
)
from sleepcycle.core.timing.cycle_engine import CyclePolicy, CycleSequence, generate_cycles

__all__ = [
    'add_minutes', 'circular_distance', 'diff_minutes', 'format_clock_time', 'from_minutes',
    'parse_clock_time', 'to_minutes', 'CyclePolicy', 'CycleSequence', 'generate_cycles',
]
