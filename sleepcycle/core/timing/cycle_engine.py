# sleepcycle/core/timing/cycle_engine.py
import logging
from enum import Enum
from typing import Iterator, Optional

from sleepcycle.core.models.data_models import ClockTime, Cycle, CycleStage
from sleepcycle.core.timing.clock_math import add_minutes, diff_minutes
from sleepcycle.utils.constants import CYCLE_LENGTH_MINUTES

logger = logging.getLogger(__name__)

# Stage labels assigned round-robin by cycle index
STAGE_ORDER = (CycleStage.LIGHT, CycleStage.DEEP, CycleStage.REM)


class CyclePolicy(str, Enum):
    """How the number of cycles between two clock times is decided"""
    FULL_CYCLES_ONLY = "full_cycles_only"
    SCHEDULE_DRIVEN = "schedule_driven"
    TRUNCATE_AT_END = "truncate_at_end"


def stage_for_index(index: int) -> CycleStage:
    return STAGE_ORDER[index % len(STAGE_ORDER)]


class CycleSequence:
    """
    Lazy, finite and restartable sequence of sleep cycles.

    Only the start time, cycle length and counts are stored. Every iteration
    rebuilds the cycles from those inputs, so iterating twice yields equal
    results and no iterator state is kept between passes.
    """

    def __init__(self, start: ClockTime, cycle_length_minutes: int, full_cycles: int, remainder_minutes: int = 0):
        if cycle_length_minutes <= 0:
            raise ValueError(f"Cycle length must be positive, got {cycle_length_minutes}")
        self.start = start
        self.cycle_length_minutes = cycle_length_minutes
        self.full_cycles = max(0, full_cycles)
        self.remainder_minutes = max(0, remainder_minutes)

    def __len__(self):
        return self.full_cycles + (1 if self.remainder_minutes else 0)

    def __iter__(self) -> Iterator[Cycle]:
        for index in range(len(self)):
            yield self._build(index)

    def __getitem__(self, index: int) -> Cycle:
        size = len(self)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("cycle index out of range")
        return self._build(index)

    def _build(self, index: int) -> Cycle:
        duration = self.cycle_length_minutes if index < self.full_cycles else self.remainder_minutes
        cycle_start = add_minutes(self.start, index * self.cycle_length_minutes)
        return Cycle(
            index=index,
            start=cycle_start,
            end=add_minutes(cycle_start, duration),
            duration_minutes=duration,
            stage=stage_for_index(index),
        )

    @property
    def total_minutes(self) -> int:
        return self.full_cycles * self.cycle_length_minutes + self.remainder_minutes

    def to_tuple(self):
        return tuple(self)

    def __repr__(self):
        return (f"CycleSequence(start={self.start}, cycle_length_minutes={self.cycle_length_minutes}, "
                f"full_cycles={self.full_cycles}, remainder_minutes={self.remainder_minutes})")


def generate_cycles(
    start: ClockTime,
    end: ClockTime,
    cycle_length_minutes: int = CYCLE_LENGTH_MINUTES,
    policy: CyclePolicy = CyclePolicy.FULL_CYCLES_ONLY,
    cycle_count: Optional[int] = None,
) -> CycleSequence:
    """
    Generate the sleep cycles between two clock times.

    Args:
        start: Time the first cycle begins
        end: Boundary the cycles run up to; earlier than start means overnight
        cycle_length_minutes: Length of one full cycle
        policy: FULL_CYCLES_ONLY drops a trailing partial cycle,
            SCHEDULE_DRIVEN emits exactly `cycle_count` cycles,
            TRUNCATE_AT_END emits a final shortened cycle that stops at `end`
        cycle_count: Fixed number of cycles for SCHEDULE_DRIVEN

    Returns:
        CycleSequence: Restartable sequence of Cycle values
    """
    if cycle_length_minutes <= 0:
        raise ValueError(f"Cycle length must be positive, got {cycle_length_minutes}")

    total = diff_minutes(start, end)
    full_cycles, remainder = divmod(total, cycle_length_minutes)

    if policy == CyclePolicy.SCHEDULE_DRIVEN:
        if cycle_count is not None:
            full_cycles = cycle_count
        sequence = CycleSequence(start, cycle_length_minutes, full_cycles)
    elif policy == CyclePolicy.TRUNCATE_AT_END:
        sequence = CycleSequence(start, cycle_length_minutes, full_cycles, remainder)
    else:
        sequence = CycleSequence(start, cycle_length_minutes, full_cycles)

    logger.debug(f"Generated {len(sequence)} cycles from {start} to {end} ({total} min, policy={policy.value})")
    return sequence
