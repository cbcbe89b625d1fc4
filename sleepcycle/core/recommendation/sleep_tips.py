"""
Module for generating sleep tips from a schedule's cycles and from history trends.
"""

from typing import List

from sleepcycle.core.models.output_models import SleepTip, Trends

# Thresholds that trigger each tip
tip_thresholds = {
    'min_cycles': 5,  # Fewer cycles in a schedule suggests too little rest
    'max_cycles': 8,  # More cycles in a schedule suggests oversleeping
    'min_average_hours': 7,
    'max_average_hours': 9,
    'min_consistency': 70,
    'min_average_cycles': 4,
}


def cycle_tips(cycle_count: int) -> List[SleepTip]:
    """
    Generate tips for a single schedule based on how many cycles it contains.

    Args:
        cycle_count: Number of cycles in the schedule

    Returns:
        list: SleepTip values, empty when the cycle count is in the healthy range
    """
    tips = []

    if cycle_count < tip_thresholds['min_cycles']:
        tips.append(SleepTip(
            category='cycles',
            title='More Sleep Cycles',
            description='Try to get more sleep cycles for better rest.',
        ))

    if cycle_count > tip_thresholds['max_cycles']:
        tips.append(SleepTip(
            category='cycles',
            title='Possible Oversleeping',
            description='You might be oversleeping. Consider reducing sleep duration.',
        ))

    return tips


def trend_tips(trends: Trends, record_count: int) -> List[SleepTip]:
    """
    Generate tips from history trends.

    An empty history produces no tips.
    """
    if record_count == 0:
        return []

    tips = []

    # Duration-based tips
    if trends.average_sleep_duration < tip_thresholds['min_average_hours']:
        tips.append(SleepTip(
            category='duration',
            title='Increase Sleep Duration',
            description='Your average sleep duration is below recommended levels. Try going to bed 30 minutes earlier.',
        ))
    elif trends.average_sleep_duration > tip_thresholds['max_average_hours']:
        tips.append(SleepTip(
            category='duration',
            title='Optimize Sleep Duration',
            description='You might be sleeping too much. Try reducing your sleep time by 30 minutes.',
        ))

    # Consistency-based tips
    if trends.consistency_score < tip_thresholds['min_consistency']:
        tips.append(SleepTip(
            category='consistency',
            title='Improve Sleep Consistency',
            description='Try to maintain a more consistent sleep schedule by going to bed and waking up at the same time.',
        ))

    # Cycle-based tips
    if trends.average_cycles < tip_thresholds['min_average_cycles']:
        tips.append(SleepTip(
            category='cycles',
            title='Increase Sleep Cycles',
            description="You're getting fewer than optimal sleep cycles. Consider adjusting your sleep schedule.",
        ))

    return tips
