"""
Analysis module for sleep history trends.

This module contains the aggregator that owns the saved history and the
functions that bucket records by day and week.
"""

from sleepcycle.core.analysis.sleep_analytics import (
    AnalyticsAggregator,
    ConsistencyModel,
    group_by_day,
    group_by_week,
)

__all__ = ['AnalyticsAggregator', 'ConsistencyModel', 'group_by_day', 'group_by_week']
