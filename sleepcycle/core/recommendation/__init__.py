"""
Recommendation module for sleep tips.

This module contains functions that turn a schedule or the history trends
into short, human-readable sleep tips.
"""

from sleepcycle.core.recommendation.sleep_tips import cycle_tips, trend_tips

__all__ = ['cycle_tips', 'trend_tips']
