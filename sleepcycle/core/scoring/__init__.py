"""
Scoring module for per-record sleep quality.
"""

from sleepcycle.core.scoring.quality_score import CycleWindow, QualityScorer

__all__ = ['CycleWindow', 'QualityScorer']
