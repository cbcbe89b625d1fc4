from sleepcycle.core.models.output_models import Trends
from sleepcycle.core.recommendation.sleep_tips import cycle_tips, trend_tips


def test_cycle_tips():
    assert [t.title for t in cycle_tips(4)] == ['More Sleep Cycles']
    assert cycle_tips(5) == []
    assert cycle_tips(8) == []
    assert [t.title for t in cycle_tips(9)] == ['Possible Oversleeping']


def test_empty_history_has_no_tips():
    assert trend_tips(Trends(), 0) == []


def test_healthy_trends_have_no_tips():
    trends = Trends(average_sleep_duration=8.0, average_cycles=5.5, consistency_score=95.0)
    assert trend_tips(trends, 10) == []


def test_short_inconsistent_sleep():
    trends = Trends(average_sleep_duration=5.0, average_cycles=3.0, consistency_score=40.0)
    assert [t.category for t in trend_tips(trends, 3)] == ['duration', 'consistency', 'cycles']
    assert trend_tips(trends, 3)[0].title == 'Increase Sleep Duration'


def test_long_sleep():
    trends = Trends(average_sleep_duration=9.5, average_cycles=6.0, consistency_score=80.0)
    assert [t.title for t in trend_tips(trends, 3)] == ['Optimize Sleep Duration']
