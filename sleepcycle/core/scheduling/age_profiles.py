"""
Catalog of age profiles used by the schedule calculator and quality scorer.

The catalog is built once from the constants module and never changes at runtime.
"""

from typing import Dict, Union

from sleepcycle.core.errors import UnknownAgeProfile
from sleepcycle.core.models.data_models import AgeProfile, SleepHoursRange
from sleepcycle.utils.constants import age_groups, sleep_recommendations

DEFAULT_PROFILE_ID = 'adult'

AGE_PROFILES: Dict[str, AgeProfile] = {
    group_id: AgeProfile(
        id=group_id,
        recommended_cycles=info['cycles'],
        min_sleep_hours=info['min_sleep'],
        max_sleep_hours=info['max_sleep'],
    )
    for group_id, info in age_groups.items()
}

SLEEP_HOURS_RANGES: Dict[str, SleepHoursRange] = {
    range_id: SleepHoursRange(id=range_id, min_hours=info['min'], max_hours=info['max'])
    for range_id, info in sleep_recommendations.items()
}


def get_age_profile(profile: Union[str, AgeProfile]) -> AgeProfile:
    """Look up a profile by id; AgeProfile values pass through unchanged"""
    if isinstance(profile, AgeProfile):
        return profile
    try:
        return AGE_PROFILES[profile]
    except (KeyError, TypeError):
        raise UnknownAgeProfile(profile, known=list(AGE_PROFILES)) from None


def get_sleep_hours_range(range_id: str) -> SleepHoursRange:
    try:
        return SLEEP_HOURS_RANGES[range_id]
    except (KeyError, TypeError):
        raise UnknownAgeProfile(range_id, known=list(SLEEP_HOURS_RANGES)) from None
