"""
Constants used throughout the Sleep Cycle Engine.
This includes the age group catalog, scoring bands, storage keys and other default values.
"""

MINUTES_PER_DAY = 1440
MINUTES_PER_HOUR = 60

# Length of one sleep cycle in minutes
CYCLE_LENGTH_MINUTES = 90

# Minutes budgeted between lying down and falling asleep
FALL_ASLEEP_MINUTES = 15

# Age groups used by the bedtime/wake-up calculators
age_groups = {
    'child': {'cycles': 9, 'min_sleep': 10, 'max_sleep': 12},
    'teen': {'cycles': 8, 'min_sleep': 9, 'max_sleep': 10},
    'adult': {'cycles': 6, 'min_sleep': 7, 'max_sleep': 9},
    'senior': {'cycles': 5, 'min_sleep': 6, 'max_sleep': 8},
}

# Sleep duration recommendations by age range (in hours)
sleep_recommendations = {
    'newborn': {'min': 14, 'max': 17},
    'infant': {'min': 12, 'max': 16},
    'toddler': {'min': 11, 'max': 14},
    'preschool': {'min': 10, 'max': 13},
    'school': {'min': 9, 'max': 12},
    'teen': {'min': 8, 'max': 10},
    'adult': {'min': 7, 'max': 9},
    'older': {'min': 7, 'max': 9},
    'senior': {'min': 7, 'max': 8},
}

# Recommended cycle counts offered by the quick bedtime/wake-up option lists
cycles_for_good_sleep = (5, 6)

# Optimal cycle-count windows for quality scoring
cycle_windows = {
    'standard': (5, 7),
    'legacy': (4, 6),
}

# Fall-asleep offsets in minutes
fall_asleep_policies = {
    'none': 0,
    'standard': FALL_ASLEEP_MINUTES,
}

# Variance ceilings (minutes^2) used to turn bed/wake-time variance into a 0-100 score
consistency_models = {
    'squared_half_day': 720 ** 2,
    'linear_half_day': 720,
}

# Weights of the quality score bands (sum to 100)
quality_weights = {
    'duration': 40,
    'cycles': 40,
    'consistency': 20,
}

# Default values for scoring and analytics
default_values = {
    'band_tolerance_hours': 1.0,  # Duration still earns half weight within this margin
    'band_tolerance_cycles': 1,  # Cycle count still earns half weight within this margin
    'band_baseline': 10,  # Score for a band far outside its range
    'consistency_window_minutes': 60,  # Bedtime drift still counted as consistent
    'weekly_window_days': 7,
    'monthly_window_days': 30,
    'reminder_minutes': 30,  # Bedtime reminder lead time
    'max_history': 10,  # Most recent saved records kept
}

# Key-value store keys
storage_keys = {
    'history': 'calculationHistory',
    'preferences': 'userPreferences',
    'notifications': 'notificationSettings',
}
