# sleepcycle/config/config_manager.py
import copy
import logging
import os

import yaml
from pydantic import BaseModel, Field, field_validator

from sleepcycle.utils.constants import age_groups, consistency_models, cycle_windows, fall_asleep_policies
from sleepcycle.utils.data_validation import ERROR_HANDLING_MODES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'defaults.yaml')


def _deep_merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class EngineSettings(BaseModel):
    """Validated engine settings"""
    cycle_length_minutes: int = Field(90, gt=0, le=240)
    fall_asleep_policy: str = 'none'
    default_profile: str = 'adult'
    cycle_window: str = 'standard'
    consistency_window_minutes: int = Field(60, ge=0, le=720)
    consistency_model: str = 'squared_half_day'
    reminder_minutes: int = Field(30, ge=0, le=720)
    use_24_hour_format: bool = True
    storage_error_handling: str = 'filter'
    max_history: int = Field(10, ge=1)

    @field_validator('fall_asleep_policy')
    @classmethod
    def validate_fall_asleep_policy(cls, v):
        if v not in fall_asleep_policies:
            raise ValueError(f'Invalid fall-asleep policy. Must be one of: {", ".join(fall_asleep_policies)}')
        return v

    @field_validator('default_profile')
    @classmethod
    def validate_default_profile(cls, v):
        if v not in age_groups:
            raise ValueError(f'Invalid default profile. Must be one of: {", ".join(age_groups)}')
        return v

    @field_validator('cycle_window')
    @classmethod
    def validate_cycle_window(cls, v):
        if v not in cycle_windows:
            raise ValueError(f'Invalid cycle window. Must be one of: {", ".join(cycle_windows)}')
        return v

    @field_validator('consistency_model')
    @classmethod
    def validate_consistency_model(cls, v):
        if v not in consistency_models:
            raise ValueError(f'Invalid consistency model. Must be one of: {", ".join(consistency_models)}')
        return v

    @field_validator('storage_error_handling')
    @classmethod
    def validate_storage_error_handling(cls, v):
        if v not in ERROR_HANDLING_MODES:
            raise ValueError(f'Invalid error handling mode. Must be one of: {", ".join(ERROR_HANDLING_MODES)}')
        return v


class ConfigManager:
    """Central configuration manager"""

    def __init__(self, config_path=None):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self):
        """Load packaged defaults, then merge the user file over them"""
        with open(DEFAULT_CONFIG_PATH, 'r') as file:
            config = yaml.safe_load(file) or {}

        if self.config_path:
            with open(self.config_path, 'r') as file:
                overrides = yaml.safe_load(file) or {}
            config = _deep_merge(config, overrides)
            logger.info(f"Loaded configuration overrides from {self.config_path}")

        return config

    def get(self, key, default=None):
        """Get configuration value"""
        # Support nested keys with dot notation
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def settings(self) -> EngineSettings:
        """Validate the merged configuration into EngineSettings"""
        return EngineSettings(
            cycle_length_minutes=self.get('engine.cycle_length_minutes', 90),
            fall_asleep_policy=self.get('engine.fall_asleep_policy', 'none'),
            default_profile=self.get('engine.default_profile', 'adult'),
            cycle_window=self.get('scoring.cycle_window', 'standard'),
            consistency_window_minutes=self.get('scoring.consistency_window_minutes', 60),
            consistency_model=self.get('analytics.consistency_model', 'squared_half_day'),
            reminder_minutes=self.get('notifications.reminder_minutes', 30),
            use_24_hour_format=self.get('notifications.use_24_hour_format', True),
            storage_error_handling=self.get('storage.error_handling', 'filter'),
            max_history=self.get('storage.max_history', 10),
        )
