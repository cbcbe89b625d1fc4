"""
Configuration loading for the Sleep Cycle Engine.
"""

from sleepcycle.config.config_manager import ConfigManager, EngineSettings

__all__ = ['ConfigManager', 'EngineSettings']
