"""
Settings component.
"""

from ._impl import DEFAULT_SETTINGS, validate_setting, validate_url
from .component import (
    run_get_all_settings,
    run_get_setting,
    run_update_multiple_settings,
    run_update_setting,
    seed_default_settings,
)
from .models import SettingInput, SettingsOutput, ValidationError, ValidationRule

__all__ = [
    "DEFAULT_SETTINGS",
    "run_get_all_settings",
    "run_get_setting",
    "run_update_multiple_settings",
    "run_update_setting",
    "seed_default_settings",
    "validate_setting",
    "validate_url",
    "SettingInput",
    "SettingsOutput",
    "ValidationError",
    "ValidationRule",
]
