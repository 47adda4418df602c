"""
Settings component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chosen_arrows.components.actions import ActionOutput


@dataclass(frozen=True)
class SettingInput:
    key: str
    value: dict[str, Any]
    description: str | None = None


@dataclass(frozen=True)
class ValidationRule:
    """Validation rule for one field of a setting value."""

    field_name: str
    required: bool = False
    max_length: int | None = None
    is_url: bool = False
    is_email: bool = False
    non_negative_number: bool = False


@dataclass(frozen=True)
class ValidationError:
    """Validation error with actionable message."""

    field: str
    code: str
    message: str


@dataclass(frozen=True)
class SettingsOutput(ActionOutput):
    keys: list[str] = field(default_factory=list)
