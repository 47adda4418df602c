"""
Setting value validation and seed values.

Known keys have per-field rules; unknown keys are stored as given.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlparse

from .models import ValidationError, ValidationRule

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

RULES: dict[str, list[ValidationRule]] = {
    "contact_info": [
        ValidationRule(field_name="email", required=True, max_length=255, is_email=True),
        ValidationRule(field_name="phone", max_length=50),
        ValidationRule(field_name="address", max_length=255),
    ],
    "social_links": [
        ValidationRule(field_name="facebook", is_url=True),
        ValidationRule(field_name="twitter", is_url=True),
        ValidationRule(field_name="instagram", is_url=True),
        ValidationRule(field_name="linkedin", is_url=True),
    ],
    "hero_stats": [
        ValidationRule(field_name="childrenSupported", non_negative_number=True),
        ValidationRule(field_name="activeMentors", non_negative_number=True),
        ValidationRule(field_name="fundsRaised", non_negative_number=True),
    ],
}

DEFAULT_SETTINGS: dict[str, tuple[dict[str, Any], str]] = {
    "contact_info": (
        {
            "email": "ChosenArrowsFoundation@gmail.com",
            "phone": "+254-XXX-XXXXXX",
            "address": "Nairobi, Kenya",
        },
        "Contact information displayed in footer",
    ),
    "social_links": (
        {
            "facebook": "https://facebook.com/chosenarrowsfoundation",
            "twitter": "https://twitter.com/chosenarrows",
            "instagram": "https://instagram.com/chosenarrows",
            "linkedin": "https://linkedin.com/company/chosen-arrows-foundation",
        },
        "Social media links for footer",
    ),
    "hero_stats": (
        {
            "childrenSupported": 45,
            "activeMentors": 8,
            "fundsRaised": 15000,
        },
        "Hero section statistics",
    ),
}


def validate_url(value: str) -> bool:
    """Validate URL format."""
    if not value:
        return True
    try:
        result = urlparse(value)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def _check(key: str, rule: ValidationRule, value: Any) -> list[ValidationError]:
    field = f"{key}.{rule.field_name}"
    if value is None or value == "":
        if rule.required:
            return [ValidationError(field, "required", f"Field '{field}' is required")]
        return []

    if rule.non_negative_number:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return [ValidationError(field, "invalid_type", f"Field '{field}' must be a number")]
        if value < 0:
            return [ValidationError(field, "min_value", f"Field '{field}' cannot be negative")]
        return []

    if not isinstance(value, str):
        return [ValidationError(field, "invalid_type", f"Field '{field}' must be a string")]
    if rule.max_length is not None and len(value) > rule.max_length:
        return [
            ValidationError(
                field, "max_length", f"Field '{field}' must not exceed {rule.max_length} characters"
            )
        ]
    if rule.is_url and not validate_url(value):
        return [
            ValidationError(
                field,
                "invalid_url",
                f"Invalid URL format for '{rule.field_name}': must be http or https URL",
            )
        ]
    if rule.is_email and not EMAIL_PATTERN.match(value):
        return [
            ValidationError(
                field, "invalid_email", f"Field '{field}' must be a valid email address"
            )
        ]
    return []


def validate_setting(key: str, value: Any) -> list[ValidationError]:
    if not isinstance(value, dict):
        return [ValidationError(key, "invalid_type", f"Setting '{key}' must be an object")]
    errors: list[ValidationError] = []
    for rule in RULES.get(key, []):
        errors.extend(_check(key, rule, value.get(rule.field_name)))
    return errors


def field_errors(errors: list[ValidationError]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped
