"""Supported languages and identifier shapes."""

from __future__ import annotations

import re

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "fr", "zh")
DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "Français",
    "zh": "中文",
}

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(identifier: str) -> bool:
    """True when the identifier has the 8-4-4-4-12 hex shape of a row id."""
    return bool(_UUID_RE.match(identifier))
