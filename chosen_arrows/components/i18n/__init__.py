"""
I18n component - language fallback and detection.
"""

from .component import (
    detect_language,
    parse_accept_language,
    resolve,
    resolve_with_fallback,
)
from .models import Resolved

__all__ = [
    "detect_language",
    "parse_accept_language",
    "resolve",
    "resolve_with_fallback",
    "Resolved",
]
