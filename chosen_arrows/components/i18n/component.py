"""
I18n component - language fallback and request language detection.

A lookup for a key in a non-English language falls back to the English row
when the requested row is absent or the lookup fails. There is no
third-language fallback.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

from .models import Resolved

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _try_lookup(lookup: Callable[[str, str], T | None], key: str, language: str) -> T | None:
    try:
        return lookup(key, language)
    except BackendError as e:
        logger.error("Lookup failed for %s (%s): %s", key, language, e.message)
        return None


def resolve(
    lookup: Callable[[str, str], T | None],
    key: str,
    language: str,
    *,
    fallback_language: str = DEFAULT_LANGUAGE,
) -> Resolved[T] | None:
    """
    Exact-language row, else the fallback-language row, else None.

    ``language`` is not validated here; callers constrain it first.
    """
    found = _try_lookup(lookup, key, language)
    if found is not None:
        return Resolved(value=found, language_code=language, requested_language=language)

    if language == fallback_language:
        return None

    found = _try_lookup(lookup, key, fallback_language)
    if found is None:
        return None
    return Resolved(value=found, language_code=fallback_language, requested_language=language)


def resolve_with_fallback(
    lookup: Callable[[str, str], T | None],
    key: str,
    language: str,
    *,
    fallback_language: str = DEFAULT_LANGUAGE,
) -> T | None:
    """Payload-only form of ``resolve``."""
    resolved = resolve(lookup, key, language, fallback_language=fallback_language)
    return resolved.value if resolved else None


def parse_accept_language(header: str | None) -> list[str]:
    """Primary subtags from an Accept-Language header, in header order, skipping q=0."""
    if not header:
        return []
    languages: list[str] = []
    for part in header.split(","):
        pieces = [p.strip() for p in part.split(";")]
        tag = pieces[0].lower()
        if not tag or tag == "*":
            continue
        weight = 1.0
        for param in pieces[1:]:
            if param.startswith("q="):
                try:
                    weight = float(param[2:])
                except ValueError:
                    weight = 0.0
        if weight <= 0:
            continue
        primary = tag.split("-")[0]
        if primary not in languages:
            languages.append(primary)
    return languages


def detect_language(
    *,
    query_language: str | None = None,
    cookie_value: str | None = None,
    accept_language: str | None = None,
    supported: Sequence[str] = SUPPORTED_LANGUAGES,
    default: str = DEFAULT_LANGUAGE,
) -> str:
    """
    Request language: explicit query parameter, then the language cookie,
    then Accept-Language, then the default. Only supported languages count.
    """
    for candidate in (query_language, cookie_value):
        if candidate and candidate.lower() in supported:
            return candidate.lower()

    for primary in parse_accept_language(accept_language):
        if primary in supported:
            return primary

    return default
