"""
I18n component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A looked-up payload and the language it actually came from."""

    value: T
    language_code: str
    requested_language: str

    @property
    def is_fallback(self) -> bool:
        return self.language_code != self.requested_language
