"""
Content component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UpdateContentInput:
    section_key: str
    language: str
    content: dict[str, Any]


@dataclass(frozen=True)
class SectionEditorOutput:
    """Every language's document for one section, for the editor form."""

    section_key: str
    fields: list[str] = field(default_factory=list)
    documents: dict[str, dict[str, Any] | None] = field(default_factory=dict)
