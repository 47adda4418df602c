"""
Content section documents.

Each ``section_key`` owns one document shape. The editor and the data layer
share these models, so a document written for ``hero`` is always a valid hero
document. Sections whose copy is free-form (navigation, footer, long pages)
accept any string-keyed JSON object.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

SECTION_KEYS: tuple[str, ...] = (
    "hero",
    "values",
    "impact",
    "community",
    "cta",
    "footer",
    "navigation",
    "about",
    "contact",
    "mentorship",
    "donate",
    "donate-form",
    "not-found",
)


class SectionDocument(BaseModel):
    """Base for section documents. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")


class HeroSection(SectionDocument):
    title: str
    subtitle: str | None = None
    badge: str | None = None
    cta: str | None = None
    ctaMentor: str | None = None
    childrenSupported: str | None = None
    activeMentors: str | None = None
    fundsRaised: str | None = None


class ValueItem(BaseModel):
    key: str
    title: str
    description: str


class Vision(BaseModel):
    title: str
    quote: str


class ValuesSection(SectionDocument):
    title: str
    subtitle: str | None = None
    description: str | None = None
    values: list[ValueItem] = []
    vision: Vision | None = None


class ImpactSection(SectionDocument):
    title: str
    subtitle: str | None = None
    transparencyTitle: str | None = None
    transparencyDesc: str | None = None
    accountability: str | None = None
    realTime: str | None = None
    verified: str | None = None


class CommunitySection(SectionDocument):
    title: str
    subtitle: str | None = None
    imageCaption: str | None = None
    avgRating: str | None = None
    donorRetention: str | None = None
    transparency: str | None = None


class CtaSection(SectionDocument):
    title: str
    subtitle: str | None = None
    mainCta: str | None = None


class NotFoundSection(SectionDocument):
    title: str
    message: str | None = None
    returnHome: str | None = None


SECTION_SCHEMAS: dict[str, type[SectionDocument]] = {
    "hero": HeroSection,
    "values": ValuesSection,
    "impact": ImpactSection,
    "community": CommunitySection,
    "cta": CtaSection,
    "not-found": NotFoundSection,
}


def schema_for(
    section_key: str,
    section_keys: Sequence[str] = SECTION_KEYS,
) -> type[SectionDocument] | None:
    """Document model for a section key, or None when the key is not in ``section_keys``."""
    if section_key not in section_keys:
        return None
    return SECTION_SCHEMAS.get(section_key, SectionDocument)


def validate_section_content(
    section_key: str,
    document: dict[str, Any],
    section_keys: Sequence[str] = SECTION_KEYS,
) -> tuple[dict[str, Any] | None, dict[str, list[str]]]:
    """
    Validate a section document against its schema.

    Returns (normalized_document, field_errors). On failure the document is None.
    """
    model = schema_for(section_key, section_keys)
    if model is None:
        return None, {"section_key": [f"Unknown content section: {section_key}"]}

    if not isinstance(document, dict):
        return None, {"content": ["Content must be a JSON object"]}

    try:
        parsed = model.model_validate(document)
    except PydanticValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            loc = error.get("loc", ())
            field = ".".join(str(part) for part in loc) if loc else "content"
            errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
        return None, errors

    return parsed.model_dump(exclude_none=True), {}
