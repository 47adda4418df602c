"""
Campaigns component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chosen_arrows.components.actions import ActionOutput


@dataclass(frozen=True)
class TranslationInput:
    language_code: str
    title: str
    story: str
    full_story: str | None = None
    child_name: str | None = None
    child_age: int | None = None
    location: str | None = None

    def to_row(self) -> dict[str, Any]:
        # Empty optional strings are stored as NULL
        return {
            "language_code": self.language_code,
            "title": self.title,
            "story": self.story,
            "full_story": self.full_story or None,
            "child_name": self.child_name or None,
            "child_age": self.child_age or None,
            "location": self.location or None,
        }


@dataclass(frozen=True)
class CampaignInput:
    slug: str
    status: str
    goal_amount: float
    translations: list[TranslationInput]
    raised_amount: float = 0
    donor_count: int = 0
    days_left: int | None = None
    category: str | None = None
    featured: bool = False


@dataclass(frozen=True)
class UpdateCampaignInput:
    """
    Partial campaign update. ``changes`` holds only the fields the caller set.
    Translations missing language_code, title or story are skipped.
    """

    campaign_id: str
    changes: dict[str, Any] = field(default_factory=dict)
    translations: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class CampaignListInput:
    language: str = "en"
    featured: bool = False
    limit: int | None = None
    status: str | None = None
    admin: bool = False


@dataclass(frozen=True)
class AddImageInput:
    campaign_id: str
    image_url: str
    image_alt: str | None = None
    is_primary: bool = False


@dataclass(frozen=True)
class CampaignOutput(ActionOutput):
    campaign_id: str | None = None


@dataclass(frozen=True)
class CampaignImageOutput(ActionOutput):
    image_id: str | None = None


@dataclass(frozen=True)
class CampaignUpdateOutput(ActionOutput):
    update_id: str | None = None
