from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# --- Enums / Literals ---
CampaignStatus = Literal["draft", "active", "completed", "archived"]

CAMPAIGN_STATUSES: tuple[str, ...] = ("draft", "active", "completed", "archived")

# --- Admin & Auth ---


class Identity(BaseModel):
    """An authenticated identity from the backend's auth service."""

    id: str
    email: str


class AdminPrincipal(BaseModel):
    """The admin acting on a request, as returned by the admin gate."""

    id: str
    role: str
    full_name: str | None = None


# --- Content ---


class TranslationStatus(BaseModel):
    language_code: str
    updated_at: datetime | None = None


class SectionOverview(BaseModel):
    """A content section with the languages it has been translated into."""

    id: str
    section_key: str
    content_type: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    translations: list[TranslationStatus] = Field(default_factory=list)


# --- Campaigns ---


class Campaign(BaseModel):
    id: str
    slug: str
    status: CampaignStatus = "draft"
    goal_amount: float = 0
    raised_amount: float = 0
    donor_count: int = 0
    days_left: int | None = None
    category: str | None = None
    featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CampaignUpdate(BaseModel):
    id: str
    campaign_id: str
    update_date: str
    content: str
    created_at: datetime | None = None
    created_by: str | None = None


class CampaignTranslationView(BaseModel):
    """
    Localized campaign copy after fallback resolution.

    ``language_code`` is the language the copy actually came from; it differs
    from ``requested_language`` when the English row was substituted.
    ``fallback_fields`` lists fields filled from English on a partial row.
    """

    language_code: str
    requested_language: str
    is_fallback: bool = False
    fallback_fields: list[str] = Field(default_factory=list)
    title: str
    story: str
    full_story: str | None = None
    child_name: str | None = None
    child_age: int | None = None
    location: str | None = None


class CampaignImageView(BaseModel):
    id: str | None = None
    image_url: str
    image_alt: str | None = None
    is_primary: bool = False
    display_order: int = 0


class CampaignView(BaseModel):
    """Flat campaign projection handed to pages and admin lists."""

    id: str
    slug: str
    status: str
    goal_amount: float = 0
    raised_amount: float = 0
    donor_count: int = 0
    days_left: int | None = None
    category: str = ""
    featured: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    translation: CampaignTranslationView | None = None
    primary_image: str | None = None
    images: list[CampaignImageView] = Field(default_factory=list)

    @property
    def progress_percent(self) -> int:
        if not self.goal_amount:
            return 0
        return round(self.raised_amount / self.goal_amount * 100)


# --- Testimonials ---


class Testimonial(BaseModel):
    id: str
    name: str
    role: str
    content: str
    avatar_initials: str | None = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


# --- SEO / Settings ---


class PageMetadata(BaseModel):
    id: str | None = None
    page_path: str
    language_code: str
    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image_url: str | None = None
    og_type: str | None = None
    twitter_card: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    twitter_image_url: str | None = None
    updated_at: datetime | None = None


class SiteSetting(BaseModel):
    id: str
    setting_key: str
    setting_value: dict[str, Any] = Field(default_factory=dict)
    description: str | None = None
    updated_at: datetime | None = None


# --- Audit ---


class AuditLogEntry(BaseModel):
    id: str
    table_name: str
    record_id: str | None = None
    action: str
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    user_id: str | None = None
    created_at: datetime | None = None


# --- Media ---


class MediaFile(BaseModel):
    name: str
    path: str
    url: str
    size: int = 0
    updated_at: datetime | None = None
