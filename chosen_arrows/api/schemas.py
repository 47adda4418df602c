from typing import Any, Literal

from pydantic import BaseModel, Field

# --- Shared Enums/Types ---
CampaignStatus = Literal["draft", "active", "completed", "archived"]


# --- Campaigns ---
class CampaignTranslationModel(BaseModel):
    language_code: str
    title: str
    story: str
    full_story: str | None = None
    child_name: str | None = None
    child_age: int | None = None
    location: str | None = None


class CampaignTranslationPatch(BaseModel):
    """Translation entry of a campaign PATCH; incomplete entries are skipped."""

    language_code: str | None = None
    title: str | None = None
    story: str | None = None
    full_story: str | None = None
    child_name: str | None = None
    child_age: int | None = None
    location: str | None = None


class CampaignCreateRequest(BaseModel):
    slug: str
    status: CampaignStatus = "draft"
    goal_amount: float
    raised_amount: float = 0
    donor_count: int = 0
    days_left: int | None = None
    category: str | None = None
    featured: bool = False
    translations: list[CampaignTranslationModel] = []


class CampaignUpdateRequest(BaseModel):
    slug: str | None = None
    status: CampaignStatus | None = None
    goal_amount: float | None = None
    raised_amount: float | None = None
    donor_count: int | None = None
    days_left: int | None = None
    category: str | None = None
    featured: bool | None = None
    translations: list[CampaignTranslationPatch] = []


class CopyTranslationRequest(BaseModel):
    target_language: str
    source_language: str = "en"


class CampaignImageCreateRequest(BaseModel):
    image_url: str
    image_alt: str | None = None
    is_primary: bool = False


class CampaignImageUpdateRequest(BaseModel):
    image_alt: str | None = None
    is_primary: bool | None = None
    display_order: int | None = None


class TimelineEntryRequest(BaseModel):
    update_date: str
    content: str


# --- Testimonials ---
class TestimonialCreateRequest(BaseModel):
    name: str
    role: str
    content: str
    avatar_initials: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class TestimonialUpdateRequest(BaseModel):
    name: str | None = None
    role: str | None = None
    content: str | None = None
    avatar_initials: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class ReorderRequest(BaseModel):
    ids: list[str]


# --- Content ---
class ContentUpdateRequest(BaseModel):
    content: dict[str, Any]


# --- Page metadata ---
class PageMetadataRequest(BaseModel):
    page_path: str
    language_code: str = "en"
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


# --- Settings ---
class SettingRequest(BaseModel):
    value: dict[str, Any]
    description: str | None = None


class SettingItem(BaseModel):
    key: str
    value: dict[str, Any]
    description: str | None = None


class SettingsBatchRequest(BaseModel):
    settings: list[SettingItem] = Field(min_length=1)


# --- Auth ---
class Token(BaseModel):
    access_token: str
    token_type: str
    redirect_to: str | None = None
