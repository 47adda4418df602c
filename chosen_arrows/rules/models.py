from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str
    site_name: str
    base_url: str


class I18nRules(BaseModel):
    supported_languages: list[str]
    default_language: str = "en"
    language_cookie: str = "i18next"
    language_names: dict[str, str] = Field(default_factory=dict)


class ContentRules(BaseModel):
    section_keys: list[str]


class CampaignRules(BaseModel):
    statuses: list[str]
    public_default_status: str = "active"
    home_featured_limit: int = 3


class UploadsRules(BaseModel):
    bucket: str = "images"
    max_upload_bytes: int
    allowlist_mime_types: list[str]
    folders: list[str]
    list_limit: int = 100
    cache_control_seconds: int = 3600


class AuthRules(BaseModel):
    session_ttl_minutes: int
    cookie_name: str = "access_token"
    login_path: str = "/admin/login"
    dashboard_path: str = "/admin/dashboard"


class AuditRules(BaseModel):
    page_size: int = 50
    filter_scan_limit: int = 1000
    recent_activity_limit: int = 5


class RangeRule(BaseModel):
    min: float
    max: float


class DonationRules(BaseModel):
    amount: RangeRule
    frequencies: list[str]
    processing_delay_seconds: float = 1.5
    failure_rate: float = 0.1
    name_min_length: int = 2
    name_max_length: int = 100
    email_max_length: int = 255


class PageSeoDefaults(BaseModel):
    title: str
    description: str
    keywords: list[str] = Field(default_factory=list)
    og_type: str = "website"
    twitter_card: str = "summary_large_image"


class SeoRules(BaseModel):
    site: PageSeoDefaults
    default_og_image: str | None = None
    pages: dict[str, PageSeoDefaults] = Field(default_factory=dict)
    campaign_description_chars: int = 150


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    project: ProjectRules
    i18n: I18nRules
    content: ContentRules
    campaigns: CampaignRules
    uploads: UploadsRules
    auth: AuthRules
    audit: AuditRules
    donations: DonationRules
    seo: SeoRules
    ops: OpsRules
