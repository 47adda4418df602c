"""
Page view models handed to templates and the public JSON API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chosen_arrows.components.metadata import PageSeo
from chosen_arrows.domain.entities import CampaignUpdate, CampaignView, Testimonial
from chosen_arrows.domain.languages import DEFAULT_LANGUAGE, LANGUAGE_NAMES, SUPPORTED_LANGUAGES
from chosen_arrows.rules.models import SeoRules

Document = dict[str, Any]


@dataclass(frozen=True)
class PageContext:
    """Site-level configuration every assembler needs."""

    seo: SeoRules
    base_url: str
    site_name: str
    featured_limit: int = 3
    public_status: str = "active"
    languages: tuple[str, ...] = SUPPORTED_LANGUAGES
    language_names: dict[str, str] = field(default_factory=lambda: dict(LANGUAGE_NAMES))


@dataclass
class Layout:
    """Content shared by every public page: header, footer and language switcher."""

    language: str = DEFAULT_LANGUAGE
    languages: dict[str, str] = field(default_factory=dict)
    navigation: Document | None = None
    footer: Document | None = None
    contact_info: Document = field(default_factory=dict)
    social_links: Document = field(default_factory=dict)


@dataclass
class HomeView:
    layout: Layout
    seo: PageSeo
    hero: Document | None = None
    values: Document | None = None
    impact: Document | None = None
    community: Document | None = None
    cta: Document | None = None
    hero_stats: Document = field(default_factory=dict)
    featured_campaigns: list[CampaignView] = field(default_factory=list)
    testimonials: list[Testimonial] = field(default_factory=list)


@dataclass
class ContentPageView:
    """A page made of content sections only (about, contact, mentorship, donate)."""

    page_path: str
    layout: Layout
    seo: PageSeo
    sections: dict[str, Document | None] = field(default_factory=dict)
    campaigns: list[CampaignView] = field(default_factory=list)


@dataclass
class CampaignListView:
    layout: Layout
    seo: PageSeo
    campaigns: list[CampaignView] = field(default_factory=list)


@dataclass
class CampaignDetailView:
    layout: Layout
    seo: PageSeo
    campaign: CampaignView
    updates: list[CampaignUpdate] = field(default_factory=list)
