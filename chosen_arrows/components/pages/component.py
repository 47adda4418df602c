"""
Pages component - public page view assembly.

Each assembler issues its reads concurrently, then flattens the results into
one view model. Missing or failed data renders as empty; only an unknown
campaign makes an assembler return None.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from chosen_arrows.components.campaigns import (
    CampaignListInput,
    run_get_campaign,
    run_get_campaign_updates,
    run_get_campaigns,
)
from chosen_arrows.components.content import run_get_content
from chosen_arrows.components.fanout import fetch_all
from chosen_arrows.components.metadata import build_campaign_seo, run_get_page_seo
from chosen_arrows.components.settings import run_get_setting
from chosen_arrows.components.testimonials import run_get_testimonials

from .models import (
    CampaignDetailView,
    CampaignListView,
    ContentPageView,
    HomeView,
    Layout,
    PageContext,
)
from .ports import DataPort

logger = logging.getLogger(__name__)

HOME_SECTIONS = ("hero", "values", "impact", "community", "cta")

# page path -> content sections it renders
CONTENT_PAGES: dict[str, tuple[str, ...]] = {
    "/about": ("about",),
    "/contact": ("contact",),
    "/mentorship": ("mentorship",),
    "/donate": ("donate", "donate-form"),
}


def _layout_calls(db: DataPort, language: str) -> dict[str, Callable[[], Any]]:
    return {
        "navigation": lambda: run_get_content("navigation", language, db=db),
        "footer": lambda: run_get_content("footer", language, db=db),
        "contact_info": lambda: run_get_setting("contact_info", db=db),
        "social_links": lambda: run_get_setting("social_links", db=db),
    }


def _seo_call(db: DataPort, ctx: PageContext, page_path: str, language: str) -> Callable[[], Any]:
    return lambda: run_get_page_seo(
        page_path,
        language,
        db=db,
        seo=ctx.seo,
        base_url=ctx.base_url,
        site_name=ctx.site_name,
    )


def _layout(results: dict[str, Any], ctx: PageContext, language: str) -> Layout:
    return Layout(
        language=language,
        languages={code: ctx.language_names.get(code, code) for code in ctx.languages},
        navigation=results["navigation"],
        footer=results["footer"],
        contact_info=results["contact_info"] or {},
        social_links=results["social_links"] or {},
    )


def assemble_home(language: str, *, db: DataPort, ctx: PageContext) -> HomeView:
    calls = _layout_calls(db, language)
    for key in HOME_SECTIONS:
        calls[key] = lambda key=key: run_get_content(key, language, db=db)
    calls["hero_stats"] = lambda: run_get_setting("hero_stats", db=db)
    calls["campaigns"] = lambda: run_get_campaigns(
        CampaignListInput(language=language, featured=True, limit=ctx.featured_limit), db=db
    )
    calls["testimonials"] = lambda: run_get_testimonials(db=db, active_only=True)
    calls["seo"] = _seo_call(db, ctx, "/", language)

    results = fetch_all(calls)
    return HomeView(
        layout=_layout(results, ctx, language),
        seo=results["seo"],
        hero=results["hero"],
        values=results["values"],
        impact=results["impact"],
        community=results["community"],
        cta=results["cta"],
        hero_stats=results["hero_stats"] or {},
        featured_campaigns=results["campaigns"],
        testimonials=results["testimonials"],
    )


def assemble_content_page(
    page_path: str,
    language: str,
    *,
    db: DataPort,
    ctx: PageContext,
) -> ContentPageView:
    """About, contact, mentorship and donate pages."""
    section_keys = CONTENT_PAGES[page_path]
    calls = _layout_calls(db, language)
    for key in section_keys:
        calls[f"section:{key}"] = lambda key=key: run_get_content(key, language, db=db)
    calls["seo"] = _seo_call(db, ctx, page_path, language)
    if page_path == "/donate":
        calls["campaigns"] = lambda: run_get_campaigns(
            CampaignListInput(language=language, status=ctx.public_status), db=db
        )

    results = fetch_all(calls)
    return ContentPageView(
        page_path=page_path,
        layout=_layout(results, ctx, language),
        seo=results["seo"],
        sections={key: results[f"section:{key}"] for key in section_keys},
        campaigns=results.get("campaigns", []),
    )


def assemble_about(language: str, *, db: DataPort, ctx: PageContext) -> ContentPageView:
    return assemble_content_page("/about", language, db=db, ctx=ctx)


def assemble_contact(language: str, *, db: DataPort, ctx: PageContext) -> ContentPageView:
    return assemble_content_page("/contact", language, db=db, ctx=ctx)


def assemble_mentorship(language: str, *, db: DataPort, ctx: PageContext) -> ContentPageView:
    return assemble_content_page("/mentorship", language, db=db, ctx=ctx)


def assemble_donate(language: str, *, db: DataPort, ctx: PageContext) -> ContentPageView:
    return assemble_content_page("/donate", language, db=db, ctx=ctx)


def assemble_campaigns(language: str, *, db: DataPort, ctx: PageContext) -> CampaignListView:
    calls = _layout_calls(db, language)
    calls["campaigns"] = lambda: run_get_campaigns(
        CampaignListInput(language=language, status=ctx.public_status), db=db
    )
    calls["seo"] = _seo_call(db, ctx, "/campaigns", language)

    results = fetch_all(calls)
    return CampaignListView(
        layout=_layout(results, ctx, language),
        seo=results["seo"],
        campaigns=results["campaigns"],
    )


def assemble_campaign_detail(
    identifier: str,
    language: str,
    *,
    db: DataPort,
    ctx: PageContext,
) -> CampaignDetailView | None:
    """None when no campaign matches the id or slug."""
    calls = _layout_calls(db, language)
    calls["campaign"] = lambda: run_get_campaign(identifier, language, db=db)
    results = fetch_all(calls)

    campaign = results["campaign"]
    if campaign is None:
        logger.info("Campaign %s not found", identifier)
        return None

    return CampaignDetailView(
        layout=_layout(results, ctx, language),
        seo=build_campaign_seo(campaign, ctx.seo, base_url=ctx.base_url, site_name=ctx.site_name),
        campaign=campaign,
        updates=run_get_campaign_updates(campaign.id, db=db),
    )
