"""
Public JSON API.

Read-only content for the site frontend. Everything is localized through the
detected request language with English fallback.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from chosen_arrows.api.deps import get_db, get_language, get_page_context
from chosen_arrows.components.campaigns import (
    CampaignListInput,
    run_get_campaign,
    run_get_campaign_updates,
    run_get_campaigns,
)
from chosen_arrows.components.content import run_get_content
from chosen_arrows.components.metadata import PageSeo, run_get_page_seo
from chosen_arrows.components.pages import (
    PageContext,
    assemble_about,
    assemble_campaigns,
    assemble_contact,
    assemble_donate,
    assemble_home,
    assemble_mentorship,
)
from chosen_arrows.components.settings import run_get_setting
from chosen_arrows.components.testimonials import run_get_testimonials
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.domain.entities import CampaignUpdate, CampaignView, Testimonial

router = APIRouter()

PAGE_ASSEMBLERS = {
    "home": assemble_home,
    "about": assemble_about,
    "contact": assemble_contact,
    "mentorship": assemble_mentorship,
    "donate": assemble_donate,
    "campaigns": assemble_campaigns,
}


@router.get("/content/{section_key}")
def get_public_content(
    section_key: str,
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
) -> dict[str, Any]:
    """Section document in the request language, else English."""
    document = run_get_content(section_key, language, db=db)
    if document is None:
        raise HTTPException(status_code=404, detail="Content not found")
    return document


@router.get("/campaigns", response_model=list[CampaignView])
def list_public_campaigns(
    featured: bool = False,
    limit: int | None = Query(default=None, ge=1),
    status: str | None = None,
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
) -> list[CampaignView]:
    inp = CampaignListInput(language=language, featured=featured, limit=limit, status=status)
    return run_get_campaigns(inp, db=db)


@router.get("/campaigns/{identifier}", response_model=CampaignView)
def get_public_campaign(
    identifier: str,
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
) -> CampaignView:
    """Campaign by id or slug."""
    campaign = run_get_campaign(identifier, language, db=db)
    if campaign is None:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign


@router.get("/campaigns/{campaign_id}/updates", response_model=list[CampaignUpdate])
def list_campaign_updates(
    campaign_id: str,
    db: DataPort = Depends(get_db),
) -> list[CampaignUpdate]:
    return run_get_campaign_updates(campaign_id, db=db)


@router.get("/testimonials", response_model=list[Testimonial])
def list_public_testimonials(db: DataPort = Depends(get_db)) -> list[Testimonial]:
    return run_get_testimonials(db=db, active_only=True)


@router.get("/settings/{setting_key}")
def get_public_setting(
    setting_key: str,
    db: DataPort = Depends(get_db),
) -> dict[str, Any]:
    value = run_get_setting(setting_key, db=db)
    if value is None:
        raise HTTPException(status_code=404, detail="Setting not found")
    return value


@router.get("/metadata")
def get_public_metadata(
    path: str = Query(default="/"),
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> dict[str, Any]:
    """Resolved head metadata for a page, including the rendered meta tags."""
    seo: PageSeo = run_get_page_seo(
        path, language, db=db, seo=ctx.seo, base_url=ctx.base_url, site_name=ctx.site_name
    )
    body = jsonable_encoder(seo)
    body["meta_tags"] = jsonable_encoder(seo.to_meta_tags())
    return body


@router.get("/pages/{name}")
def get_public_page(
    name: str,
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> dict[str, Any]:
    """Full page view model: shared layout, SEO and the page's content."""
    assembler = PAGE_ASSEMBLERS.get(name)
    if assembler is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return jsonable_encoder(assembler(language, db=db, ctx=ctx))
