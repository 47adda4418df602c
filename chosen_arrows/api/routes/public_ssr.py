"""
Public SSR Routes - server-side rendered pages with metadata.

Serves HTML pages with full head metadata for crawlers and social previews.
Content-only pages (about, contact, mentorship) are cached per language in
the page cache until an admin write revalidates them.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from chosen_arrows.adapters.page_cache import PageCache
from chosen_arrows.api.deps import get_db, get_language, get_page_cache, get_page_context
from chosen_arrows.api.html import escape_html, render_list, render_ssr_page
from chosen_arrows.components.content import run_get_content
from chosen_arrows.components.metadata import not_found_seo
from chosen_arrows.components.pages import (
    ContentPageView,
    Layout,
    PageContext,
    assemble_about,
    assemble_campaign_detail,
    assemble_campaigns,
    assemble_contact,
    assemble_donate,
    assemble_home,
    assemble_mentorship,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.domain.entities import CampaignView

router = APIRouter()

Document = dict[str, Any]


# --- Body fragments ---


def _render_section(document: Document | None, heading: str = "h2") -> str:
    """Title, subtitle and the remaining plain-text fields of a section document."""
    if not document:
        return ""
    parts = []
    if document.get("title"):
        parts.append(f"<{heading}>{escape_html(str(document['title']))}</{heading}>")
    if document.get("subtitle"):
        parts.append(f"<p>{escape_html(str(document['subtitle']))}</p>")
    for key, value in document.items():
        if key in ("title", "subtitle") or not isinstance(value, str) or not value:
            continue
        parts.append(f'<p data-field="{escape_html(key)}">{escape_html(value)}</p>')
    return f"<section>{''.join(parts)}</section>"


def _render_nav(layout: Layout) -> str:
    links = []
    for code, name in layout.languages.items():
        current = ' aria-current="true"' if code == layout.language else ""
        links.append(f'<a href="?lang={escape_html(code)}"{current}>{escape_html(name)}</a>')
    navigation = _render_section(layout.navigation, heading="strong")
    return f"<header>{navigation}<nav>{''.join(links)}</nav></header>"


def _render_footer(layout: Layout) -> str:
    contact = layout.contact_info
    lines = [escape_html(str(contact[k])) for k in ("email", "phone", "address") if contact.get(k)]
    social = [
        f'<a href="{escape_html(str(url))}" rel="noopener">{escape_html(name)}</a>'
        for name, url in layout.social_links.items()
        if url
    ]
    return (
        f"<footer>{_render_section(layout.footer, heading='strong')}"
        f"{render_list(lines)}{render_list(social)}</footer>"
    )


def _render_campaign_card(campaign: CampaignView) -> str:
    translation = campaign.translation
    title = translation.title if translation else campaign.slug
    image = ""
    if campaign.primary_image:
        image = f'<img src="{escape_html(campaign.primary_image)}" alt="{escape_html(title)}" />'
    return (
        f'<article><a href="/campaigns/{escape_html(campaign.slug)}">{escape_html(title)}</a>'
        f"{image}<p>${campaign.raised_amount:,.0f} of ${campaign.goal_amount:,.0f} raised "
        f"({campaign.progress_percent}%)</p></article>"
    )


def _wrap(layout: Layout, main: str) -> str:
    return f"{_render_nav(layout)}\n    <main>{main}</main>\n    {_render_footer(layout)}"


def _render_content_page(view: ContentPageView) -> str:
    sections = "".join(_render_section(doc, heading="h1") for doc in view.sections.values())
    campaigns = "".join(_render_campaign_card(c) for c in view.campaigns)
    return render_ssr_page(view.seo, _wrap(view.layout, sections + campaigns))


def _cached(
    cache: PageCache,
    path: str,
    language: str,
    render: Callable[[], str],
) -> HTMLResponse:
    html = cache.get(path, language)
    if html is None:
        generation = cache.generation(path)
        html = render()
        cache.put(path, language, html, since=generation)
    return HTMLResponse(content=html, status_code=200)


# --- SSR Endpoints ---


@router.get("/", response_class=HTMLResponse, summary="Homepage SSR")
def ssr_homepage(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> HTMLResponse:
    view = assemble_home(language, db=db, ctx=ctx)

    stats = [
        f"{escape_html(key)}: {escape_html(str(value))}" for key, value in view.hero_stats.items()
    ]
    testimonials = [
        f"<blockquote>{escape_html(t.content)}</blockquote><cite>{escape_html(t.name)}, "
        f"{escape_html(t.role)}</cite>"
        for t in view.testimonials
    ]
    main = "".join(
        [
            _render_section(view.hero, heading="h1"),
            render_list(stats),
            _render_section(view.values),
            "".join(_render_campaign_card(c) for c in view.featured_campaigns),
            _render_section(view.impact),
            _render_section(view.community),
            render_list(testimonials),
            _render_section(view.cta),
        ]
    )
    return HTMLResponse(content=render_ssr_page(view.seo, _wrap(view.layout, main)))


@router.get("/about", response_class=HTMLResponse, summary="About page SSR")
def ssr_about(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
    cache: PageCache = Depends(get_page_cache),
) -> HTMLResponse:
    return _cached(
        cache,
        "/about",
        language,
        lambda: _render_content_page(assemble_about(language, db=db, ctx=ctx)),
    )


@router.get("/contact", response_class=HTMLResponse, summary="Contact page SSR")
def ssr_contact(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
    cache: PageCache = Depends(get_page_cache),
) -> HTMLResponse:
    return _cached(
        cache,
        "/contact",
        language,
        lambda: _render_content_page(assemble_contact(language, db=db, ctx=ctx)),
    )


@router.get("/mentorship", response_class=HTMLResponse, summary="Mentorship page SSR")
def ssr_mentorship(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
    cache: PageCache = Depends(get_page_cache),
) -> HTMLResponse:
    return _cached(
        cache,
        "/mentorship",
        language,
        lambda: _render_content_page(assemble_mentorship(language, db=db, ctx=ctx)),
    )


@router.get("/donate", response_class=HTMLResponse, summary="Donate page SSR")
def ssr_donate(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> HTMLResponse:
    view = assemble_donate(language, db=db, ctx=ctx)
    return HTMLResponse(content=_render_content_page(view), status_code=200)


@router.get("/campaigns", response_class=HTMLResponse, summary="Campaign list SSR")
def ssr_campaigns(
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> HTMLResponse:
    view = assemble_campaigns(language, db=db, ctx=ctx)
    main = f"<h1>{escape_html(view.seo.title)}</h1>" + "".join(
        _render_campaign_card(c) for c in view.campaigns
    )
    return HTMLResponse(content=render_ssr_page(view.seo, _wrap(view.layout, main)))


@router.get("/campaigns/{identifier}", response_class=HTMLResponse, summary="Campaign SSR")
def ssr_campaign(
    identifier: str,
    language: str = Depends(get_language),
    db: DataPort = Depends(get_db),
    ctx: PageContext = Depends(get_page_context),
) -> HTMLResponse:
    """Campaign detail by id or slug; unknown campaigns render the not-found page with 404."""
    view = assemble_campaign_detail(identifier, language, db=db, ctx=ctx)
    if view is None:
        seo = not_found_seo(
            ctx.seo,
            base_url=ctx.base_url,
            site_name=ctx.site_name,
            page_path=f"/campaigns/{identifier}",
        )
        document = run_get_content("not-found", language, db=db) or {"title": seo.title}
        return HTMLResponse(
            content=render_ssr_page(seo, f"<main>{_render_section(document, heading='h1')}</main>"),
            status_code=404,
        )

    campaign = view.campaign
    translation = campaign.translation
    story = (translation.full_story or translation.story) if translation else ""
    paragraphs = "".join(f"<p>{escape_html(p)}</p>" for p in (story or "").split("\n\n") if p)
    images = "".join(
        f'<img src="{escape_html(i.image_url)}" alt="{escape_html(i.image_alt)}" />'
        for i in campaign.images
    )
    updates = render_list(
        f"<time>{escape_html(u.update_date)}</time> {escape_html(u.content)}"
        for u in view.updates
    )
    main = (
        f"<article><h1>{escape_html(translation.title if translation else campaign.slug)}</h1>"
        f"{images}{paragraphs}<p>${campaign.raised_amount:,.0f} of "
        f"${campaign.goal_amount:,.0f} raised from {campaign.donor_count} donors</p>"
        f"{updates}</article>"
    )
    return HTMLResponse(content=render_ssr_page(view.seo, _wrap(view.layout, main)))
