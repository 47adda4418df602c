"""
SEO builders.

Pure functions: the same rows and defaults always produce the same PageSeo.
Each field resolves independently: the requested-language row, then the
English row, then the configured page defaults, then the site defaults.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chosen_arrows.domain.entities import CampaignView, PageMetadata
from chosen_arrows.rules.models import PageSeoDefaults, SeoRules

from .models import PageSeo


def build_canonical_url(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return f"{base}{path}" if path != "/" else f"{base}/"


def absolute_url(base_url: str, url: str | None) -> str:
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    return build_canonical_url(base_url, url)


def _pick(field_name: str, rows: Sequence[PageMetadata | None]) -> Any:
    for row in rows:
        if row is None:
            continue
        value = getattr(row, field_name)
        if value:
            return value
    return None


def page_defaults(seo: SeoRules, page_path: str) -> PageSeoDefaults:
    return seo.pages.get(page_path, seo.site)


def build_page_seo(
    page_path: str,
    row: PageMetadata | None,
    english_row: PageMetadata | None,
    seo: SeoRules,
    *,
    base_url: str,
    site_name: str,
    language: str = "en",
) -> PageSeo:
    defaults = page_defaults(seo, page_path)
    rows = (row, english_row)

    title = _pick("title", rows) or defaults.title
    description = _pick("description", rows) or defaults.description
    og_image = absolute_url(base_url, _pick("og_image_url", rows) or seo.default_og_image)

    return PageSeo(
        title=title,
        description=description,
        canonical_url=build_canonical_url(base_url, page_path),
        keywords=list(_pick("keywords", rows) or defaults.keywords),
        language=language,
        og_title=_pick("og_title", rows) or title,
        og_description=_pick("og_description", rows) or description,
        og_type=_pick("og_type", rows) or defaults.og_type,
        og_image=og_image,
        og_image_alt=site_name if og_image else "",
        og_site_name=site_name,
        twitter_card=_pick("twitter_card", rows) or defaults.twitter_card,
        twitter_title=_pick("twitter_title", rows) or "",
        twitter_description=_pick("twitter_description", rows) or "",
        twitter_image=absolute_url(base_url, _pick("twitter_image_url", rows)),
    )


def first_paragraph(text: str | None, max_length: int = 150) -> str:
    if not text:
        return ""
    return text.split("\n\n")[0][:max_length]


def child_label(campaign: CampaignView) -> str:
    """'Sarah, 12' style label, or the campaign title when no child is named."""
    translation = campaign.translation
    if translation is None:
        return ""
    if translation.child_name and translation.child_age is not None:
        return f"{translation.child_name}, {translation.child_age}"
    return translation.child_name or translation.title


def build_campaign_seo(
    campaign: CampaignView,
    seo: SeoRules,
    *,
    base_url: str,
    site_name: str,
) -> PageSeo:
    translation = campaign.translation
    title = f"{translation.title if translation else campaign.slug} | {site_name}"
    story = translation.full_story or translation.story if translation else ""
    excerpt = first_paragraph(story, seo.campaign_description_chars)
    child = child_label(campaign)

    description = (
        f"{child} - {excerpt}... Help us reach our goal of ${campaign.goal_amount:,.0f}. "
        f"{campaign.progress_percent}% funded."
    )
    keywords = [k for k in (campaign.category.lower(), "campaign", "donate", "fundraising") if k]
    if translation and translation.child_name:
        keywords.append(translation.child_name.lower())

    image = absolute_url(base_url, campaign.primary_image or seo.default_og_image)
    return PageSeo(
        title=title,
        description=description,
        canonical_url=build_canonical_url(base_url, f"/campaigns/{campaign.slug}"),
        keywords=keywords,
        language=translation.language_code if translation else "en",
        og_title=title,
        og_description=f"Support {child} - {excerpt}...",
        og_type="website",
        og_image=image,
        og_image_alt=child,
        og_site_name=site_name,
        twitter_card="summary_large_image",
        twitter_title=title,
        twitter_description=f"Support {child} - {excerpt}...",
        twitter_image=image,
    )


def not_found_seo(seo: SeoRules, *, base_url: str, site_name: str, page_path: str) -> PageSeo:
    return PageSeo(
        title=f"Campaign Not Found | {site_name}",
        description="The campaign you're looking for doesn't exist.",
        canonical_url=build_canonical_url(base_url, page_path),
        robots="noindex",
        og_site_name=site_name,
    )
