"""
Campaign query assembler.

Joins campaign rows with one translation (requested language, else English)
and their images, and projects them into CampaignView.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chosen_arrows.core.ports.db import DataPort, Row
from chosen_arrows.domain.entities import (
    CampaignImageView,
    CampaignTranslationView,
    CampaignView,
)
from chosen_arrows.domain.languages import DEFAULT_LANGUAGE, is_uuid

TRANSLATION_FIELDS = ("title", "story", "full_story", "child_name", "child_age", "location")


def _empty(value: Any) -> bool:
    return value is None or value == ""


def merge_translation(
    requested_language: str,
    row: Row | None,
    english_row: Row | None,
) -> CampaignTranslationView | None:
    """
    Translation view for a campaign.

    A missing requested row falls back to English as a whole. Empty fields of
    a present row are filled from English one by one and listed in
    ``fallback_fields``.
    """
    if row is None:
        if english_row is None:
            return None
        return CampaignTranslationView(
            language_code=DEFAULT_LANGUAGE,
            requested_language=requested_language,
            is_fallback=requested_language != DEFAULT_LANGUAGE,
            **{f: english_row.get(f) for f in TRANSLATION_FIELDS},
        )

    values = {f: row.get(f) for f in TRANSLATION_FIELDS}
    filled: list[str] = []
    if english_row is not None and row is not english_row:
        for f in TRANSLATION_FIELDS:
            if _empty(values[f]) and not _empty(english_row.get(f)):
                values[f] = english_row.get(f)
                filled.append(f)

    return CampaignTranslationView(
        language_code=row["language_code"],
        requested_language=requested_language,
        is_fallback=bool(filled),
        fallback_fields=filled,
        **values,
    )


def image_views(rows: Sequence[Row]) -> list[CampaignImageView]:
    ordered = sorted(rows, key=lambda r: r.get("display_order") or 0)
    return [
        CampaignImageView(
            id=r.get("id"),
            image_url=r["image_url"],
            image_alt=r.get("image_alt"),
            is_primary=bool(r.get("is_primary")),
            display_order=r.get("display_order") or 0,
        )
        for r in ordered
    ]


def primary_image(images: Sequence[CampaignImageView]) -> str | None:
    """The flagged primary, else the first image in display order."""
    for image in images:
        if image.is_primary:
            return image.image_url
    return images[0].image_url if images else None


def to_view(
    campaign: Row,
    translation: CampaignTranslationView | None,
    image_rows: Sequence[Row],
) -> CampaignView:
    images = image_views(image_rows)
    return CampaignView(
        id=campaign["id"],
        slug=campaign["slug"],
        status=campaign["status"],
        goal_amount=float(campaign.get("goal_amount") or 0),
        raised_amount=float(campaign.get("raised_amount") or 0),
        donor_count=int(campaign.get("donor_count") or 0),
        days_left=campaign.get("days_left"),
        category=campaign.get("category") or "",
        featured=bool(campaign.get("featured")),
        created_at=campaign.get("created_at"),
        updated_at=campaign.get("updated_at"),
        translation=translation,
        primary_image=primary_image(images),
        images=images,
    )


def status_filter(status: str | None, admin: bool, public_default: str = "active") -> str | None:
    """
    Status to filter on, or None for every status.

    Public callers see ``public_default`` unless they ask for a specific
    status. Admins see everything unless they ask for a specific status.
    """
    if status and status != "all":
        return status
    return None if admin else public_default


def assemble(db: DataPort, campaigns: Sequence[Row], language: str) -> list[CampaignView]:
    """Attach translations and images. Campaigns with no usable translation are dropped."""
    if not campaigns:
        return []
    ids = [c["id"] for c in campaigns]
    languages = sorted({language, DEFAULT_LANGUAGE})
    translations = db.select(
        "campaign_translations",
        in_={"campaign_id": ids, "language_code": languages},
    )
    images = db.select(
        "campaign_images",
        in_={"campaign_id": ids},
        order=[("display_order", "asc")],
    )

    by_key = {(t["campaign_id"], t["language_code"]): t for t in translations}
    images_by_campaign: dict[str, list[Row]] = {}
    for image in images:
        images_by_campaign.setdefault(image["campaign_id"], []).append(image)

    views: list[CampaignView] = []
    for campaign in campaigns:
        translation = merge_translation(
            language,
            by_key.get((campaign["id"], language)),
            by_key.get((campaign["id"], DEFAULT_LANGUAGE)),
        )
        if translation is None:
            continue
        views.append(to_view(campaign, translation, images_by_campaign.get(campaign["id"], [])))
    return views


def identifier_filter(identifier: str) -> dict[str, str]:
    return {"id": identifier} if is_uuid(identifier) else {"slug": identifier}
