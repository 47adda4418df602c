"""
Campaigns component - campaign queries, editing, images and timeline.

Invariants:
- A campaign has at most one primary image; setting a primary clears the
  others in the same transaction.
- New images append at max(display_order) + 1, or 0 for the first image.
- A campaign and its initial translations are created atomically.
- Deleting a campaign removes its translations, images and updates (backend
  cascade).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from chosen_arrows.components.actions import revalidate
from chosen_arrows.components.auth import UNAUTHORIZED, require_admin
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.core.ports.storage import StorageError
from chosen_arrows.domain.entities import CAMPAIGN_STATUSES, CampaignUpdate, CampaignView
from chosen_arrows.domain.languages import SUPPORTED_LANGUAGES

from . import _impl
from .models import (
    AddImageInput,
    CampaignImageOutput,
    CampaignInput,
    CampaignListInput,
    CampaignOutput,
    CampaignUpdateOutput,
    UpdateCampaignInput,
)
from .ports import AdminGatePort, DataPort, ObjectStoragePort, RevalidatorPort

logger = logging.getLogger(__name__)

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
PUBLIC_STORAGE_PREFIX = "/storage/v1/object/public/"
DEFAULT_BUCKET = "images"

CAMPAIGN_FIELDS = (
    "slug",
    "status",
    "goal_amount",
    "raised_amount",
    "donor_count",
    "days_left",
    "category",
    "featured",
)
IMAGE_FIELDS = ("image_alt", "is_primary", "display_order")


# --- Validation ---


def _validate_campaign_fields(
    values: dict[str, Any],
    statuses: Sequence[str],
) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if "slug" in values and not SLUG_PATTERN.match(values["slug"] or ""):
        errors["slug"] = ["Slug must be lowercase letters, numbers and hyphens"]
    if "status" in values and values["status"] not in statuses:
        errors["status"] = [f"Status must be one of: {', '.join(statuses)}"]
    for name in ("goal_amount", "raised_amount", "donor_count", "days_left"):
        value = values.get(name)
        if value is not None and value < 0:
            errors[name] = [f"{name} cannot be negative"]
    return errors


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _validate_translations(
    translations: Sequence[Mapping[str, Any]],
    languages: Sequence[str],
) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    seen: set[str] = set()
    for index, t in enumerate(translations):
        prefix = f"translations.{index}"
        if not isinstance(t, Mapping):
            errors[prefix] = ["Translation must be an object"]
            continue
        language = t.get("language_code")
        if not isinstance(language, str) or language not in languages:
            errors[f"{prefix}.language_code"] = [f"Language must be one of: {', '.join(languages)}"]
        elif language in seen:
            errors[f"{prefix}.language_code"] = [f"Duplicate translation for {language}"]
        else:
            seen.add(language)
        if not _text(t.get("title")):
            errors[f"{prefix}.title"] = ["Title is required"]
        if not _text(t.get("story")):
            errors[f"{prefix}.story"] = ["Story is required"]
        for name in ("full_story", "child_name", "location"):
            if t.get(name) is not None and not isinstance(t[name], str):
                errors[f"{prefix}.{name}"] = [f"{name} must be text"]
        age = t.get("child_age")
        if age is not None and (not isinstance(age, int) or isinstance(age, bool) or age < 0):
            errors[f"{prefix}.child_age"] = ["Child age must be a non-negative whole number"]
    return errors


def _slug_of(db: DataPort, campaign_id: str) -> str | None:
    try:
        rows = db.select("campaigns", columns=["slug"], eq={"id": campaign_id}, limit=1)
    except BackendError as e:
        logger.warning("Could not look up slug of campaign %s: %s", campaign_id, e.message)
        return None
    return rows[0]["slug"] if rows else None


def _public_paths(campaign_id: str, *slugs: str | None) -> list[str]:
    """Detail pages of a campaign; it is served both by id and by slug."""
    paths = [f"/campaigns/{campaign_id}"]
    for slug in slugs:
        if slug and f"/campaigns/{slug}" not in paths:
            paths.append(f"/campaigns/{slug}")
    return paths


# --- Queries ---


def run_get_campaigns(inp: CampaignListInput, *, db: DataPort) -> list[CampaignView]:
    """
    Campaigns newest first with one translation each.

    Public callers only see active campaigns unless they request another
    status. Returns [] on backend error.
    """
    eq: dict[str, Any] = {}
    status = _impl.status_filter(inp.status, inp.admin)
    if status is not None:
        eq["status"] = status
    if inp.featured:
        eq["featured"] = True

    try:
        rows = db.select("campaigns", eq=eq, order=[("created_at", "desc")])
        views = _impl.assemble(db, rows, inp.language)
    except BackendError as e:
        logger.error("Error fetching campaigns: %s", e.message)
        return []

    if inp.limit:
        views = views[: inp.limit]
    return views


def run_get_campaign(identifier: str, language: str = "en", *, db: DataPort) -> CampaignView | None:
    """One campaign by id or slug, or None when missing or on backend error."""
    try:
        rows = db.select("campaigns", eq=_impl.identifier_filter(identifier), limit=1)
        views = _impl.assemble(db, rows, language)
    except BackendError as e:
        logger.error("Error fetching campaign %s: %s", identifier, e.message)
        return None
    return views[0] if views else None


# --- Campaign mutations ---


def run_create_campaign(
    inp: CampaignInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
    statuses: Sequence[str] = CAMPAIGN_STATUSES,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
) -> CampaignOutput:
    admin = require_admin(gate)
    if admin is None:
        return CampaignOutput(success=False, error=UNAUTHORIZED)

    values = {
        "slug": inp.slug,
        "status": inp.status,
        "goal_amount": inp.goal_amount,
        "raised_amount": inp.raised_amount or 0,
        "donor_count": inp.donor_count or 0,
        "days_left": inp.days_left,
        "category": inp.category,
        "featured": bool(inp.featured),
    }
    translations = [t.to_row() for t in inp.translations]
    errors = _validate_campaign_fields(values, statuses)
    if not translations:
        errors["translations"] = ["At least one translation is required"]
    errors.update(_validate_translations(translations, languages))
    if errors:
        return CampaignOutput(success=False, error="Invalid campaign", field_errors=errors)

    try:
        with db.transaction():
            campaign = db.insert(
                "campaigns",
                [{**values, "created_by": admin.id, "updated_by": admin.id}],
            )[0]
            db.insert(
                "campaign_translations",
                [{**t, "campaign_id": campaign["id"]} for t in translations],
            )
    except BackendError as e:
        logger.error("Error creating campaign %s: %s", inp.slug, e.message)
        return CampaignOutput(success=False, error=e.message or "Failed to create campaign")

    logger.info("Admin %s created campaign %s", admin.id, campaign["id"])
    revalidate(revalidator, "/admin/campaigns", "/campaigns")
    return CampaignOutput(success=True, campaign_id=campaign["id"])


def run_update_campaign(
    inp: UpdateCampaignInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
    statuses: Sequence[str] = CAMPAIGN_STATUSES,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
) -> CampaignOutput:
    """
    Update the provided campaign fields and upsert complete translations
    (language_code, title and story present) on (campaign_id, language_code).
    """
    admin = require_admin(gate)
    if admin is None:
        return CampaignOutput(success=False, error=UNAUTHORIZED)

    changes = {k: v for k, v in inp.changes.items() if k in CAMPAIGN_FIELDS}
    complete = [
        t
        for t in inp.translations
        if not isinstance(t, Mapping)
        or (t.get("language_code") and t.get("title") and t.get("story"))
    ]
    errors = _validate_campaign_fields(changes, statuses)
    errors.update(_validate_translations(complete, languages))
    if errors:
        return CampaignOutput(success=False, error="Invalid campaign", field_errors=errors)

    old_slug = _slug_of(db, inp.campaign_id)
    try:
        with db.transaction():
            updated = db.update(
                "campaigns",
                {**changes, "updated_by": admin.id},
                eq={"id": inp.campaign_id},
            )
            if not updated:
                return CampaignOutput(success=False, error="Campaign not found")
            if complete:
                db.upsert(
                    "campaign_translations",
                    [
                        {
                            "campaign_id": inp.campaign_id,
                            "language_code": t["language_code"],
                            "title": t["title"],
                            "story": t["story"],
                            "full_story": t.get("full_story") or None,
                            "child_name": t.get("child_name") or None,
                            "child_age": t.get("child_age") or None,
                            "location": t.get("location") or None,
                        }
                        for t in complete
                    ],
                    on_conflict=["campaign_id", "language_code"],
                )
    except BackendError as e:
        logger.error("Error updating campaign %s: %s", inp.campaign_id, e.message)
        return CampaignOutput(success=False, error=e.message)

    logger.info("Admin %s updated campaign %s", admin.id, inp.campaign_id)
    revalidate(
        revalidator,
        f"/admin/campaigns/{inp.campaign_id}",
        "/admin/campaigns",
        "/campaigns",
        *_public_paths(inp.campaign_id, old_slug, changes.get("slug")),
    )
    return CampaignOutput(success=True, campaign_id=inp.campaign_id)


def run_delete_campaign(
    campaign_id: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignOutput:
    """Delete a campaign; its translations, images and updates cascade."""
    admin = require_admin(gate)
    if admin is None:
        return CampaignOutput(success=False, error=UNAUTHORIZED)

    slug = _slug_of(db, campaign_id)
    try:
        deleted = db.delete("campaigns", eq={"id": campaign_id})
    except BackendError as e:
        logger.error("Error deleting campaign %s: %s", campaign_id, e.message)
        return CampaignOutput(success=False, error=e.message)
    if not deleted:
        return CampaignOutput(success=False, error="Campaign not found")

    logger.info("Admin %s deleted campaign %s", admin.id, campaign_id)
    revalidate(revalidator, "/admin/campaigns", "/campaigns", *_public_paths(campaign_id, slug))
    return CampaignOutput(success=True, campaign_id=campaign_id)


def run_copy_translation(
    campaign_id: str,
    target_language: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
    source_language: str = "en",
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
) -> CampaignOutput:
    """The editor's "copy from English" action: overwrite target with source."""
    admin = require_admin(gate)
    if admin is None:
        return CampaignOutput(success=False, error=UNAUTHORIZED)
    if target_language not in languages or target_language == source_language:
        return CampaignOutput(
            success=False,
            error="Invalid target language",
            field_errors={"target_language": [f"Choose a language other than {source_language}"]},
        )

    try:
        rows = db.select(
            "campaign_translations",
            eq={"campaign_id": campaign_id, "language_code": source_language},
            limit=1,
        )
        if not rows:
            return CampaignOutput(success=False, error=f"No {source_language} translation to copy")
        source = rows[0]
        db.upsert(
            "campaign_translations",
            [
                {
                    "campaign_id": campaign_id,
                    "language_code": target_language,
                    **{f: source.get(f) for f in _impl.TRANSLATION_FIELDS},
                }
            ],
            on_conflict=["campaign_id", "language_code"],
        )
    except BackendError as e:
        logger.error("Error copying translation for %s: %s", campaign_id, e.message)
        return CampaignOutput(success=False, error=e.message)

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignOutput(success=True, campaign_id=campaign_id)


# --- Images ---


def run_add_campaign_image(
    inp: AddImageInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignImageOutput:
    """
    Append an image. Clearing other primaries, reading the max display order
    and the insert commit as one unit.
    """
    admin = require_admin(gate)
    if admin is None:
        return CampaignImageOutput(success=False, error=UNAUTHORIZED)
    if not inp.image_url:
        return CampaignImageOutput(
            success=False, error="Image URL is required", field_errors={"image_url": ["Required"]}
        )

    try:
        with db.transaction():
            if inp.is_primary:
                db.update(
                    "campaign_images", {"is_primary": False}, eq={"campaign_id": inp.campaign_id}
                )
            last = db.select(
                "campaign_images",
                columns=["display_order"],
                eq={"campaign_id": inp.campaign_id},
                order=[("display_order", "desc")],
                limit=1,
            )
            display_order = last[0]["display_order"] + 1 if last else 0
            image = db.insert(
                "campaign_images",
                [
                    {
                        "campaign_id": inp.campaign_id,
                        "image_url": inp.image_url,
                        "image_alt": inp.image_alt or None,
                        "is_primary": inp.is_primary,
                        "display_order": display_order,
                    }
                ],
            )[0]
    except BackendError as e:
        logger.error("Error adding image to campaign %s: %s", inp.campaign_id, e.message)
        return CampaignImageOutput(success=False, error=e.message)

    revalidate(
        revalidator,
        f"/admin/campaigns/{inp.campaign_id}",
        "/admin/campaigns",
        *_public_paths(inp.campaign_id, _slug_of(db, inp.campaign_id)),
    )
    return CampaignImageOutput(success=True, image_id=image["id"])


def run_update_campaign_image(
    image_id: str,
    campaign_id: str,
    updates: dict[str, Any],
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignImageOutput:
    """Change alt text, primary flag or display order of one image."""
    admin = require_admin(gate)
    if admin is None:
        return CampaignImageOutput(success=False, error=UNAUTHORIZED)

    changes = {k: v for k, v in updates.items() if k in IMAGE_FIELDS}
    if not changes:
        return CampaignImageOutput(success=False, error="Nothing to update")

    try:
        with db.transaction():
            found = db.select(
                "campaign_images",
                columns=["id"],
                eq={"id": image_id, "campaign_id": campaign_id},
                limit=1,
            )
            if not found:
                return CampaignImageOutput(success=False, error="Image not found")
            if changes.get("is_primary"):
                db.update(
                    "campaign_images",
                    {"is_primary": False},
                    eq={"campaign_id": campaign_id},
                    neq={"id": image_id},
                )
            db.update("campaign_images", changes, eq={"id": image_id})
    except BackendError as e:
        logger.error("Error updating image %s: %s", image_id, e.message)
        return CampaignImageOutput(success=False, error=e.message)

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        "/admin/campaigns",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignImageOutput(success=True, image_id=image_id)


def storage_path_from_url(image_url: str, bucket: str = DEFAULT_BUCKET) -> str | None:
    """Object path inside ``bucket`` for a public URL, if it is one."""
    parts = image_url.split(f"{PUBLIC_STORAGE_PREFIX}{bucket}/", 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def run_delete_campaign_image(
    image_id: str,
    campaign_id: str,
    image_url: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    storage: ObjectStoragePort | None = None,
    revalidator: RevalidatorPort | None = None,
    bucket: str = DEFAULT_BUCKET,
) -> CampaignImageOutput:
    """
    Delete the image row, then try to remove the blob. A storage failure is
    logged only; the row is already gone. An image that does not belong to
    the campaign is not found and its blob is left alone.
    """
    admin = require_admin(gate)
    if admin is None:
        return CampaignImageOutput(success=False, error=UNAUTHORIZED)

    try:
        deleted = db.delete("campaign_images", eq={"id": image_id, "campaign_id": campaign_id})
    except BackendError as e:
        logger.error("Error deleting image %s: %s", image_id, e.message)
        return CampaignImageOutput(success=False, error=e.message)
    if deleted == 0:
        return CampaignImageOutput(success=False, error="Image not found")

    path = storage_path_from_url(image_url, bucket)
    if storage is not None and path:
        try:
            storage.remove([path])
        except (StorageError, OSError) as e:
            logger.warning("Could not delete image from storage: %s", e)

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        "/admin/campaigns",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignImageOutput(success=True, image_id=image_id)


# --- Timeline updates ---


def run_get_campaign_updates(campaign_id: str, *, db: DataPort) -> list[CampaignUpdate]:
    """Timeline entries newest update_date first; [] on backend error."""
    try:
        rows = db.select(
            "campaign_updates",
            eq={"campaign_id": campaign_id},
            order=[("update_date", "desc")],
        )
    except BackendError as e:
        logger.error("Error fetching campaign updates: %s", e.message)
        return []
    return [CampaignUpdate.model_validate(r) for r in rows]


def _validate_update(update_date: str, content: str) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    if not (update_date or "").strip():
        errors["update_date"] = ["Date is required"]
    if not (content or "").strip():
        errors["content"] = ["Content is required"]
    return errors


def run_create_campaign_update(
    campaign_id: str,
    update_date: str,
    content: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignUpdateOutput:
    admin = require_admin(gate)
    if admin is None:
        return CampaignUpdateOutput(success=False, error=UNAUTHORIZED)
    errors = _validate_update(update_date, content)
    if errors:
        return CampaignUpdateOutput(success=False, error="Invalid update", field_errors=errors)

    try:
        row = db.insert(
            "campaign_updates",
            [
                {
                    "campaign_id": campaign_id,
                    "update_date": update_date,
                    "content": content,
                    "created_by": admin.id,
                }
            ],
        )[0]
    except BackendError as e:
        logger.error("Error creating update for %s: %s", campaign_id, e.message)
        return CampaignUpdateOutput(success=False, error=e.message)

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignUpdateOutput(success=True, update_id=row["id"])


def run_update_campaign_update(
    update_id: str,
    campaign_id: str,
    update_date: str,
    content: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignUpdateOutput:
    admin = require_admin(gate)
    if admin is None:
        return CampaignUpdateOutput(success=False, error=UNAUTHORIZED)
    errors = _validate_update(update_date, content)
    if errors:
        return CampaignUpdateOutput(success=False, error="Invalid update", field_errors=errors)

    try:
        updated = db.update(
            "campaign_updates",
            {"update_date": update_date, "content": content},
            eq={"id": update_id, "campaign_id": campaign_id},
        )
    except BackendError as e:
        logger.error("Error updating campaign update %s: %s", update_id, e.message)
        return CampaignUpdateOutput(success=False, error=e.message)
    if not updated:
        return CampaignUpdateOutput(success=False, error="Update not found")

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignUpdateOutput(success=True, update_id=update_id)


def run_delete_campaign_update(
    update_id: str,
    campaign_id: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> CampaignUpdateOutput:
    admin = require_admin(gate)
    if admin is None:
        return CampaignUpdateOutput(success=False, error=UNAUTHORIZED)

    try:
        db.delete("campaign_updates", eq={"id": update_id, "campaign_id": campaign_id})
    except BackendError as e:
        logger.error("Error deleting campaign update %s: %s", update_id, e.message)
        return CampaignUpdateOutput(success=False, error=e.message)

    revalidate(
        revalidator,
        f"/admin/campaigns/{campaign_id}",
        *_public_paths(campaign_id, _slug_of(db, campaign_id)),
    )
    return CampaignUpdateOutput(success=True, update_id=update_id)
