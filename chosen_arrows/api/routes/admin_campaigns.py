"""
Admin Campaigns API.

Campaign CRUD with per-language translations, the image gallery and the
progress timeline.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from chosen_arrows.api.deps import (
    get_db,
    get_gate,
    get_languages,
    get_revalidator,
    get_storage,
    get_storage_bucket,
)
from chosen_arrows.api.responses import output_body
from chosen_arrows.api.schemas import (
    CampaignCreateRequest,
    CampaignImageCreateRequest,
    CampaignImageUpdateRequest,
    CampaignUpdateRequest,
    CopyTranslationRequest,
    TimelineEntryRequest,
)
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.campaigns import (
    AddImageInput,
    CampaignInput,
    CampaignListInput,
    TranslationInput,
    UpdateCampaignInput,
    run_add_campaign_image,
    run_copy_translation,
    run_create_campaign,
    run_create_campaign_update,
    run_delete_campaign,
    run_delete_campaign_image,
    run_delete_campaign_update,
    run_get_campaign,
    run_get_campaign_updates,
    run_get_campaigns,
    run_update_campaign,
    run_update_campaign_image,
    run_update_campaign_update,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.core.ports.storage import ObjectStoragePort
from chosen_arrows.domain.entities import CampaignUpdate, CampaignView

router = APIRouter()


@router.get("", response_model=list[CampaignView])
def list_campaigns(
    language: str = Query(default="en"),
    status: str | None = Query(default=None),
    db: DataPort = Depends(get_db),
) -> list[CampaignView]:
    """Every status unless one is requested."""
    return run_get_campaigns(CampaignListInput(language=language, status=status, admin=True), db=db)


@router.get("/{campaign_id}", response_model=dict[str, CampaignView | None])
def get_campaign_editor(
    campaign_id: str,
    db: DataPort = Depends(get_db),
    languages: tuple[str, ...] = Depends(get_languages),
) -> dict[str, CampaignView | None]:
    """The campaign once per language, for the editor's language tabs."""
    views = {language: run_get_campaign(campaign_id, language, db=db) for language in languages}
    if all(view is None for view in views.values()):
        raise HTTPException(status_code=404, detail="Campaign not found")
    return views


@router.post("", status_code=201)
def create_campaign(
    body: CampaignCreateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    languages: tuple[str, ...] = Depends(get_languages),
) -> dict[str, Any]:
    inp = CampaignInput(
        slug=body.slug,
        status=body.status,
        goal_amount=body.goal_amount,
        raised_amount=body.raised_amount,
        donor_count=body.donor_count,
        days_left=body.days_left,
        category=body.category,
        featured=body.featured,
        translations=[TranslationInput(**t.model_dump()) for t in body.translations],
    )
    result = run_create_campaign(
        inp, db=db, gate=gate, revalidator=revalidator, languages=languages
    )
    return output_body(result)


@router.patch("/{campaign_id}")
def update_campaign(
    campaign_id: str,
    body: CampaignUpdateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    languages: tuple[str, ...] = Depends(get_languages),
) -> dict[str, Any]:
    changes = body.model_dump(exclude_unset=True, exclude={"translations"})
    inp = UpdateCampaignInput(
        campaign_id=campaign_id,
        changes=changes,
        translations=[t.model_dump() for t in body.translations],
    )
    result = run_update_campaign(
        inp, db=db, gate=gate, revalidator=revalidator, languages=languages
    )
    return output_body(result)


@router.delete("/{campaign_id}")
def delete_campaign(
    campaign_id: str,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    return output_body(run_delete_campaign(campaign_id, db=db, gate=gate, revalidator=revalidator))


@router.post("/{campaign_id}/copy-translation")
def copy_translation(
    campaign_id: str,
    body: CopyTranslationRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    languages: tuple[str, ...] = Depends(get_languages),
) -> dict[str, Any]:
    result = run_copy_translation(
        campaign_id,
        body.target_language,
        db=db,
        gate=gate,
        revalidator=revalidator,
        source_language=body.source_language,
        languages=languages,
    )
    return output_body(result)


# --- Images ---


@router.post("/{campaign_id}/images", status_code=201)
def add_image(
    campaign_id: str,
    body: CampaignImageCreateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    inp = AddImageInput(
        campaign_id=campaign_id,
        image_url=body.image_url,
        image_alt=body.image_alt,
        is_primary=body.is_primary,
    )
    return output_body(run_add_campaign_image(inp, db=db, gate=gate, revalidator=revalidator))


@router.patch("/{campaign_id}/images/{image_id}")
def update_image(
    campaign_id: str,
    image_id: str,
    body: CampaignImageUpdateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    result = run_update_campaign_image(
        image_id,
        campaign_id,
        body.model_dump(exclude_unset=True),
        db=db,
        gate=gate,
        revalidator=revalidator,
    )
    return output_body(result)


@router.delete("/{campaign_id}/images/{image_id}")
def delete_image(
    campaign_id: str,
    image_id: str,
    image_url: str = Query(...),
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    storage: ObjectStoragePort = Depends(get_storage),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    bucket: str = Depends(get_storage_bucket),
) -> dict[str, Any]:
    result = run_delete_campaign_image(
        image_id,
        campaign_id,
        image_url,
        db=db,
        gate=gate,
        storage=storage,
        revalidator=revalidator,
        bucket=bucket,
    )
    return output_body(result)


# --- Timeline ---


@router.get("/{campaign_id}/updates", response_model=list[CampaignUpdate])
def list_updates(campaign_id: str, db: DataPort = Depends(get_db)) -> list[CampaignUpdate]:
    return run_get_campaign_updates(campaign_id, db=db)


@router.post("/{campaign_id}/updates", status_code=201)
def create_update(
    campaign_id: str,
    body: TimelineEntryRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    result = run_create_campaign_update(
        campaign_id, body.update_date, body.content, db=db, gate=gate, revalidator=revalidator
    )
    return output_body(result)


@router.put("/{campaign_id}/updates/{update_id}")
def edit_update(
    campaign_id: str,
    update_id: str,
    body: TimelineEntryRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    result = run_update_campaign_update(
        update_id,
        campaign_id,
        body.update_date,
        body.content,
        db=db,
        gate=gate,
        revalidator=revalidator,
    )
    return output_body(result)


@router.delete("/{campaign_id}/updates/{update_id}")
def delete_update(
    campaign_id: str,
    update_id: str,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    result = run_delete_campaign_update(
        update_id, campaign_id, db=db, gate=gate, revalidator=revalidator
    )
    return output_body(result)
