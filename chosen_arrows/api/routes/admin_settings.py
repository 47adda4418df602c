"""
Admin Settings API.

Site-wide key/value settings (contact details, social links, hero stats).
Known keys are validated; PUT returns 422 with per-field messages on failure.
"""

from typing import Any

from fastapi import APIRouter, Depends

from chosen_arrows.api.deps import get_db, get_gate, get_revalidator
from chosen_arrows.api.responses import output_body
from chosen_arrows.api.schemas import SettingRequest, SettingsBatchRequest
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.settings import (
    SettingInput,
    run_get_all_settings,
    run_update_multiple_settings,
    run_update_setting,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.domain.entities import SiteSetting

router = APIRouter()


@router.get("", response_model=list[SiteSetting])
def list_settings(db: DataPort = Depends(get_db)) -> list[SiteSetting]:
    return run_get_all_settings(db=db)


@router.put("")
def update_settings(
    body: SettingsBatchRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    items = [
        SettingInput(key=s.key, value=s.value, description=s.description) for s in body.settings
    ]
    return output_body(
        run_update_multiple_settings(items, db=db, gate=gate, revalidator=revalidator)
    )


@router.put("/{setting_key}")
def update_setting(
    setting_key: str,
    body: SettingRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
) -> dict[str, Any]:
    item = SettingInput(key=setting_key, value=body.value, description=body.description)
    return output_body(run_update_setting(item, db=db, gate=gate, revalidator=revalidator))
