"""
Settings component - site-wide key/value settings.

Values are JSON objects keyed by ``setting_key``. Writes upsert on the key
and mark the home page and the settings screen stale.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from chosen_arrows.components.actions import revalidate
from chosen_arrows.components.auth import UNAUTHORIZED, require_admin
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import SiteSetting

from ._impl import DEFAULT_SETTINGS, field_errors, validate_setting
from .models import SettingInput, SettingsOutput, ValidationError
from .ports import AdminGatePort, DataPort, RevalidatorPort

logger = logging.getLogger(__name__)

REVALIDATE_PATHS = ("/", "/admin/settings")


def run_get_setting(key: str, *, db: DataPort) -> dict[str, Any] | None:
    try:
        rows = db.select(
            "site_settings", columns=["setting_value"], eq={"setting_key": key}, limit=1
        )
    except BackendError as e:
        logger.error("Error fetching setting %s: %s", key, e.message)
        return None
    return rows[0]["setting_value"] if rows else None


def run_get_all_settings(*, db: DataPort) -> list[SiteSetting]:
    try:
        rows = db.select("site_settings", order=[("setting_key", "asc")])
    except BackendError as e:
        logger.error("Error fetching settings: %s", e.message)
        return []
    return [SiteSetting.model_validate(r) for r in rows]


def _to_row(item: SettingInput, admin_id: str) -> dict[str, Any]:
    return {
        "setting_key": item.key,
        "setting_value": item.value,
        "description": item.description or None,
        "updated_by": admin_id,
    }


def _validate_all(items: Sequence[SettingInput]) -> list[ValidationError]:
    errors: list[ValidationError] = []
    for item in items:
        if not item.key.strip():
            errors.append(ValidationError("setting_key", "required", "Setting key is required"))
            continue
        errors.extend(validate_setting(item.key, item.value))
    return errors


def run_update_multiple_settings(
    items: Sequence[SettingInput],
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> SettingsOutput:
    """Validate every item, then upsert them as one batch."""
    admin = require_admin(gate)
    if admin is None:
        return SettingsOutput(success=False, error=UNAUTHORIZED)

    errors = _validate_all(items)
    if errors:
        return SettingsOutput(
            success=False, error="Invalid settings", field_errors=field_errors(errors)
        )

    try:
        db.upsert(
            "site_settings",
            [_to_row(item, admin.id) for item in items],
            on_conflict=["setting_key"],
        )
    except BackendError as e:
        logger.error("Error updating settings: %s", e.message)
        return SettingsOutput(success=False, error=e.message)

    keys = [item.key for item in items]
    logger.info("Admin %s updated settings %s", admin.id, ", ".join(keys))
    revalidate(revalidator, *REVALIDATE_PATHS)
    return SettingsOutput(success=True, keys=keys)


def run_update_setting(
    item: SettingInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> SettingsOutput:
    return run_update_multiple_settings([item], db=db, gate=gate, revalidator=revalidator)


def seed_default_settings(db: DataPort) -> list[str]:
    """Upsert the initial contact, social and hero settings. Used by the CLI."""
    rows = [
        {"setting_key": key, "setting_value": value, "description": description}
        for key, (value, description) in DEFAULT_SETTINGS.items()
    ]
    db.upsert("site_settings", rows, on_conflict=["setting_key"])
    return list(DEFAULT_SETTINGS)
