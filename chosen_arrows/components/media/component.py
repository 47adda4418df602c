"""
Media component - image uploads to the public ``images`` bucket.

Invariants:
- MIME type must be in the allowlist
- Size must not exceed the limit
- Both checks run before any storage call
- Existing objects are never overwritten
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from chosen_arrows.components.actions import ActionOutput, failed, unauthorized
from chosen_arrows.components.auth import UNAUTHORIZED, require_admin
from chosen_arrows.components.fanout import fetch_all
from chosen_arrows.core.ports.storage import StorageError
from chosen_arrows.domain.entities import MediaFile

from .models import UploadConfig, UploadImageInput, UploadImageOutput
from .ports import AdminGatePort, ObjectStoragePort, TimePort

logger = logging.getLogger(__name__)

INVALID_TYPE = "Invalid file type. Only JPEG, PNG, and WebP are allowed."
TOO_LARGE = "File size exceeds 5MB limit."

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_file_name(name: str) -> str:
    return _UNSAFE_CHARS.sub("_", name)


def generate_file_name(original: str, clock: TimePort) -> str:
    """``<epoch-ms>-<sanitised name>``."""
    millis = int(clock.now_utc().timestamp() * 1000)
    return f"{millis}-{sanitize_file_name(original)}"


def validate_upload(inp: UploadImageInput, config: UploadConfig) -> str | None:
    if inp.content_type not in config.allowlist_mime_types:
        return INVALID_TYPE
    if len(inp.data) > config.max_upload_bytes:
        return f"File size exceeds {config.max_upload_bytes // (1024 * 1024)}MB limit."
    return None


def _join(folder: str, name: str) -> str:
    folder = folder.strip("/")
    return f"{folder}/{name}" if folder else name


def run_upload_image(
    inp: UploadImageInput,
    *,
    storage: ObjectStoragePort,
    gate: AdminGatePort,
    clock: TimePort,
    config: UploadConfig | None = None,
) -> UploadImageOutput:
    config = config or UploadConfig()
    admin = require_admin(gate)
    if admin is None:
        return UploadImageOutput(success=False, error=UNAUTHORIZED)

    error = validate_upload(inp, config)
    if error:
        return UploadImageOutput(success=False, error=error)

    path = _join(inp.folder, inp.file_name or generate_file_name(inp.filename, clock))
    try:
        stored = storage.upload(
            path,
            inp.data,
            content_type=inp.content_type,
            cache_control=str(config.cache_control_seconds),
            upsert=False,
        )
    except StorageError as e:
        logger.error("Error uploading %s: %s", path, e)
        return UploadImageOutput(success=False, error=str(e))

    logger.info("Admin %s uploaded %s (%d bytes)", admin.id, stored, len(inp.data))
    return UploadImageOutput(success=True, url=storage.public_url(stored), path=stored)


def run_list_images(
    folder: str = "",
    *,
    storage: ObjectStoragePort,
    gate: AdminGatePort,
    limit: int = 100,
) -> list[MediaFile]:
    """Newest first. Empty on error or for non-admins."""
    if require_admin(gate) is None:
        return []
    try:
        objects = storage.list(folder, limit=limit, offset=0)
    except StorageError as e:
        logger.error("Error listing images: %s", e)
        return []

    files = []
    for obj in objects:
        path = _join(folder, obj.name)
        files.append(
            MediaFile(
                name=obj.name,
                path=path,
                url=storage.public_url(path),
                size=obj.size or 0,
                updated_at=obj.updated_at or obj.created_at,
            )
        )
    return files


def run_delete_image(
    path: str,
    *,
    storage: ObjectStoragePort,
    gate: AdminGatePort,
) -> ActionOutput:
    admin = require_admin(gate)
    if admin is None:
        return unauthorized()
    try:
        storage.remove([path])
    except StorageError as e:
        logger.error("Error deleting %s: %s", path, e)
        return failed(str(e))
    logger.info("Admin %s deleted %s", admin.id, path)
    return ActionOutput(success=True)


def run_list_library(
    folders: Sequence[str],
    *,
    storage: ObjectStoragePort,
    gate: AdminGatePort,
    limit: int = 100,
) -> dict[str, list[MediaFile]]:
    """Listings for several folders at once, keyed by folder."""
    if require_admin(gate) is None:
        return {}
    return fetch_all(
        {
            folder: lambda folder=folder: run_list_images(
                folder, storage=storage, gate=gate, limit=limit
            )
            for folder in folders
        }
    )
