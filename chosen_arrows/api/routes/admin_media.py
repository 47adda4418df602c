"""
Admin Media API.

Folder-scoped image library backed by the ``images`` bucket.
"""

from typing import Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from chosen_arrows.api.deps import get_clock, get_gate, get_storage, get_upload_config
from chosen_arrows.api.responses import output_body
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.media import (
    UploadConfig,
    UploadImageInput,
    run_delete_image,
    run_list_images,
    run_list_library,
    run_upload_image,
)
from chosen_arrows.core.ports.storage import ObjectStoragePort
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.entities import MediaFile

router = APIRouter()

LIBRARY_FOLDERS = ("campaigns", "content")


@router.get("", response_model=list[MediaFile])
def list_images(
    folder: str = Query(default=""),
    storage: ObjectStoragePort = Depends(get_storage),
    gate: AdminGatePort = Depends(get_gate),
    config: UploadConfig = Depends(get_upload_config),
) -> list[MediaFile]:
    return run_list_images(folder, storage=storage, gate=gate, limit=config.list_limit)


@router.get("/library", response_model=dict[str, list[MediaFile]])
def list_library(
    storage: ObjectStoragePort = Depends(get_storage),
    gate: AdminGatePort = Depends(get_gate),
    config: UploadConfig = Depends(get_upload_config),
) -> dict[str, list[MediaFile]]:
    """Campaign and content images side by side."""
    return run_list_library(LIBRARY_FOLDERS, storage=storage, gate=gate, limit=config.list_limit)


@router.post("", status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    folder: str = Form(...),
    file_name: str | None = Form(default=None),
    storage: ObjectStoragePort = Depends(get_storage),
    gate: AdminGatePort = Depends(get_gate),
    clock: TimePort = Depends(get_clock),
    config: UploadConfig = Depends(get_upload_config),
) -> dict[str, Any]:
    data = await file.read()
    inp = UploadImageInput(
        data=data,
        filename=file.filename or "upload",
        content_type=file.content_type or "application/octet-stream",
        folder=folder,
        file_name=file_name or None,
    )
    result = run_upload_image(inp, storage=storage, gate=gate, clock=clock, config=config)
    return output_body(result)


@router.delete("")
def delete_image(
    path: str = Query(...),
    storage: ObjectStoragePort = Depends(get_storage),
    gate: AdminGatePort = Depends(get_gate),
) -> dict[str, Any]:
    return output_body(run_delete_image(path, storage=storage, gate=gate))
