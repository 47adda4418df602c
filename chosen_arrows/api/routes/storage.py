"""
Public object serving.

Serves uploaded images at the same URL shape the hosted object storage uses,
``/storage/v1/object/public/<bucket>/<path>``.
"""

import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from chosen_arrows.api.deps import get_rules, get_storage
from chosen_arrows.core.ports.storage import ObjectStoragePort, StorageError
from chosen_arrows.rules.models import Rules

router = APIRouter()


@router.get("/{bucket}/{path:path}")
def serve_object(
    bucket: str,
    path: str,
    storage: ObjectStoragePort = Depends(get_storage),
    rules: Rules = Depends(get_rules),
) -> Response:
    if bucket != rules.uploads.bucket:
        raise HTTPException(status_code=404, detail="Bucket not found")
    try:
        data = storage.read(path)
    except (FileNotFoundError, StorageError) as e:
        raise HTTPException(status_code=404, detail="Object not found") from e

    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return Response(
        content=data,
        media_type=media_type,
        headers={"Cache-Control": f"public, max-age={rules.uploads.cache_control_seconds}"},
    )
