"""
Admin Page Metadata API.

Per-page, per-language SEO rows.
"""

from typing import Any

from fastapi import APIRouter, Depends

from chosen_arrows.api.deps import get_db, get_gate, get_languages, get_revalidator
from chosen_arrows.api.responses import output_body
from chosen_arrows.api.schemas import PageMetadataRequest
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.metadata import (
    UpdateMetadataInput,
    run_get_all_page_metadata,
    run_update_page_metadata,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.domain.entities import PageMetadata

router = APIRouter()


@router.get("", response_model=list[PageMetadata])
def list_metadata(db: DataPort = Depends(get_db)) -> list[PageMetadata]:
    return run_get_all_page_metadata(db=db)


@router.put("")
def update_metadata(
    body: PageMetadataRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    languages: tuple[str, ...] = Depends(get_languages),
) -> dict[str, Any]:
    fields = body.model_dump(exclude_unset=True, exclude={"page_path", "language_code"})
    inp = UpdateMetadataInput(page_path=body.page_path, language=body.language_code, fields=fields)
    result = run_update_page_metadata(
        inp, db=db, gate=gate, revalidator=revalidator, languages=languages
    )
    return output_body(result)
