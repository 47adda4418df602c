"""
Admin Content API.

Section documents per language. Writes replace one language's document.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from chosen_arrows.api.deps import (
    get_db,
    get_gate,
    get_languages,
    get_revalidator,
    get_section_keys,
)
from chosen_arrows.api.responses import output_body
from chosen_arrows.api.schemas import ContentUpdateRequest
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.components.content import (
    SectionEditorOutput,
    UpdateContentInput,
    run_get_all_sections,
    run_get_section_editor,
    run_update_content,
)
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.domain.entities import SectionOverview

router = APIRouter()


@router.get("", response_model=list[SectionOverview])
def list_sections(
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
) -> list[SectionOverview]:
    return run_get_all_sections(db=db, gate=gate)


@router.get("/{section_key}")
def get_section(
    section_key: str,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    languages: tuple[str, ...] = Depends(get_languages),
    section_keys: tuple[str, ...] = Depends(get_section_keys),
) -> SectionEditorOutput:
    editor = run_get_section_editor(
        section_key, db=db, gate=gate, languages=languages, section_keys=section_keys
    )
    if editor is None:
        raise HTTPException(status_code=404, detail="Section not found")
    return editor


@router.put("/{section_key}/{language}")
def update_section(
    section_key: str,
    language: str,
    body: ContentUpdateRequest,
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    revalidator: RevalidatorPort = Depends(get_revalidator),
    languages: tuple[str, ...] = Depends(get_languages),
    section_keys: tuple[str, ...] = Depends(get_section_keys),
) -> dict[str, Any]:
    inp = UpdateContentInput(section_key=section_key, language=language, content=body.content)
    result = run_update_content(
        inp,
        db=db,
        gate=gate,
        revalidator=revalidator,
        languages=languages,
        section_keys=section_keys,
    )
    return output_body(result)
