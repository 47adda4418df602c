"""
Content component - localized section documents.

Reads fall back to English. Writes replace a language's document wholesale;
writing the French "hero" never touches the English one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from chosen_arrows.components.actions import ActionOutput, failed, revalidate, unauthorized
from chosen_arrows.components.auth import require_admin
from chosen_arrows.components.i18n import resolve_with_fallback
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import SectionOverview, TranslationStatus
from chosen_arrows.domain.languages import SUPPORTED_LANGUAGES
from chosen_arrows.domain.sections import SECTION_KEYS, schema_for, validate_section_content

from .models import SectionEditorOutput, UpdateContentInput
from .ports import AdminGatePort, DataPort, RevalidatorPort

logger = logging.getLogger(__name__)


def _section_id(db: DataPort, section_key: str) -> str | None:
    rows = db.select("content_sections", columns=["id"], eq={"section_key": section_key}, limit=1)
    return rows[0]["id"] if rows else None


def _translation(db: DataPort, section_key: str, language: str) -> dict[str, Any] | None:
    section_id = _section_id(db, section_key)
    if section_id is None:
        return None
    rows = db.select(
        "content_translations",
        columns=["content"],
        eq={"section_id": section_id, "language_code": language},
        limit=1,
    )
    return rows[0]["content"] if rows else None


def _write_section(
    db: DataPort,
    section_key: str,
    language: str,
    document: dict[str, Any],
    actor_id: str | None,
) -> None:
    with db.transaction():
        section_id = _section_id(db, section_key)
        if section_id is None:
            section_id = db.insert(
                "content_sections",
                [{"section_key": section_key, "content_type": "json", "created_by": actor_id}],
            )[0]["id"]
        db.upsert(
            "content_translations",
            [
                {
                    "section_id": section_id,
                    "language_code": language,
                    "content": document,
                    "updated_by": actor_id,
                }
            ],
            on_conflict=["section_id", "language_code"],
        )
        db.update("content_sections", {"updated_by": actor_id}, eq={"id": section_id})


def run_get_content(
    section_key: str, language: str = "en", *, db: DataPort
) -> dict[str, Any] | None:
    """Section document in ``language``, else English, else None."""
    return resolve_with_fallback(
        lambda key, lang: _translation(db, key, lang), section_key, language
    )


def run_get_all_sections(*, db: DataPort, gate: AdminGatePort) -> list[SectionOverview]:
    """All sections ordered by key with their translation status. Admin only."""
    if require_admin(gate) is None:
        return []
    try:
        sections = db.select("content_sections", order=[("section_key", "asc")])
        translations = db.select(
            "content_translations",
            columns=["section_id", "language_code", "updated_at"],
            in_={"section_id": [s["id"] for s in sections]},
            order=[("language_code", "asc")],
        )
    except BackendError as e:
        logger.error("Error fetching sections: %s", e.message)
        return []

    by_section: dict[str, list[TranslationStatus]] = {}
    for row in translations:
        by_section.setdefault(row["section_id"], []).append(
            TranslationStatus(language_code=row["language_code"], updated_at=row["updated_at"])
        )
    return [
        SectionOverview(
            id=s["id"],
            section_key=s["section_key"],
            content_type=s["content_type"],
            created_at=s["created_at"],
            updated_at=s["updated_at"],
            translations=by_section.get(s["id"], []),
        )
        for s in sections
    ]


def run_get_section_editor(
    section_key: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
    section_keys: Sequence[str] = SECTION_KEYS,
) -> SectionEditorOutput | None:
    """
    Editor payload for one section: the raw document per language (no
    fallback) and the field names to render. None for unknown sections or
    callers who are not admins.
    """
    model = schema_for(section_key, section_keys)
    if model is None or require_admin(gate) is None:
        return None

    documents: dict[str, dict[str, Any] | None] = {}
    for language in languages:
        try:
            documents[language] = _translation(db, section_key, language)
        except BackendError as e:
            logger.error("Error fetching %s/%s: %s", section_key, language, e.message)
            documents[language] = None

    fields = list(model.model_fields)
    for document in documents.values():
        for key in document or {}:
            if key not in fields:
                fields.append(key)
    return SectionEditorOutput(section_key=section_key, fields=fields, documents=documents)


def run_update_content(
    inp: UpdateContentInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
    section_keys: Sequence[str] = SECTION_KEYS,
) -> ActionOutput:
    """
    Create-or-update one language's document for a section.

    The section row is created on first write. Section creation and the
    translation upsert commit together.
    """
    admin = require_admin(gate)
    if admin is None:
        return unauthorized()

    if inp.language not in languages:
        return failed(
            "Unsupported language",
            {"language": [f"Language must be one of: {', '.join(languages)}"]},
        )

    document, errors = validate_section_content(inp.section_key, inp.content, section_keys)
    if document is None:
        return failed("Invalid content", errors)

    try:
        _write_section(db, inp.section_key, inp.language, document, admin.id)
    except BackendError as e:
        logger.error("Error updating content %s/%s: %s", inp.section_key, inp.language, e.message)
        return failed(e.message)

    logger.info("Admin %s updated %s (%s)", admin.id, inp.section_key, inp.language)
    revalidate(revalidator, "/", "/admin/content/sections")
    return ActionOutput(success=True)


def seed_content(
    db: DataPort,
    documents: Mapping[str, Mapping[str, dict[str, Any]]],
    *,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
    section_keys: Sequence[str] = SECTION_KEYS,
) -> dict[str, dict[str, list[str]]]:
    """
    Write section documents given as ``{section_key: {language: document}}``.
    Used by the CLI. Returns field errors per ``section_key/language`` for the
    documents that were skipped.
    """
    skipped: dict[str, dict[str, list[str]]] = {}
    for section_key, by_language in documents.items():
        for language, content in by_language.items():
            label = f"{section_key}/{language}"
            if language not in languages:
                skipped[label] = {"language": [f"Unsupported language: {language}"]}
                continue
            document, errors = validate_section_content(section_key, content, section_keys)
            if document is None:
                skipped[label] = errors
                continue
            _write_section(db, section_key, language, document, None)
            logger.info("Seeded %s", label)
    return skipped
