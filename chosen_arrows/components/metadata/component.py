"""
Metadata component - per-page SEO rows and the resolved head tags.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chosen_arrows.components.actions import revalidate
from chosen_arrows.components.auth import UNAUTHORIZED, require_admin
from chosen_arrows.components.i18n import resolve
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import PageMetadata
from chosen_arrows.domain.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from chosen_arrows.rules.models import SeoRules

from ._impl import build_page_seo
from .models import METADATA_FIELDS, MetadataOutput, PageSeo, UpdateMetadataInput
from .ports import AdminGatePort, DataPort, RevalidatorPort

logger = logging.getLogger(__name__)

ADMIN_PATH = "/admin/settings/metadata"


def _lookup(db: DataPort, page_path: str, language: str) -> PageMetadata | None:
    rows = db.select(
        "page_metadata", eq={"page_path": page_path, "language_code": language}, limit=1
    )
    return PageMetadata.model_validate(rows[0]) if rows else None


def run_get_page_metadata(
    page_path: str, language: str = "en", *, db: DataPort
) -> PageMetadata | None:
    """Row for the page in ``language``, else the English row, else None."""
    resolved = resolve(lambda key, lang: _lookup(db, key, lang), page_path, language)
    return resolved.value if resolved else None


def run_get_all_page_metadata(*, db: DataPort) -> list[PageMetadata]:
    try:
        rows = db.select("page_metadata", order=[("page_path", "asc"), ("language_code", "asc")])
    except BackendError as e:
        logger.error("Error fetching page metadata: %s", e.message)
        return []
    return [PageMetadata.model_validate(r) for r in rows]


def run_get_page_seo(
    page_path: str,
    language: str,
    *,
    db: DataPort,
    seo: SeoRules,
    base_url: str,
    site_name: str,
) -> PageSeo:
    row = run_get_page_metadata(page_path, language, db=db)
    english = None
    if row is not None and row.language_code != DEFAULT_LANGUAGE:
        try:
            english = _lookup(db, page_path, DEFAULT_LANGUAGE)
        except BackendError as e:
            logger.error("Error fetching page metadata for %s: %s", page_path, e.message)
    return build_page_seo(
        page_path, row, english, seo, base_url=base_url, site_name=site_name, language=language
    )


def run_update_page_metadata(
    inp: UpdateMetadataInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
    languages: Sequence[str] = SUPPORTED_LANGUAGES,
) -> MetadataOutput:
    """Upsert on (page_path, language_code). Unknown fields are ignored."""
    admin = require_admin(gate)
    if admin is None:
        return MetadataOutput(success=False, error=UNAUTHORIZED)

    errors: dict[str, list[str]] = {}
    if not inp.page_path.startswith("/"):
        errors["page_path"] = ["Page path must start with /"]
    if inp.language not in languages:
        errors["language"] = [f"Unsupported language: {inp.language}"]
    keywords = inp.fields.get("keywords")
    if keywords is not None and not (
        isinstance(keywords, list) and all(isinstance(k, str) for k in keywords)
    ):
        errors["keywords"] = ["Keywords must be a list of strings"]
    if errors:
        return MetadataOutput(success=False, error="Invalid page metadata", field_errors=errors)

    values = {k: v for k, v in inp.fields.items() if k in METADATA_FIELDS}
    try:
        db.upsert(
            "page_metadata",
            [
                {
                    "page_path": inp.page_path,
                    "language_code": inp.language,
                    **values,
                    "updated_by": admin.id,
                }
            ],
            on_conflict=["page_path", "language_code"],
        )
    except BackendError as e:
        logger.error(
            "Error updating page metadata %s (%s): %s", inp.page_path, inp.language, e.message
        )
        return MetadataOutput(success=False, error=e.message)

    logger.info("Admin %s updated metadata for %s (%s)", admin.id, inp.page_path, inp.language)
    revalidate(revalidator, inp.page_path, ADMIN_PATH)
    return MetadataOutput(success=True, page_path=inp.page_path)
