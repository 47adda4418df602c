"""
Relational schema shared by the backend adapters.

Both the SQLite and the in-memory backends read this table metadata to apply
column defaults, decode JSON/boolean columns, enforce unique keys and cascade
deletes from parent rows. The SQL migration in ``migrations/`` is the
authoritative DDL for SQLite; this module mirrors it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TableSpec:
    """Metadata for one backend table."""

    name: str
    columns: tuple[str, ...]
    defaults: dict[str, Any] = field(default_factory=dict)
    json_columns: tuple[str, ...] = ()
    bool_columns: tuple[str, ...] = ()
    unique: tuple[tuple[str, ...], ...] = ()
    # column -> parent table; deleting the parent deletes the child (ON DELETE CASCADE)
    foreign_keys: dict[str, str] = field(default_factory=dict)
    generated_id: bool = True

    @property
    def has_created_at(self) -> bool:
        return "created_at" in self.columns

    @property
    def has_updated_at(self) -> bool:
        return "updated_at" in self.columns


TABLES: dict[str, TableSpec] = {
    spec.name: spec
    for spec in (
        TableSpec(
            name="auth_users",
            columns=("id", "email", "password_hash", "created_at"),
            unique=(("email",),),
        ),
        TableSpec(
            name="admin_users",
            columns=("id", "role", "full_name", "last_login", "created_at"),
            defaults={"role": "admin"},
            foreign_keys={"id": "auth_users"},
            generated_id=False,
        ),
        TableSpec(
            name="content_sections",
            columns=(
                "id",
                "section_key",
                "content_type",
                "created_by",
                "updated_by",
                "created_at",
                "updated_at",
            ),
            defaults={"content_type": "json"},
            unique=(("section_key",),),
        ),
        TableSpec(
            name="content_translations",
            columns=("id", "section_id", "language_code", "content", "updated_by", "updated_at"),
            defaults={"content": {}},
            json_columns=("content",),
            unique=(("section_id", "language_code"),),
            foreign_keys={"section_id": "content_sections"},
        ),
        TableSpec(
            name="campaigns",
            columns=(
                "id",
                "slug",
                "status",
                "goal_amount",
                "raised_amount",
                "donor_count",
                "days_left",
                "category",
                "featured",
                "created_by",
                "updated_by",
                "created_at",
                "updated_at",
            ),
            defaults={
                "status": "draft",
                "goal_amount": 0,
                "raised_amount": 0,
                "donor_count": 0,
                "featured": False,
            },
            bool_columns=("featured",),
            unique=(("slug",),),
        ),
        TableSpec(
            name="campaign_translations",
            columns=(
                "id",
                "campaign_id",
                "language_code",
                "title",
                "story",
                "full_story",
                "child_name",
                "child_age",
                "location",
                "created_at",
                "updated_at",
            ),
            unique=(("campaign_id", "language_code"),),
            foreign_keys={"campaign_id": "campaigns"},
        ),
        TableSpec(
            name="campaign_images",
            columns=(
                "id",
                "campaign_id",
                "image_url",
                "image_alt",
                "is_primary",
                "display_order",
                "created_at",
            ),
            defaults={"is_primary": False, "display_order": 0},
            bool_columns=("is_primary",),
            foreign_keys={"campaign_id": "campaigns"},
        ),
        TableSpec(
            name="campaign_updates",
            columns=("id", "campaign_id", "update_date", "content", "created_by", "created_at"),
            foreign_keys={"campaign_id": "campaigns"},
        ),
        TableSpec(
            name="testimonials",
            columns=(
                "id",
                "name",
                "role",
                "content",
                "avatar_initials",
                "display_order",
                "is_active",
                "created_by",
                "updated_by",
                "created_at",
                "updated_at",
            ),
            defaults={"display_order": 0, "is_active": True},
            bool_columns=("is_active",),
        ),
        TableSpec(
            name="page_metadata",
            columns=(
                "id",
                "page_path",
                "language_code",
                "title",
                "description",
                "keywords",
                "og_title",
                "og_description",
                "og_image_url",
                "og_type",
                "twitter_card",
                "twitter_title",
                "twitter_description",
                "twitter_image_url",
                "updated_by",
                "updated_at",
            ),
            json_columns=("keywords",),
            unique=(("page_path", "language_code"),),
        ),
        TableSpec(
            name="site_settings",
            columns=(
                "id",
                "setting_key",
                "setting_value",
                "description",
                "updated_by",
                "updated_at",
            ),
            defaults={"setting_value": {}},
            json_columns=("setting_value",),
            unique=(("setting_key",),),
        ),
        TableSpec(
            name="content_audit_log",
            columns=(
                "id",
                "table_name",
                "record_id",
                "action",
                "old_values",
                "new_values",
                "user_id",
                "created_at",
            ),
            json_columns=("old_values", "new_values"),
        ),
    )
}


def get_table(name: str) -> TableSpec:
    try:
        return TABLES[name]
    except KeyError:
        raise KeyError(f"Unknown table: {name}") from None


def child_tables(parent: str) -> list[tuple[TableSpec, str]]:
    """Tables (and their FK column) that cascade from ``parent``."""
    return [
        (spec, column)
        for spec in TABLES.values()
        for column, target in spec.foreign_keys.items()
        if target == parent
    ]
