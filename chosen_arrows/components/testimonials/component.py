"""
Testimonials component - quotes shown on the home page.

Ordering is display_order ascending, newest first within a tie. New entries
append at max(display_order) + 1. Reordering assigns 0..N-1 in the given
order, one update per id, and stops at the first failure without undoing
earlier updates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from chosen_arrows.components.actions import revalidate
from chosen_arrows.components.auth import UNAUTHORIZED, require_admin
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import Testimonial

from .models import TestimonialInput, TestimonialOutput
from .ports import AdminGatePort, DataPort, RevalidatorPort

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "role", "content", "avatar_initials", "display_order", "is_active")
REVALIDATE_PATHS = ("/admin/testimonials", "/")


def derive_initials(name: str) -> str:
    """First letters of the name's words, upper-cased, at most two."""
    return "".join(word[0] for word in name.split()).upper()[:2]


def _validate(values: dict[str, Any]) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for name in ("name", "role", "content"):
        if name in values and not (values[name] or "").strip():
            errors[name] = [f"{name.capitalize()} is required"]
    if values.get("display_order") is not None and values["display_order"] < 0:
        errors["display_order"] = ["Display order cannot be negative"]
    return errors


def run_get_testimonials(
    *,
    db: DataPort,
    active_only: bool = False,
    admin: bool = False,
) -> list[Testimonial]:
    """The active filter only applies to non-admin callers asking for it."""
    eq = {"is_active": True} if active_only and not admin else None
    try:
        rows = db.select(
            "testimonials",
            eq=eq,
            order=[("display_order", "asc"), ("created_at", "desc")],
        )
    except BackendError as e:
        logger.error("Error fetching testimonials: %s", e.message)
        return []
    return [Testimonial.model_validate(r) for r in rows]


def run_get_testimonial(testimonial_id: str, *, db: DataPort) -> Testimonial | None:
    try:
        rows = db.select("testimonials", eq={"id": testimonial_id}, limit=1)
    except BackendError as e:
        logger.error("Error fetching testimonial %s: %s", testimonial_id, e.message)
        return None
    return Testimonial.model_validate(rows[0]) if rows else None


def run_create_testimonial(
    inp: TestimonialInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> TestimonialOutput:
    admin = require_admin(gate)
    if admin is None:
        return TestimonialOutput(success=False, error=UNAUTHORIZED)

    errors = _validate(
        {
            "name": inp.name,
            "role": inp.role,
            "content": inp.content,
            "display_order": inp.display_order,
        }
    )
    if errors:
        return TestimonialOutput(success=False, error="Invalid testimonial", field_errors=errors)

    try:
        display_order = inp.display_order
        if display_order is None:
            last = db.select(
                "testimonials",
                columns=["display_order"],
                order=[("display_order", "desc")],
                limit=1,
            )
            display_order = last[0]["display_order"] + 1 if last else 0
        row = db.insert(
            "testimonials",
            [
                {
                    "name": inp.name,
                    "role": inp.role,
                    "content": inp.content,
                    "avatar_initials": inp.avatar_initials or derive_initials(inp.name),
                    "display_order": display_order,
                    "is_active": True if inp.is_active is None else inp.is_active,
                    "created_by": admin.id,
                    "updated_by": admin.id,
                }
            ],
        )[0]
    except BackendError as e:
        logger.error("Error creating testimonial: %s", e.message)
        return TestimonialOutput(success=False, error=e.message)

    logger.info("Admin %s created testimonial %s", admin.id, row["id"])
    revalidate(revalidator, *REVALIDATE_PATHS)
    return TestimonialOutput(success=True, testimonial_id=row["id"])


def run_update_testimonial(
    testimonial_id: str,
    changes: dict[str, Any],
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> TestimonialOutput:
    """Partial update. A new name without explicit initials re-derives them."""
    admin = require_admin(gate)
    if admin is None:
        return TestimonialOutput(success=False, error=UNAUTHORIZED)

    values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
    errors = _validate(values)
    if errors:
        return TestimonialOutput(success=False, error="Invalid testimonial", field_errors=errors)
    if values.get("name") and not values.get("avatar_initials"):
        values["avatar_initials"] = derive_initials(values["name"])

    try:
        updated = db.update(
            "testimonials", {**values, "updated_by": admin.id}, eq={"id": testimonial_id}
        )
    except BackendError as e:
        logger.error("Error updating testimonial %s: %s", testimonial_id, e.message)
        return TestimonialOutput(success=False, error=e.message)
    if not updated:
        return TestimonialOutput(success=False, error="Testimonial not found")

    revalidate(revalidator, *REVALIDATE_PATHS)
    return TestimonialOutput(success=True, testimonial_id=testimonial_id)


def run_delete_testimonial(
    testimonial_id: str,
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> TestimonialOutput:
    admin = require_admin(gate)
    if admin is None:
        return TestimonialOutput(success=False, error=UNAUTHORIZED)

    try:
        db.delete("testimonials", eq={"id": testimonial_id})
    except BackendError as e:
        logger.error("Error deleting testimonial %s: %s", testimonial_id, e.message)
        return TestimonialOutput(success=False, error=e.message)

    logger.info("Admin %s deleted testimonial %s", admin.id, testimonial_id)
    revalidate(revalidator, *REVALIDATE_PATHS)
    return TestimonialOutput(success=True, testimonial_id=testimonial_id)


def run_reorder_testimonials(
    testimonial_ids: Sequence[str],
    *,
    db: DataPort,
    gate: AdminGatePort,
    revalidator: RevalidatorPort | None = None,
) -> TestimonialOutput:
    """Set display_order to each id's index. The first failure is returned as-is."""
    admin = require_admin(gate)
    if admin is None:
        return TestimonialOutput(success=False, error=UNAUTHORIZED)

    for index, testimonial_id in enumerate(testimonial_ids):
        try:
            db.update(
                "testimonials",
                {"display_order": index, "updated_by": admin.id},
                eq={"id": testimonial_id},
            )
        except BackendError as e:
            logger.error("Reorder stopped at %s (index %d): %s", testimonial_id, index, e.message)
            return TestimonialOutput(success=False, error=e.message)

    revalidate(revalidator, *REVALIDATE_PATHS)
    return TestimonialOutput(success=True)
