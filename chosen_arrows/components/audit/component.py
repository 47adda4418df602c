"""
Audit component - audit log viewer and admin dashboard counts.

The log itself is written by the backend on every change to an audited
table; this component only reads it. Entries are never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from chosen_arrows.components.auth import require_admin
from chosen_arrows.components.fanout import fetch_all
from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import AuditLogEntry

from .models import AuditLogOutput, AuditUserOption, DashboardStats, QueryAuditInput
from .ports import AdminGatePort, DataPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

FILTER_SCAN_LIMIT = 1000
RECENT_ACTIVITY_LIMIT = 5


def _unique(values: list[str | None]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)


def run_query_audit_log(
    inp: QueryAuditInput,
    *,
    db: DataPort,
    gate: AdminGatePort,
    scan_limit: int = FILTER_SCAN_LIMIT,
) -> AuditLogOutput:
    """Newest entries matching the filters, plus the filter options."""
    if require_admin(gate) is None:
        return AuditLogOutput(filters=inp)

    eq = {}
    if inp.table_name:
        eq["table_name"] = inp.table_name
    if inp.user_id:
        eq["user_id"] = inp.user_id

    try:
        rows = db.select(
            "content_audit_log",
            eq=eq or None,
            order=[("created_at", "desc")],
            limit=inp.limit,
        )
        scan = db.select("content_audit_log", columns=["table_name", "user_id"], limit=scan_limit)
    except BackendError as e:
        logger.error("Error fetching audit log: %s", e.message)
        return AuditLogOutput(filters=inp)

    user_ids = _unique([r["user_id"] for r in scan])
    return AuditLogOutput(
        entries=[AuditLogEntry.model_validate(r) for r in rows],
        tables=_unique([r["table_name"] for r in scan]),
        users=[AuditUserOption(id=uid, label=uid[:8] + "...") for uid in user_ids],
        filters=inp,
    )


def _safe(name: str, call: Callable[[], T], default: T) -> Callable[[], T]:
    def run() -> T:
        try:
            return call()
        except BackendError as e:
            logger.error("Error fetching %s: %s", name, e.message)
            return default

    return run


def run_get_dashboard_stats(
    *,
    db: DataPort,
    gate: AdminGatePort,
    recent_limit: int = RECENT_ACTIVITY_LIMIT,
) -> DashboardStats | None:
    """Counts and recent activity, fetched concurrently. None for non-admins."""
    if require_admin(gate) is None:
        return None

    results = fetch_all(
        {
            "campaigns": _safe(
                "active campaigns", lambda: db.count("campaigns", eq={"status": "active"}), 0
            ),
            "sections": _safe("content sections", lambda: db.count("content_sections"), 0),
            "testimonials": _safe(
                "active testimonials", lambda: db.count("testimonials", eq={"is_active": True}), 0
            ),
            "recent": _safe(
                "recent activity",
                lambda: db.select(
                    "content_audit_log", order=[("created_at", "desc")], limit=recent_limit
                ),
                [],
            ),
        }
    )
    return DashboardStats(
        active_campaigns=results["campaigns"],
        content_sections=results["sections"],
        active_testimonials=results["testimonials"],
        recent_activity=[AuditLogEntry.model_validate(r) for r in results["recent"]],
    )
