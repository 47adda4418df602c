"""
Audit component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chosen_arrows.domain.entities import AuditLogEntry


@dataclass(frozen=True)
class QueryAuditInput:
    table_name: str | None = None
    user_id: str | None = None
    limit: int = 50


@dataclass(frozen=True)
class AuditUserOption:
    """Filter option for an acting user. Only the id is known here."""

    id: str
    label: str


@dataclass(frozen=True)
class AuditLogOutput:
    entries: list[AuditLogEntry] = field(default_factory=list)
    tables: list[str] = field(default_factory=list)
    users: list[AuditUserOption] = field(default_factory=list)
    filters: QueryAuditInput = field(default_factory=QueryAuditInput)


@dataclass(frozen=True)
class DashboardStats:
    active_campaigns: int = 0
    content_sections: int = 0
    active_testimonials: int = 0
    recent_activity: list[AuditLogEntry] = field(default_factory=list)
