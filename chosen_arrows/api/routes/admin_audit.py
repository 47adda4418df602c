"""
Admin Audit API.

Read-only view over the audit log plus the dashboard counters.
"""

from fastapi import APIRouter, Depends, Query

from chosen_arrows.api.deps import get_db, get_gate, get_rules
from chosen_arrows.components.audit import (
    AuditLogOutput,
    DashboardStats,
    QueryAuditInput,
    run_get_dashboard_stats,
    run_query_audit_log,
)
from chosen_arrows.components.auth import AdminGatePort
from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.rules.models import Rules

router = APIRouter()


@router.get("")
def query_audit_log(
    table: str | None = Query(default=None),
    user: str | None = Query(default=None),
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    rules: Rules = Depends(get_rules),
) -> AuditLogOutput:
    inp = QueryAuditInput(table_name=table, user_id=user, limit=rules.audit.page_size)
    return run_query_audit_log(inp, db=db, gate=gate, scan_limit=rules.audit.filter_scan_limit)


@router.get("/dashboard")
def dashboard_stats(
    db: DataPort = Depends(get_db),
    gate: AdminGatePort = Depends(get_gate),
    rules: Rules = Depends(get_rules),
) -> DashboardStats | None:
    return run_get_dashboard_stats(
        db=db, gate=gate, recent_limit=rules.audit.recent_activity_limit
    )
