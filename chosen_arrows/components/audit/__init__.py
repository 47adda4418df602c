"""
Audit component - audit log viewer and dashboard.
"""

from .component import run_get_dashboard_stats, run_query_audit_log
from .models import AuditLogOutput, AuditUserOption, DashboardStats, QueryAuditInput

__all__ = [
    "run_get_dashboard_stats",
    "run_query_audit_log",
    "AuditLogOutput",
    "AuditUserOption",
    "DashboardStats",
    "QueryAuditInput",
]
