"""
Tests for the audit log viewer and dashboard stats.
"""

from __future__ import annotations

import pytest

from chosen_arrows.components.audit import (
    QueryAuditInput,
    run_get_dashboard_stats,
    run_query_audit_log,
)

USER_A = "a1b2c3d4-0000-4000-8000-000000000001"
USER_B = "e5f6a7b8-0000-4000-8000-000000000002"


@pytest.fixture
def audit_rows(db, tick):
    entries = [
        ("campaigns", "INSERT", USER_A),
        ("testimonials", "UPDATE", USER_B),
        ("campaigns", "DELETE", USER_B),
        ("site_settings", "UPDATE", None),
    ]
    for table, action, user in entries:
        tick()
        db.insert(
            "content_audit_log",
            [{"table_name": table, "record_id": "r-1", "action": action, "user_id": user}],
        )
    return entries


class TestQueryAuditLog:
    def test_newest_first_with_options(self, db, admin_gate, audit_rows) -> None:
        out = run_query_audit_log(QueryAuditInput(), db=db, gate=admin_gate)

        assert [e.action for e in out.entries] == ["UPDATE", "DELETE", "UPDATE", "INSERT"]
        assert out.tables == ["campaigns", "testimonials", "site_settings"]
        assert [(u.id, u.label) for u in out.users] == [
            (USER_A, "a1b2c3d4..."),
            (USER_B, "e5f6a7b8..."),
        ]

    def test_filters_combine(self, db, admin_gate, audit_rows) -> None:
        inp = QueryAuditInput(table_name="campaigns", user_id=USER_B)

        out = run_query_audit_log(inp, db=db, gate=admin_gate)

        assert [e.action for e in out.entries] == ["DELETE"]
        assert out.filters == inp
        assert len(out.tables) == 3

    def test_limit(self, db, admin_gate, audit_rows) -> None:
        out = run_query_audit_log(QueryAuditInput(limit=2), db=db, gate=admin_gate)

        assert len(out.entries) == 2

    def test_scan_limit_bounds_options(self, db, admin_gate, audit_rows) -> None:
        out = run_query_audit_log(QueryAuditInput(), db=db, gate=admin_gate, scan_limit=1)

        assert out.tables == ["campaigns"]

    def test_non_admin_gets_empty(self, db, non_admin_gate, audit_rows) -> None:
        out = run_query_audit_log(QueryAuditInput(), db=db, gate=non_admin_gate)

        assert out.entries == [] and out.tables == [] and out.users == []

    def test_backend_error_gets_empty(self, db, admin_gate, audit_rows) -> None:
        db.fail_on("select", "content_audit_log")

        assert run_query_audit_log(QueryAuditInput(), db=db, gate=admin_gate).entries == []


class TestDashboardStats:
    def test_counts(self, db, admin_gate, audit_rows) -> None:
        db.insert(
            "campaigns",
            [
                {"slug": "a", "status": "active"},
                {"slug": "b", "status": "active"},
                {"slug": "c", "status": "draft"},
            ],
        )
        db.insert(
            "testimonials",
            [
                {"name": "A", "role": "Donor", "content": "x"},
                {"name": "B", "role": "Donor", "content": "y", "is_active": False},
            ],
        )
        db.insert("content_sections", [{"section_key": "hero"}])

        stats = run_get_dashboard_stats(db=db, gate=admin_gate, recent_limit=3)

        assert stats.active_campaigns == 2
        assert stats.active_testimonials == 1
        assert stats.content_sections == 1
        assert len(stats.recent_activity) == 3
        assert stats.recent_activity[0].table_name == "site_settings"

    def test_failed_count_reads_zero(self, db, admin_gate) -> None:
        db.insert("content_sections", [{"section_key": "hero"}])
        db.fail_on("count", "campaigns")

        stats = run_get_dashboard_stats(db=db, gate=admin_gate)

        assert stats.active_campaigns == 0
        assert stats.content_sections == 1

    def test_non_admin(self, db, anon_gate) -> None:
        assert run_get_dashboard_stats(db=db, gate=anon_gate) is None
