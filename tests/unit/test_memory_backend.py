"""
Tests for the in-memory backend's constraint handling.
"""

from __future__ import annotations

import pytest

from chosen_arrows.core.ports.db import BackendError


def test_insert_fills_id_defaults_and_timestamps(db, clock) -> None:
    row = db.insert("campaigns", [{"slug": "help-amara"}])[0]

    assert row["id"]
    assert row["status"] == "draft"
    assert row["featured"] is False
    assert row["created_at"] == clock.now_utc().isoformat()


def test_unique_violation(db) -> None:
    db.insert("campaigns", [{"slug": "help-amara"}])

    with pytest.raises(BackendError) as exc:
        db.insert("campaigns", [{"slug": "help-amara"}])
    assert exc.value.code == "23505"


def test_foreign_key_violation(db) -> None:
    with pytest.raises(BackendError) as exc:
        db.insert("campaign_images", [{"campaign_id": "missing", "image_url": "x"}])
    assert exc.value.code == "23503"


def test_unknown_table_and_column(db) -> None:
    with pytest.raises(BackendError) as exc:
        db.select("donations")
    assert exc.value.code == "42P01"

    with pytest.raises(BackendError) as exc:
        db.select("campaigns", eq={"title": "x"})
    assert exc.value.code == "42703"


def test_update_refreshes_updated_at(db, clock, tick) -> None:
    row = db.insert("campaigns", [{"slug": "help-amara"}])[0]
    tick(60)

    updated = db.update("campaigns", {"featured": True}, eq={"id": row["id"]})[0]

    assert updated["updated_at"] == clock.now_utc().isoformat()
    assert updated["created_at"] == row["created_at"]


def test_upsert_keeps_id(db) -> None:
    first = db.upsert(
        "site_settings",
        [{"setting_key": "a", "setting_value": {"v": 1}}],
        on_conflict=["setting_key"],
    )
    second = db.upsert(
        "site_settings",
        [{"setting_key": "a", "setting_value": {"v": 2}}],
        on_conflict=["setting_key"],
    )

    assert first[0]["id"] == second[0]["id"]
    assert db.select("site_settings")[0]["setting_value"] == {"v": 2}


def test_transaction_rolls_back(db) -> None:
    with pytest.raises(BackendError):
        with db.transaction():
            db.insert("campaigns", [{"slug": "help-amara"}])
            db.insert("campaigns", [{"slug": "help-amara"}])

    assert db.count("campaigns") == 0


def test_selected_rows_are_copies(db) -> None:
    db.insert("site_settings", [{"setting_key": "a", "setting_value": {"v": 1}}])

    db.select("site_settings")[0]["setting_value"]["v"] = 99

    assert db.select("site_settings")[0]["setting_value"] == {"v": 1}


def test_order_nulls(db, tick) -> None:
    db.insert("campaigns", [{"slug": "a", "days_left": 5}])
    db.insert("campaigns", [{"slug": "b"}])
    db.insert("campaigns", [{"slug": "c", "days_left": 1}])

    asc = [r["slug"] for r in db.select("campaigns", order=[("days_left", "asc")])]
    desc = [r["slug"] for r in db.select("campaigns", order=[("days_left", "desc")])]

    assert asc == ["c", "a", "b"]
    assert desc == ["b", "a", "c"]
