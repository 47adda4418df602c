"""
Tests for site settings.
"""

from __future__ import annotations

import pytest

from chosen_arrows.components.auth import UNAUTHORIZED
from chosen_arrows.components.settings import (
    DEFAULT_SETTINGS,
    SettingInput,
    run_get_all_settings,
    run_get_setting,
    run_update_multiple_settings,
    run_update_setting,
    seed_default_settings,
    validate_setting,
    validate_url,
)


@pytest.mark.parametrize(
    ("value", "ok"),
    [
        ("https://facebook.com/x", True),
        ("http://example.org", True),
        ("", True),
        ("ftp://example.org", False),
        ("javascript:alert(1)", False),
        ("facebook.com/x", False),
    ],
)
def test_validate_url(value: str, ok: bool) -> None:
    assert validate_url(value) is ok


class TestValidateSetting:
    def test_contact_email_required(self) -> None:
        errors = validate_setting("contact_info", {"phone": "+254"})

        assert [e.message for e in errors] == ["Field 'contact_info.email' is required"]

    def test_contact_email_format(self) -> None:
        errors = validate_setting("contact_info", {"email": "not-an-email"})

        assert errors[0].code == "invalid_email"

    def test_social_url(self) -> None:
        errors = validate_setting("social_links", {"facebook": "ftp://fb"})

        assert errors[0].message == "Invalid URL format for 'facebook': must be http or https URL"

    def test_hero_stats(self) -> None:
        errors = validate_setting("hero_stats", {"childrenSupported": -3, "activeMentors": "many"})

        assert {e.field: e.code for e in errors} == {
            "hero_stats.childrenSupported": "min_value",
            "hero_stats.activeMentors": "invalid_type",
        }
        assert errors[0].message == "Field 'hero_stats.childrenSupported' cannot be negative"

    def test_unknown_key_accepts_any_object(self) -> None:
        assert validate_setting("banner", {"anything": [1, 2]}) == []
        assert validate_setting("banner", ["not", "object"])[0].code == "invalid_type"  # type: ignore[arg-type]

    def test_max_length(self) -> None:
        errors = validate_setting("contact_info", {"email": "a@b.co", "phone": "9" * 51})

        assert errors[0].code == "max_length"


class TestUpdateSettings:
    def test_batch_upsert(self, db, admin_gate, revalidator) -> None:
        out = run_update_multiple_settings(
            [
                SettingInput(key="contact_info", value={"email": "hello@chosenarrows.org"}),
                SettingInput(
                    key="hero_stats", value={"childrenSupported": 50}, description="Stats"
                ),
            ],
            db=db,
            gate=admin_gate,
            revalidator=revalidator,
        )

        assert out.success
        assert out.keys == ["contact_info", "hero_stats"]
        assert run_get_setting("contact_info", db=db) == {"email": "hello@chosenarrows.org"}
        assert revalidator.paths == ["/", "/admin/settings"]

    def test_update_replaces_value(self, db, admin_gate) -> None:
        run_update_setting(
            SettingInput(key="hero_stats", value={"fundsRaised": 10}), db=db, gate=admin_gate
        )
        run_update_setting(
            SettingInput(key="hero_stats", value={"fundsRaised": 20}), db=db, gate=admin_gate
        )

        settings = run_get_all_settings(db=db)

        assert len(settings) == 1
        assert settings[0].setting_value == {"fundsRaised": 20}
        assert db.select("site_settings")[0]["updated_by"] == "admin-1"

    def test_one_invalid_item_rejects_batch(self, db, admin_gate) -> None:
        out = run_update_multiple_settings(
            [
                SettingInput(key="hero_stats", value={"fundsRaised": 10}),
                SettingInput(key="social_links", value={"twitter": "twitter.com/x"}),
            ],
            db=db,
            gate=admin_gate,
        )

        assert out.error == "Invalid settings"
        assert "social_links.twitter" in out.field_errors
        assert db.count("site_settings") == 0

    def test_blank_key(self, db, admin_gate) -> None:
        out = run_update_setting(SettingInput(key=" ", value={}), db=db, gate=admin_gate)

        assert out.field_errors == {"setting_key": ["Setting key is required"]}

    def test_requires_admin(self, db, anon_gate) -> None:
        out = run_update_setting(SettingInput(key="banner", value={}), db=db, gate=anon_gate)

        assert out.error == UNAUTHORIZED

    def test_missing_setting_and_backend_error(self, db) -> None:
        assert run_get_setting("contact_info", db=db) is None
        db.fail_on("select", "site_settings")
        assert run_get_all_settings(db=db) == []


def test_seed_default_settings_is_idempotent(db) -> None:
    assert seed_default_settings(db) == list(DEFAULT_SETTINGS)
    seed_default_settings(db)

    assert db.count("site_settings") == 3
    assert run_get_setting("contact_info", db=db)["address"] == "Nairobi, Kenya"
