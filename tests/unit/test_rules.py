"""
Tests for the rules loader and startup validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from chosen_arrows.app_shell.config import validate_ops_rules
from chosen_arrows.rules.loader import load_rules


def test_shipped_rules_load(rules) -> None:
    assert rules.project.site_name == "Chosen Arrows Foundation"
    assert rules.i18n.supported_languages == ["en", "fr", "zh"]
    assert rules.uploads.max_upload_bytes == 5 * 1024 * 1024
    assert rules.donations.amount.min == 1
    assert "/about" in rules.seo.pages
    assert rules.auth.cookie_name == "access_token"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "rules.yaml")


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("project: [unclosed", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_schema_violation(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("project:\n  slug: x\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


def test_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValueError, match="does not hold a mapping"):
        load_rules(path)


def test_fenced_rules(tmp_path: Path, rules) -> None:
    source = (Path(__file__).resolve().parents[2] / "rules.yaml").read_text(encoding="utf-8")
    path = tmp_path / "rules.md"
    path.write_text(f"# Site rules\n\n```yaml\n{source}\n```\n", encoding="utf-8")

    assert load_rules(path) == rules


def test_required_env(monkeypatch, rules) -> None:
    rules.ops.required_env = ["ARROWS_SECRET_KEY"]
    monkeypatch.delenv("ARROWS_SECRET_KEY", raising=False)

    with pytest.raises(RuntimeError, match="ARROWS_SECRET_KEY"):
        validate_ops_rules(rules)

    monkeypatch.setenv("ARROWS_SECRET_KEY", "x")
    validate_ops_rules(rules)


def test_default_language_must_be_supported(rules) -> None:
    rules.i18n.default_language = "de"

    with pytest.raises(RuntimeError, match="not in supported_languages"):
        validate_ops_rules(rules)
