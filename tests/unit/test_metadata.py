"""
Tests for page metadata and SEO builders.
"""

from __future__ import annotations

import pytest

from chosen_arrows.components.auth import UNAUTHORIZED
from chosen_arrows.components.metadata import (
    UpdateMetadataInput,
    build_campaign_seo,
    build_canonical_url,
    build_page_seo,
    not_found_seo,
    run_get_all_page_metadata,
    run_get_page_metadata,
    run_get_page_seo,
    run_update_page_metadata,
)
from chosen_arrows.domain.entities import CampaignTranslationView, CampaignView, PageMetadata

BASE_URL = "https://chosenarrows.com"
SITE = "Chosen Arrows Foundation"


def campaign(**overrides) -> CampaignView:
    translation = CampaignTranslationView(
        language_code="en",
        requested_language="en",
        title="Help Sarah Go to School",
        story="Sarah loves reading.\n\nShe dreams of being a doctor.",
        child_name="Sarah",
        child_age=12,
    )
    values = {
        "id": "c-1",
        "slug": "help-sarah",
        "status": "active",
        "goal_amount": 5000,
        "raised_amount": 1250,
        "category": "Education",
        "translation": translation,
        "primary_image": "/storage/v1/object/public/images/campaigns/sarah.jpg",
    }
    values.update(overrides)
    return CampaignView(**values)


def save(db, gate, page_path, language, **fields):
    return run_update_page_metadata(
        UpdateMetadataInput(page_path=page_path, language=language, fields=fields),
        db=db,
        gate=gate,
    )


@pytest.mark.parametrize(
    ("path", "expected"),
    [("/", f"{BASE_URL}/"), ("/about", f"{BASE_URL}/about"), ("about", f"{BASE_URL}/about")],
)
def test_canonical_url(path: str, expected: str) -> None:
    assert build_canonical_url(BASE_URL + "/", path) == expected


class TestBuildPageSeo:
    def test_defaults_when_no_rows(self, rules) -> None:
        seo = build_page_seo("/about", None, None, rules.seo, base_url=BASE_URL, site_name=SITE)

        assert seo.title == "About Us | Chosen Arrows Foundation"
        assert seo.og_title == seo.title
        assert seo.og_image == f"{BASE_URL}/og-image.jpg"
        assert "mission" in seo.keywords
        assert seo.canonical_url == f"{BASE_URL}/about"

    def test_unknown_page_uses_site_defaults(self, rules) -> None:
        seo = build_page_seo("/gallery", None, None, rules.seo, base_url=BASE_URL, site_name=SITE)

        assert seo.title == rules.seo.site.title

    def test_fields_resolve_independently(self, rules) -> None:
        row = PageMetadata(page_path="/about", language_code="fr", title="À propos")
        english = PageMetadata(
            page_path="/about",
            language_code="en",
            title="About",
            description="English description",
            og_image_url="https://cdn.example.org/about.jpg",
        )

        seo = build_page_seo(
            "/about", row, english, rules.seo, base_url=BASE_URL, site_name=SITE, language="fr"
        )

        assert seo.title == "À propos"
        assert seo.description == "English description"
        assert seo.og_image == "https://cdn.example.org/about.jpg"
        assert seo.language == "fr"

    def test_meta_tags(self, rules) -> None:
        seo = build_page_seo("/", None, None, rules.seo, base_url=BASE_URL, site_name=SITE)

        tags = {(t.name or t.property): t.content for t in seo.to_meta_tags()}

        assert tags["og:url"] == f"{BASE_URL}/"
        assert tags["twitter:card"] == "summary_large_image"
        assert tags["twitter:image"] == f"{BASE_URL}/og-image.jpg"
        assert tags["og:site_name"] == SITE


class TestCampaignSeo:
    def test_campaign_description(self, rules) -> None:
        seo = build_campaign_seo(campaign(), rules.seo, base_url=BASE_URL, site_name=SITE)

        assert seo.title == "Help Sarah Go to School | Chosen Arrows Foundation"
        assert seo.description == (
            "Sarah, 12 - Sarah loves reading.... Help us reach our goal of $5,000. 25% funded."
        )
        assert seo.canonical_url == f"{BASE_URL}/campaigns/help-sarah"
        assert seo.og_image == f"{BASE_URL}/storage/v1/object/public/images/campaigns/sarah.jpg"
        assert seo.keywords == ["education", "campaign", "donate", "fundraising", "sarah"]

    def test_full_story_preferred_and_truncated(self, rules) -> None:
        view = campaign()
        view.translation.full_story = "x" * 400

        seo = build_campaign_seo(view, rules.seo, base_url=BASE_URL, site_name=SITE)

        assert "x" * 150 + "..." in seo.description
        assert "x" * 151 not in seo.description

    def test_not_found(self, rules) -> None:
        seo = not_found_seo(
            rules.seo, base_url=BASE_URL, site_name=SITE, page_path="/campaigns/nope"
        )

        assert seo.robots == "noindex"
        assert seo.title == "Campaign Not Found | Chosen Arrows Foundation"


class TestPageMetadataStore:
    def test_upsert_and_fallback(self, db, admin_gate, revalidator) -> None:
        out = run_update_page_metadata(
            UpdateMetadataInput(
                page_path="/donate",
                language="en",
                fields={"title": "Give", "keywords": ["give"], "bogus": "dropped"},
            ),
            db=db,
            gate=admin_gate,
            revalidator=revalidator,
        )

        assert out.success
        assert revalidator.paths == ["/donate", "/admin/settings/metadata"]
        row = run_get_page_metadata("/donate", "zh", db=db)
        assert row.language_code == "en"
        assert row.keywords == ["give"]

        save(db, admin_gate, "/donate", "en", title="Give today")
        assert [m.title for m in run_get_all_page_metadata(db=db)] == ["Give today"]

    @pytest.mark.parametrize(
        ("page_path", "language", "fields", "field"),
        [
            ("donate", "en", {}, "page_path"),
            ("/donate", "de", {}, "language"),
            ("/donate", "en", {"keywords": "give, donate"}, "keywords"),
        ],
    )
    def test_validation(self, db, admin_gate, page_path, language, fields, field) -> None:
        out = save(db, admin_gate, page_path, language, **fields)

        assert out.error == "Invalid page metadata"
        assert field in out.field_errors

    def test_requires_admin(self, db, anon_gate) -> None:
        assert save(db, anon_gate, "/", "en", title="x").error == UNAUTHORIZED

    def test_page_seo_merges_stored_rows(self, db, admin_gate, rules) -> None:
        save(db, admin_gate, "/about", "en", title="About", description="Who we are")
        save(db, admin_gate, "/about", "fr", title="À propos")

        seo = run_get_page_seo(
            "/about", "fr", db=db, seo=rules.seo, base_url=BASE_URL, site_name=SITE
        )

        assert seo.title == "À propos"
        assert seo.description == "Who we are"
