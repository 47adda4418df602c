"""
Tests for public page assembly.
"""

from __future__ import annotations

import pytest

from chosen_arrows.components.campaigns import (
    CampaignInput,
    TranslationInput,
    run_create_campaign,
    run_create_campaign_update,
)
from chosen_arrows.components.content import seed_content
from chosen_arrows.components.pages import (
    PageContext,
    assemble_campaign_detail,
    assemble_campaigns,
    assemble_donate,
    assemble_home,
    assemble_mentorship,
)
from chosen_arrows.components.settings import seed_default_settings
from chosen_arrows.components import testimonials


@pytest.fixture
def ctx(rules) -> PageContext:
    return PageContext(
        seo=rules.seo,
        base_url=rules.project.base_url,
        site_name=rules.project.site_name,
        featured_limit=2,
    )


@pytest.fixture
def site(db, admin_gate, tick):
    seed_default_settings(db)
    seed_content(
        db,
        {
            "hero": {
                "en": {"title": "Every Child Has a Destiny"},
                "fr": {"title": "Chaque enfant"},
            },
            "navigation": {"en": {"home": "Home"}},
            "footer": {"en": {"tagline": "Guiding arrows"}},
            "mentorship": {"en": {"title": "Become a Mentor"}},
        },
    )
    ids = {}
    for slug, featured, status in (
        ("help-amara", True, "active"),
        ("help-brian", True, "active"),
        ("help-chloe", True, "active"),
        ("old-drive", True, "completed"),
    ):
        tick()
        out = run_create_campaign(
            CampaignInput(
                slug=slug,
                status=status,
                goal_amount=1000,
                featured=featured,
                translations=[
                    TranslationInput(language_code="en", title=slug.title(), story="Story")
                ],
            ),
            db=db,
            gate=admin_gate,
        )
        ids[slug] = out.campaign_id
    for name, active in (("Sarah Mwangi", True), ("Hidden", False)):
        testimonials.run_create_testimonial(
            testimonials.TestimonialInput(
                name=name, role="Donor", content="Inspiring", is_active=active
            ),
            db=db,
            gate=admin_gate,
        )
    return ids


def test_home_page(db, ctx, site) -> None:
    view = assemble_home("fr", db=db, ctx=ctx)

    assert view.hero == {"title": "Chaque enfant"}
    assert view.values is None
    assert view.layout.navigation == {"home": "Home"}
    assert view.layout.language == "fr"
    assert view.layout.languages["zh"] == "中文"
    assert view.layout.contact_info["address"] == "Nairobi, Kenya"
    assert view.hero_stats["activeMentors"] == 8
    assert [c.slug for c in view.featured_campaigns] == ["help-chloe", "help-brian"]
    assert [t.name for t in view.testimonials] == ["Sarah Mwangi"]
    assert view.seo.title == "Home | Chosen Arrows Foundation"


def test_home_page_on_empty_site(db, ctx) -> None:
    view = assemble_home("en", db=db, ctx=ctx)

    assert view.hero is None
    assert view.featured_campaigns == []
    assert view.hero_stats == {}
    assert view.layout.contact_info == {}


def test_home_page_survives_backend_errors(db, ctx, site) -> None:
    db.fail_on("select", "campaigns")
    db.fail_on("select", "testimonials")

    view = assemble_home("en", db=db, ctx=ctx)

    assert view.featured_campaigns == []
    assert view.testimonials == []
    assert view.hero == {"title": "Every Child Has a Destiny"}


def test_content_pages(db, ctx, site) -> None:
    mentorship = assemble_mentorship("zh", db=db, ctx=ctx)
    donate = assemble_donate("en", db=db, ctx=ctx)

    assert mentorship.sections == {"mentorship": {"title": "Become a Mentor"}}
    assert mentorship.seo.canonical_url == "https://chosenarrows.com/mentorship"
    assert set(donate.sections) == {"donate", "donate-form"}
    assert {c.slug for c in donate.campaigns} == {"help-amara", "help-brian", "help-chloe"}


def test_campaign_list(db, ctx, site) -> None:
    view = assemble_campaigns("en", db=db, ctx=ctx)

    assert [c.slug for c in view.campaigns] == ["help-chloe", "help-brian", "help-amara"]
    assert view.seo.title == "Active Campaigns | Chosen Arrows Foundation"


def test_campaign_detail(db, ctx, site, admin_gate) -> None:
    campaign_id = site["help-amara"]
    run_create_campaign_update(campaign_id, "2026-02-01", "Term started", db=db, gate=admin_gate)

    by_slug = assemble_campaign_detail("help-amara", "fr", db=db, ctx=ctx)

    assert by_slug.campaign.id == campaign_id
    assert by_slug.campaign.translation.is_fallback
    assert [u.content for u in by_slug.updates] == ["Term started"]
    assert by_slug.seo.canonical_url == "https://chosenarrows.com/campaigns/help-amara"
    assert assemble_campaign_detail(campaign_id, "en", db=db, ctx=ctx).campaign.slug == "help-amara"


def test_campaign_detail_missing(db, ctx, site) -> None:
    assert assemble_campaign_detail("no-such-child", "en", db=db, ctx=ctx) is None
