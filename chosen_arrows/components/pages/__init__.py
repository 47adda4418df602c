"""
Pages component - public page view assembly.
"""

from .component import (
    CONTENT_PAGES,
    assemble_about,
    assemble_campaign_detail,
    assemble_campaigns,
    assemble_contact,
    assemble_content_page,
    assemble_donate,
    assemble_home,
    assemble_mentorship,
)
from .models import (
    CampaignDetailView,
    CampaignListView,
    ContentPageView,
    HomeView,
    Layout,
    PageContext,
)

__all__ = [
    "CONTENT_PAGES",
    "assemble_about",
    "assemble_campaign_detail",
    "assemble_campaigns",
    "assemble_contact",
    "assemble_content_page",
    "assemble_donate",
    "assemble_home",
    "assemble_mentorship",
    "CampaignDetailView",
    "CampaignListView",
    "ContentPageView",
    "HomeView",
    "Layout",
    "PageContext",
]
