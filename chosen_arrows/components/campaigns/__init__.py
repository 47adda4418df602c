"""
Campaigns component - campaign queries, editing, images and timeline.
"""

from ._impl import merge_translation, primary_image, status_filter
from .component import (
    run_add_campaign_image,
    run_copy_translation,
    run_create_campaign,
    run_create_campaign_update,
    run_delete_campaign,
    run_delete_campaign_image,
    run_delete_campaign_update,
    run_get_campaign,
    run_get_campaign_updates,
    run_get_campaigns,
    run_update_campaign,
    run_update_campaign_image,
    run_update_campaign_update,
    storage_path_from_url,
)
from .models import (
    AddImageInput,
    CampaignImageOutput,
    CampaignInput,
    CampaignListInput,
    CampaignOutput,
    CampaignUpdateOutput,
    TranslationInput,
    UpdateCampaignInput,
)

__all__ = [
    # Component entry points
    "run_add_campaign_image",
    "run_copy_translation",
    "run_create_campaign",
    "run_create_campaign_update",
    "run_delete_campaign",
    "run_delete_campaign_image",
    "run_delete_campaign_update",
    "run_get_campaign",
    "run_get_campaign_updates",
    "run_get_campaigns",
    "run_update_campaign",
    "run_update_campaign_image",
    "run_update_campaign_update",
    # Helpers
    "merge_translation",
    "primary_image",
    "status_filter",
    "storage_path_from_url",
    # Models
    "AddImageInput",
    "CampaignImageOutput",
    "CampaignInput",
    "CampaignListInput",
    "CampaignOutput",
    "CampaignUpdateOutput",
    "TranslationInput",
    "UpdateCampaignInput",
]
