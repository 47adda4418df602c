"""
Metadata component - page SEO rows and head tag builders.
"""

from ._impl import build_campaign_seo, build_canonical_url, build_page_seo, not_found_seo
from .component import (
    run_get_all_page_metadata,
    run_get_page_metadata,
    run_get_page_seo,
    run_update_page_metadata,
)
from .models import MetadataOutput, MetaTag, PageSeo, UpdateMetadataInput

__all__ = [
    # Component entry points
    "run_get_all_page_metadata",
    "run_get_page_metadata",
    "run_get_page_seo",
    "run_update_page_metadata",
    # Builders
    "build_campaign_seo",
    "build_canonical_url",
    "build_page_seo",
    "not_found_seo",
    # Models
    "MetadataOutput",
    "MetaTag",
    "PageSeo",
    "UpdateMetadataInput",
]
