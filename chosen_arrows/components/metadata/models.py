"""
Metadata component models.

``PageSeo`` is the resolved ``<head>`` content for one rendered page; it is
built from the stored PageMetadata row, the English row and the configured
defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chosen_arrows.components.actions import ActionOutput

METADATA_FIELDS = (
    "title",
    "description",
    "keywords",
    "og_title",
    "og_description",
    "og_image_url",
    "og_type",
    "twitter_card",
    "twitter_title",
    "twitter_description",
    "twitter_image_url",
)


@dataclass
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None  # For OG tags
    content: str = ""


@dataclass
class PageSeo:
    title: str
    description: str
    canonical_url: str
    keywords: list[str] = field(default_factory=list)
    language: str = "en"
    robots: str = "index, follow"

    # OpenGraph tags
    og_title: str = ""
    og_description: str = ""
    og_type: str = "website"
    og_image: str = ""
    og_image_alt: str = ""
    og_site_name: str = ""

    # Twitter Card tags
    twitter_card: str = "summary_large_image"
    twitter_title: str = ""
    twitter_description: str = ""
    twitter_image: str = ""

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to list of MetaTag objects for rendering."""
        tags = [MetaTag(name="description", content=self.description)]
        if self.keywords:
            tags.append(MetaTag(name="keywords", content=", ".join(self.keywords)))
        tags.extend(
            [
                MetaTag(name="robots", content=self.robots),
                MetaTag(property="og:title", content=self.og_title or self.title),
                MetaTag(property="og:description", content=self.og_description or self.description),
                MetaTag(property="og:type", content=self.og_type),
                MetaTag(property="og:url", content=self.canonical_url),
                MetaTag(property="og:locale", content=self.language),
            ]
        )

        if self.og_image:
            tags.append(MetaTag(property="og:image", content=self.og_image))
            if self.og_image_alt:
                tags.append(MetaTag(property="og:image:alt", content=self.og_image_alt))

        if self.og_site_name:
            tags.append(MetaTag(property="og:site_name", content=self.og_site_name))

        # Twitter Card
        tags.extend(
            [
                MetaTag(name="twitter:card", content=self.twitter_card),
                MetaTag(
                    name="twitter:title", content=self.twitter_title or self.og_title or self.title
                ),
                MetaTag(
                    name="twitter:description",
                    content=self.twitter_description or self.og_description or self.description,
                ),
            ]
        )

        if self.twitter_image or self.og_image:
            tags.append(MetaTag(name="twitter:image", content=self.twitter_image or self.og_image))

        return tags


@dataclass(frozen=True)
class UpdateMetadataInput:
    page_path: str
    language: str
    fields: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class MetadataOutput(ActionOutput):
    page_path: str | None = None
