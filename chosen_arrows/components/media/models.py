"""
Media component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from chosen_arrows.components.actions import ActionOutput


@dataclass(frozen=True)
class UploadImageInput:
    data: bytes
    filename: str
    content_type: str
    folder: str
    file_name: str | None = None


@dataclass(frozen=True)
class UploadConfig:
    allowlist_mime_types: tuple[str, ...] = ("image/jpeg", "image/jpg", "image/png", "image/webp")
    max_upload_bytes: int = 5 * 1024 * 1024  # 5MB
    list_limit: int = 100
    cache_control_seconds: int = 3600


@dataclass(frozen=True)
class UploadImageOutput(ActionOutput):
    url: str | None = None
    path: str | None = None
