"""
Object storage port.

Mirrors the hosted backend's bucket API: upload, read, list, remove and public URLs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class StorageError(Exception):
    """A storage operation failed."""


@dataclass(frozen=True)
class StoredObject:
    """One object in a bucket listing."""

    name: str
    size: int
    updated_at: datetime | None = None
    created_at: datetime | None = None


class ObjectStoragePort(Protocol):
    def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        cache_control: str = "3600",
        upsert: bool = False,
    ) -> str:
        """Store bytes at path. Raises StorageError if the path exists and upsert is False."""
        ...

    def read(self, path: str) -> bytes:
        """Bytes stored at path. Raises FileNotFoundError."""
        ...

    def list(self, folder: str, *, limit: int = 100, offset: int = 0) -> list[StoredObject]:
        """Objects directly under folder, newest first."""
        ...

    def remove(self, paths: Sequence[str]) -> None:
        """Remove objects. Missing paths are ignored."""
        ...

    def public_url(self, path: str) -> str:
        """Public URL for an object path."""
        ...
