import os
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from chosen_arrows.core.ports.storage import StorageError, StoredObject

PUBLIC_PREFIX = "/storage/v1/object/public"


class FileSystemObjectStore:
    """
    Bucket store on the local filesystem.

    Objects live under ``<base_path>/<bucket>/<path>`` and are served at
    ``<public_base_url>/storage/v1/object/public/<bucket>/<path>``, the same URL
    shape the hosted object storage hands out.
    """

    def __init__(self, base_path: str, bucket: str = "images", public_base_url: str = ""):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.base_path = (Path(base_path) / bucket).resolve()
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, path: str) -> Path:
        # Prevent traversal
        target = (self.base_path / path).resolve()
        if target != self.base_path and self.base_path not in target.parents:
            raise StorageError(f"Path traversal attempt detected: {path}")
        return target

    def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        cache_control: str = "3600",
        upsert: bool = False,
    ) -> str:
        target = self._safe_path(path)
        if target.exists() and not upsert:
            raise StorageError("The resource already exists")
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)
        return str(target.relative_to(self.base_path).as_posix())

    def read(self, path: str) -> bytes:
        """Retrieve bytes by path. Raises FileNotFoundError."""
        target = self._safe_path(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        with open(target, "rb") as f:
            return f.read()

    def list(self, folder: str, *, limit: int = 100, offset: int = 0) -> list[StoredObject]:
        directory = self._safe_path(folder) if folder else self.base_path
        if not directory.is_dir():
            return []
        objects = []
        for entry in directory.iterdir():
            if not entry.is_file():
                continue
            stat = entry.stat()
            modified = datetime.fromtimestamp(stat.st_mtime, UTC)
            objects.append(
                StoredObject(
                    name=entry.name, size=stat.st_size, updated_at=modified, created_at=modified
                )
            )
        objects.sort(key=lambda o: (o.created_at, o.name), reverse=True)
        return objects[offset : offset + limit]

    def remove(self, paths: Sequence[str]) -> None:
        for path in paths:
            target = self._safe_path(path)
            if target.is_file():
                os.remove(target)

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}{PUBLIC_PREFIX}/{self.bucket}/{path.lstrip('/')}"
