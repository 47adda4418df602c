from typing import Protocol


class RevalidatorPort(Protocol):
    """Marks cached pages stale after a successful write."""

    def revalidate_path(self, path: str) -> None: ...
