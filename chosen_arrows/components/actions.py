"""
Shared result shape and side-effect helpers for admin mutations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chosen_arrows.core.ports.revalidation import RevalidatorPort

from .auth.models import UNAUTHORIZED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionOutput:
    """Tagged result of a mutation. Never raised, always returned."""

    success: bool
    error: str | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)


def unauthorized() -> ActionOutput:
    return ActionOutput(success=False, error=UNAUTHORIZED)


def failed(error: str, field_errors: dict[str, list[str]] | None = None) -> ActionOutput:
    return ActionOutput(success=False, error=error, field_errors=field_errors or {})


def revalidate(revalidator: RevalidatorPort | None, *paths: str) -> None:
    """Mark pages stale. Failures are logged, never raised."""
    if revalidator is None:
        return
    for path in paths:
        try:
            revalidator.revalidate_path(path)
        except Exception as e:
            logger.warning("Revalidation failed for %s: %s", path, e)
