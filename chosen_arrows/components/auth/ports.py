"""
Auth component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from chosen_arrows.core.ports.db import PrivilegedDataPort
from chosen_arrows.core.ports.identity import IdentityPort
from chosen_arrows.core.ports.time import TimePort

from .models import AdminAuthOutput


class AdminGatePort(Protocol):
    """The "is this caller a recognised admin" predicate for one request."""

    def check(self) -> AdminAuthOutput: ...


__all__ = ["AdminGatePort", "IdentityPort", "PrivilegedDataPort", "TimePort"]
