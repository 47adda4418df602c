"""
Auth component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass

from chosen_arrows.domain.entities import AdminPrincipal

NOT_AUTHENTICATED = "Not authenticated"
NOT_ADMIN = "Not an admin user"
UNAUTHORIZED = "Unauthorized"
INVALID_CREDENTIALS = "Invalid email or password"
ACCESS_DENIED = "Access denied. You are not an admin user."


@dataclass(frozen=True)
class AdminAuthOutput:
    """Result of the admin gate. Exactly one of user/error is set."""

    user: AdminPrincipal | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class LoginOutput:
    success: bool
    error: str | None = None
    token: str | None = None
    redirect_to: str | None = None
    user: AdminPrincipal | None = None
