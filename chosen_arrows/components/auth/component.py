"""
Auth component - admin gate and admin login.

The gate resolves the request's identity through the identity port, then
looks the identity up in the admin-role table through the privileged port.
Every admin-only read and write consults it before touching the backend.
"""

from __future__ import annotations

import logging

from chosen_arrows.core.ports.db import BackendError
from chosen_arrows.domain.entities import AdminPrincipal

from .models import (
    ACCESS_DENIED,
    INVALID_CREDENTIALS,
    NOT_ADMIN,
    NOT_AUTHENTICATED,
    AdminAuthOutput,
    LoginInput,
    LoginOutput,
)
from .ports import AdminGatePort, IdentityPort, PrivilegedDataPort, TimePort

logger = logging.getLogger(__name__)


def _lookup_admin(privileged: PrivilegedDataPort, user_id: str) -> AdminPrincipal | None:
    try:
        row = privileged.fetch_admin_user(user_id)
    except BackendError as e:
        logger.error("Error fetching admin user %s: %s", user_id, e.message)
        return None
    if not row:
        return None
    return AdminPrincipal(
        id=user_id, role=row.get("role") or "admin", full_name=row.get("full_name")
    )


class AdminGate:
    """Admin gate bound to one request's session token."""

    def __init__(
        self,
        identity: IdentityPort,
        privileged: PrivilegedDataPort,
        token: str | None,
    ) -> None:
        self.identity = identity
        self.privileged = privileged
        self.token = token
        self._result: AdminAuthOutput | None = None

    def check(self) -> AdminAuthOutput:
        if self._result is None:
            self._result = self._check()
        return self._result

    def _check(self) -> AdminAuthOutput:
        try:
            user = self.identity.resolve(self.token)
        except BackendError as e:
            logger.error("Error resolving session: %s", e.message)
            user = None
        if user is None:
            return AdminAuthOutput(error=NOT_AUTHENTICATED)

        admin = _lookup_admin(self.privileged, user.id)
        if admin is None:
            return AdminAuthOutput(error=NOT_ADMIN)
        return AdminAuthOutput(user=admin)


def run_check_admin_auth(*, gate: AdminGatePort) -> AdminAuthOutput:
    return gate.check()


def require_admin(gate: AdminGatePort) -> AdminPrincipal | None:
    """The acting admin, or None when the gate refuses."""
    return gate.check().user


def run_admin_login(
    inp: LoginInput,
    *,
    identity: IdentityPort,
    privileged: PrivilegedDataPort,
    clock: TimePort,
    dashboard_path: str = "/admin/dashboard",
) -> LoginOutput:
    """
    Sign in an admin.

    Identities without an admin-role row are refused and no token is issued.
    """
    try:
        user = identity.sign_in(inp.email, inp.password)
    except BackendError as e:
        return LoginOutput(success=False, error=e.message or INVALID_CREDENTIALS)
    if user is None:
        return LoginOutput(success=False, error=INVALID_CREDENTIALS)

    admin = _lookup_admin(privileged, user.id)
    if admin is None:
        logger.info("Refused admin login for non-admin identity %s", user.id)
        return LoginOutput(success=False, error=ACCESS_DENIED)

    try:
        privileged.record_login(user.id, clock.now_utc())
    except BackendError as e:
        logger.warning("Could not record last_login for %s: %s", user.id, e.message)

    logger.info("Admin %s signed in", user.id)
    return LoginOutput(
        success=True,
        token=identity.issue_token(user),
        redirect_to=dashboard_path,
        user=admin,
    )
