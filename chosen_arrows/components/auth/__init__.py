"""
Auth component - admin gate and login.
"""

from .component import (
    AdminGate,
    require_admin,
    run_admin_login,
    run_check_admin_auth,
)
from .models import (
    ACCESS_DENIED,
    INVALID_CREDENTIALS,
    NOT_ADMIN,
    NOT_AUTHENTICATED,
    UNAUTHORIZED,
    AdminAuthOutput,
    LoginInput,
    LoginOutput,
)
from .ports import AdminGatePort

__all__ = [
    # Component entry points
    "AdminGate",
    "require_admin",
    "run_admin_login",
    "run_check_admin_auth",
    # Models
    "AdminAuthOutput",
    "LoginInput",
    "LoginOutput",
    # Ports
    "AdminGatePort",
    # Messages
    "ACCESS_DENIED",
    "INVALID_CREDENTIALS",
    "NOT_ADMIN",
    "NOT_AUTHENTICATED",
    "UNAUTHORIZED",
]
