from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm

from chosen_arrows.api.deps import (
    get_clock,
    get_current_admin,
    get_identity,
    get_privileged_db,
    get_rules,
)
from chosen_arrows.api.schemas import Token
from chosen_arrows.components.auth import ACCESS_DENIED, LoginInput, run_admin_login
from chosen_arrows.core.ports.db import PrivilegedDataPort
from chosen_arrows.core.ports.identity import IdentityPort
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.entities import AdminPrincipal
from chosen_arrows.rules.models import Rules

router = APIRouter()


def set_session_cookie(response: Response, token: str, rules: Rules) -> None:
    max_age = rules.auth.session_ttl_minutes * 60
    response.set_cookie(
        key=rules.auth.cookie_name,
        value=f"Bearer {token}",
        httponly=True,
        max_age=max_age,
        expires=max_age,
        samesite="lax",
        secure=False,  # Set to True for HTTPS prod
    )


@router.post("/login", response_model=Token)
def login_for_access_token(
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    identity: IdentityPort = Depends(get_identity),
    privileged: PrivilegedDataPort = Depends(get_privileged_db),
    clock: TimePort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> Token:
    """Authenticate an admin and return an access token."""
    result = run_admin_login(
        LoginInput(email=form_data.username, password=form_data.password),
        identity=identity,
        privileged=privileged,
        clock=clock,
        dashboard_path=rules.auth.dashboard_path,
    )
    if not result.success or not result.token:
        code = (
            status.HTTP_403_FORBIDDEN
            if result.error == ACCESS_DENIED
            else status.HTTP_401_UNAUTHORIZED
        )
        raise HTTPException(
            status_code=code,
            detail=result.error,
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_session_cookie(response, result.token, rules)
    return Token(access_token=result.token, token_type="bearer", redirect_to=result.redirect_to)


@router.post("/logout")
def logout(response: Response, rules: Rules = Depends(get_rules)) -> dict[str, str]:
    """Log out by clearing the session cookie."""
    response.delete_cookie(key=rules.auth.cookie_name)
    return {"status": "success"}


@router.get("/me")
def read_admin_me(
    current_admin: AdminPrincipal = Depends(get_current_admin),
) -> dict[str, Any]:
    """Current admin info."""
    return {
        "id": current_admin.id,
        "role": current_admin.role,
        "full_name": current_admin.full_name,
    }
