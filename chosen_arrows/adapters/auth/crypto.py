"""
Local identity provider.

Email/password identities live in ``auth_users``. Passwords are argon2
hashes (passlib) and sessions are HS256 JWTs (python-jose) whose ``sub``
claim is the identity id.
"""

import logging
import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt
from passlib.context import CryptContext

from chosen_arrows.core.ports.db import DataPort
from chosen_arrows.domain.entities import Identity

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_SECRET_KEY = "dev-secret-unsafe"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        result: bool = pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a hash this context recognises
        return False
    return result


def secret_key_from_env() -> str:
    return os.environ.get("ARROWS_SECRET_KEY", DEFAULT_SECRET_KEY)


class LocalIdentityProvider:
    def __init__(
        self,
        db: DataPort,
        ttl_minutes: int = 60 * 24,
        secret_key: str | None = None,
    ):
        self.db = db
        self.ttl_minutes = ttl_minutes
        self.secret_key = secret_key or secret_key_from_env()

    def register(self, email: str, password: str) -> Identity:
        row = self.db.insert(
            "auth_users",
            [{"email": email.strip().lower(), "password_hash": hash_password(password)}],
        )[0]
        return Identity(id=row["id"], email=row["email"])

    def sign_in(self, email: str, password: str) -> Identity | None:
        rows = self.db.select("auth_users", eq={"email": email.strip().lower()}, limit=1)
        if not rows or not verify_password(password, rows[0]["password_hash"]):
            return None
        return Identity(id=rows[0]["id"], email=rows[0]["email"])

    def resolve(self, token: str | None) -> Identity | None:
        if not token:
            return None
        claims = self.decode_token(token)
        if not claims or not claims.get("sub"):
            return None
        rows = self.db.select(
            "auth_users", columns=["id", "email"], eq={"id": claims["sub"]}, limit=1
        )
        if not rows:
            logger.debug("Token subject %s no longer exists", claims["sub"])
            return None
        return Identity(id=rows[0]["id"], email=rows[0]["email"])

    def issue_token(self, identity: Identity) -> str:
        return self.encode_token({"sub": identity.id, "email": identity.email})

    def encode_token(self, claims: dict[str, Any]) -> str:
        """Sign ``claims`` with an expiry ``ttl_minutes`` from now."""
        expire = datetime.now(UTC) + timedelta(minutes=self.ttl_minutes)
        encoded: str = jwt.encode({**claims, "exp": expire}, self.secret_key, algorithm=ALGORITHM)
        return encoded

    def decode_token(self, token: str) -> dict[str, Any] | None:
        """Verified claims, or None for a bad signature, an expired token or garbage."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except jwt.JWTError:
            return None
        return cast(dict[str, Any], payload)
