import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import OAuth2PasswordBearer

from chosen_arrows.adapters.auth.crypto import LocalIdentityProvider
from chosen_arrows.adapters.clock import SystemClock
from chosen_arrows.adapters.fs.filestore import FileSystemObjectStore
from chosen_arrows.adapters.page_cache import PageCache
from chosen_arrows.adapters.payment_stub import SimulatedPaymentProcessor
from chosen_arrows.adapters.sqlite.tables import SQLitePrivilegedTables, SQLiteTables
from chosen_arrows.components.auth import AdminGate, AdminGatePort
from chosen_arrows.components.donations import DonationLimits
from chosen_arrows.components.i18n import detect_language
from chosen_arrows.components.media import UploadConfig
from chosen_arrows.components.pages import PageContext
from chosen_arrows.core.ports.db import DataPort, PrivilegedDataPort
from chosen_arrows.core.ports.identity import IdentityPort
from chosen_arrows.core.ports.revalidation import RevalidatorPort
from chosen_arrows.core.ports.storage import ObjectStoragePort
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.entities import AdminPrincipal
from chosen_arrows.rules.loader import load_rules
from chosen_arrows.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ARROWS_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "arrows.db")
        self.storage_dir = self.data_dir / "storage"
        self.rules_path = Path(
            os.environ.get("ARROWS_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.public_base_url = os.environ.get("ARROWS_PUBLIC_BASE_URL", "")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Backend ---
_clock = SystemClock()


def get_clock() -> TimePort:
    return _clock


def get_db(settings: Settings = Depends(get_settings)) -> DataPort:
    return SQLiteTables(settings.db_path, clock=_clock)


def get_privileged_db(settings: Settings = Depends(get_settings)) -> PrivilegedDataPort:
    return SQLitePrivilegedTables(settings.db_path)


def get_storage(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> ObjectStoragePort:
    return FileSystemObjectStore(
        base_path=str(settings.storage_dir),
        bucket=rules.uploads.bucket,
        public_base_url=settings.public_base_url,
    )


def get_identity(
    db: DataPort = Depends(get_db),
    rules: Rules = Depends(get_rules),
) -> IdentityPort:
    return LocalIdentityProvider(db, ttl_minutes=rules.auth.session_ttl_minutes)


# Page cache singleton; it is also the revalidator admin writes report to
_page_cache = PageCache()


def get_page_cache() -> PageCache:
    return _page_cache


def get_revalidator() -> RevalidatorPort:
    return _page_cache


def get_payments(rules: Rules = Depends(get_rules)) -> SimulatedPaymentProcessor:
    return SimulatedPaymentProcessor(
        delay_seconds=rules.donations.processing_delay_seconds,
        failure_rate=rules.donations.failure_rate,
    )


# --- Component configuration ---
def get_upload_config(rules: Rules = Depends(get_rules)) -> UploadConfig:
    return UploadConfig(
        allowlist_mime_types=tuple(rules.uploads.allowlist_mime_types),
        max_upload_bytes=rules.uploads.max_upload_bytes,
        list_limit=rules.uploads.list_limit,
        cache_control_seconds=rules.uploads.cache_control_seconds,
    )


def get_donation_limits(rules: Rules = Depends(get_rules)) -> DonationLimits:
    donations = rules.donations
    return DonationLimits(
        min_amount=donations.amount.min,
        max_amount=donations.amount.max,
        frequencies=tuple(donations.frequencies),
        name_min_length=donations.name_min_length,
        name_max_length=donations.name_max_length,
        email_max_length=donations.email_max_length,
    )


def get_page_context(rules: Rules = Depends(get_rules)) -> PageContext:
    return PageContext(
        seo=rules.seo,
        base_url=rules.project.base_url,
        site_name=rules.project.site_name,
        featured_limit=rules.campaigns.home_featured_limit,
        public_status=rules.campaigns.public_default_status,
        languages=tuple(rules.i18n.supported_languages),
        language_names=rules.i18n.language_names,
    )


def get_language(
    request: Request,
    lang: str | None = Query(default=None),
    rules: Rules = Depends(get_rules),
) -> str:
    """Request language: ``?lang=``, then the language cookie, then Accept-Language."""
    return detect_language(
        query_language=lang,
        cookie_value=request.cookies.get(rules.i18n.language_cookie),
        accept_language=request.headers.get("accept-language"),
        supported=rules.i18n.supported_languages,
        default=rules.i18n.default_language,
    )


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_session_token(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
    rules: Rules = Depends(get_rules),
) -> str | None:
    # Cookie first (HttpOnly), then the Authorization header
    cookie_token = request.cookies.get(rules.auth.cookie_name)
    if cookie_token and cookie_token.startswith("Bearer "):
        return cookie_token.split(" ", 1)[1]
    return token


def get_gate(
    token: str | None = Depends(get_session_token),
    identity: IdentityPort = Depends(get_identity),
    privileged: PrivilegedDataPort = Depends(get_privileged_db),
) -> AdminGatePort:
    return AdminGate(identity, privileged, token)


def get_current_admin(gate: AdminGatePort = Depends(get_gate)) -> AdminPrincipal:
    result = gate.check()
    if result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error or "Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return result.user


def get_languages(rules: Rules = Depends(get_rules)) -> tuple[str, ...]:
    return tuple(rules.i18n.supported_languages)


def get_section_keys(rules: Rules = Depends(get_rules)) -> tuple[str, ...]:
    return tuple(rules.content.section_keys)


def get_storage_bucket(rules: Rules = Depends(get_rules)) -> str:
    return rules.uploads.bucket
