import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chosen_arrows.adapters.sqlite.migrator import SQLiteMigrator
from chosen_arrows.api.deps import get_current_admin, get_settings
from chosen_arrows.app_shell.config import validate_ops_rules
from chosen_arrows.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = get_settings()

    # Load rules, validate and migrate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        SQLiteMigrator(settings.db_path).run_migrations()
        logger.info("Rules loaded from %s", settings.rules_path)
    except Exception as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Chosen Arrows Foundation API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from chosen_arrows.api.routes import (  # noqa: E402
    admin_audit,
    admin_campaigns,
    admin_content,
    admin_media,
    admin_metadata,
    admin_pages,
    admin_settings,
    admin_testimonials,
    auth,
    donate,
    public,
    public_ssr,
    storage,
)

admin_only = [Depends(get_current_admin)]

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(
    admin_campaigns.router,
    prefix="/api/admin/campaigns",
    tags=["Admin Campaigns"],
    dependencies=admin_only,
)
app.include_router(
    admin_testimonials.router,
    prefix="/api/admin/testimonials",
    tags=["Admin Testimonials"],
    dependencies=admin_only,
)
app.include_router(
    admin_content.router,
    prefix="/api/admin/content",
    tags=["Admin Content"],
    dependencies=admin_only,
)
app.include_router(
    admin_metadata.router,
    prefix="/api/admin/metadata",
    tags=["Admin Metadata"],
    dependencies=admin_only,
)
app.include_router(
    admin_settings.router,
    prefix="/api/admin/settings",
    tags=["Admin Settings"],
    dependencies=admin_only,
)
app.include_router(
    admin_media.router, prefix="/api/admin/media", tags=["Admin Media"], dependencies=admin_only
)
app.include_router(
    admin_audit.router, prefix="/api/admin/audit", tags=["Admin Audit"], dependencies=admin_only
)
app.include_router(public.router, prefix="/api/public", tags=["Public"])
app.include_router(donate.router, prefix="/api/donate", tags=["Donate"])
app.include_router(storage.router, prefix="/storage/v1/object/public", tags=["Storage"])
app.include_router(admin_pages.router, prefix="/admin", tags=["Admin Pages"])
app.include_router(public_ssr.router, prefix="", tags=["SSR"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://chosenarrows.com",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
