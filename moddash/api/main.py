import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from moddash.api.deps import get_settings, load_rules_cached, resolve_override
from moddash.api.middleware import mod_auth_guard
from moddash.app_shell.config import prepare_storage, validate_ops_env

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = resolve_override(app, get_settings)

    # Load rules on startup (fail-fast)
    try:
        rules = load_rules_cached(settings.rules_path)
        logger.info(f"Rules loaded from {settings.rules_path}")
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Rules load failed: {e}")
        sys.exit(1)

    prepare_storage(settings.db_path, settings.migrations_dir, rules)
    validate_ops_env(settings)

    yield


app = FastAPI(
    title="Mod Dashboard",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from moddash.api.routes import actions, auth, dashboard, imports, public  # noqa: E402

app.include_router(public.router, prefix="", tags=["Public"])
app.include_router(auth.router, prefix="", tags=["Auth"])
app.include_router(dashboard.router, prefix="", tags=["Dashboard"])
app.include_router(imports.router, prefix="", tags=["Import"])
app.include_router(actions.router, prefix="", tags=["Actions"])

# --- Auth guard ---
app.middleware("http")(mod_auth_guard)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "mod-dashboard"}
