import logging
import os
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status

from moddash.adapters.auth.crypto import JWTAuthAdapter
from moddash.adapters.clock import SystemClock
from moddash.adapters.discord_stub import DiscordActionsStub
from moddash.adapters.json_store import JsonFileMemberStore
from moddash.adapters.member_sources import FallbackMemberSource, StaticMemberSource
from moddash.adapters.sqlite.repos import SQLiteMemberRepo, SQLiteRoleMappingRepo
from moddash.api.auth_utils import clean_env
from moddash.app_shell.rate_limit import RateLimiter
from moddash.components.status import MemberSourcePort
from moddash.domain.entities import ModSession, RoleMapping
from moddash.rules.loader import load_rules
from moddash.rules.models import DashboardRules

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_TTL_SECONDS = 60 * 60 * 24 * 30  # 30 days


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("MODDASH_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "moddash.db")
        self.members_json_path = self.data_dir / "members.json"
        self.member_store = os.environ.get("MODDASH_MEMBER_STORE", "sqlite").strip().lower()
        self.migrations_dir = str(PROJECT_ROOT / "migrations")
        self.rules_path = Path(
            os.environ.get("MODDASH_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        self.env = os.environ.get("MODDASH_ENV", "development").strip().lower()

        # Shared-password auth
        self.mod_password = clean_env(os.environ.get("MOD_PASSWORD"))
        self.mod_password_hash = clean_env(os.environ.get("MOD_PASSWORD_HASH"))
        self.auth_secret = clean_env(os.environ.get("AUTH_SECRET"))
        self.auth_ttl_seconds = _parse_ttl(os.environ.get("AUTH_TTL_SECONDS"))

    @property
    def cookie_secure(self) -> bool:
        return self.env == "production"


def _parse_ttl(raw: str | None) -> int:
    text = clean_env(raw)
    if not text:
        return DEFAULT_TTL_SECONDS
    try:
        return int(text)
    except ValueError:
        logger.warning(f"AUTH_TTL_SECONDS={text!r} is not an integer, using default")
        return DEFAULT_TTL_SECONDS


@lru_cache
def get_settings() -> Settings:
    return Settings()


def resolve_override(app: FastAPI, dependency: Callable[[], Any]) -> Any:
    """Call a zero-argument dependency honouring app.dependency_overrides.

    Middleware and lifespan run outside FastAPI's dependency injection.
    """
    override = app.dependency_overrides.get(dependency, dependency)
    return override()


# --- Rules ---
@lru_cache
def load_rules_cached(path: Path) -> DashboardRules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> DashboardRules:
    return load_rules_cached(settings.rules_path)


# --- Repos / Member sources ---
def get_member_store(
    settings: Settings = Depends(get_settings),
) -> SQLiteMemberRepo | JsonFileMemberStore:
    """The writable member store (import target)."""
    if settings.member_store == "json":
        return JsonFileMemberStore(settings.members_json_path)
    return SQLiteMemberRepo(settings.db_path)


def get_member_source(
    store: SQLiteMemberRepo | JsonFileMemberStore = Depends(get_member_store),
    rules: DashboardRules = Depends(get_rules),
) -> MemberSourcePort:
    """Members for classification: the store, then demo data if enabled."""
    if rules.demo.enabled:
        return FallbackMemberSource(store, StaticMemberSource())
    return store


def get_role_mapping_repo(settings: Settings = Depends(get_settings)) -> SQLiteRoleMappingRepo:
    return SQLiteRoleMappingRepo(settings.db_path)


def get_role_mappings(
    repo: SQLiteRoleMappingRepo = Depends(get_role_mapping_repo),
    rules: DashboardRules = Depends(get_rules),
) -> list[RoleMapping]:
    mappings = repo.list_all()
    if mappings:
        return mappings
    return [RoleMapping(**r.model_dump()) for r in rules.role_mappings]


# --- Adapters ---
def get_auth_adapter(settings: Settings = Depends(get_settings)) -> JWTAuthAdapter:
    return JWTAuthAdapter(settings.auth_secret)


# Time adapter for deterministic time operations
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


_rate_limiter_instance: RateLimiter | None = None


def get_rate_limiter(rules: DashboardRules = Depends(get_rules)) -> RateLimiter:
    """Get login rate limiter singleton."""
    global _rate_limiter_instance
    if _rate_limiter_instance is None:
        _rate_limiter_instance = RateLimiter(rules.rate_limits)
    return _rate_limiter_instance


_discord_instance: DiscordActionsStub | None = None


def get_discord_actions() -> DiscordActionsStub:
    """Get Discord actions adapter singleton (stub until the bot integration exists)."""
    global _discord_instance
    if _discord_instance is None:
        _discord_instance = DiscordActionsStub()
    return _discord_instance


# --- Auth ---
def get_mod_session(request: Request) -> ModSession:
    """Session attached by the auth middleware."""
    session = getattr(request.state, "mod_session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session
