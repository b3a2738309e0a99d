from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from moddash.adapters.clock import FixedClock
from moddash.api import deps
from moddash.api.deps import Settings, get_clock, get_settings
from moddash.api.main import app

PROJECT_ROOT = Path(__file__).resolve().parent.parent
RULES_PATH = PROJECT_ROOT / "rules.yaml"

MOD_PASSWORD = "letmein"
AUTH_SECRET = "test-secret-key"

# The demo member dates are laid out around this day
DEMO_NOW = datetime(2025, 8, 30, tzinfo=UTC)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    """Settings backed by a temporary data dir and the project rules file."""
    monkeypatch.setenv("MODDASH_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("MODDASH_RULES_PATH", str(RULES_PATH))
    monkeypatch.setenv("AUTH_SECRET", AUTH_SECRET)
    monkeypatch.setenv("MOD_PASSWORD", MOD_PASSWORD)
    for name in ("MOD_PASSWORD_HASH", "AUTH_TTL_SECONDS", "MODDASH_ENV", "MODDASH_MEMBER_STORE"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


def _reset_singletons() -> None:
    deps._rate_limiter_instance = None
    deps._discord_instance = None
    deps._clock_instance = None


@pytest.fixture
def client(settings):
    """TestClient with startup (migrations, role seed) run against the temp DB."""
    _reset_singletons()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: FixedClock(DEMO_NOW)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    _reset_singletons()


@pytest.fixture
def mod_client(client):
    """Client holding a valid mod_auth cookie."""
    resp = client.post(
        "/mod/login",
        data={"password": MOD_PASSWORD, "next": "/mod"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client
