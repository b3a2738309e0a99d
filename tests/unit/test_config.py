import logging
from types import SimpleNamespace

from moddash.api.deps import DEFAULT_TTL_SECONDS, Settings
from moddash.app_shell.config import validate_ops_env
from moddash.components.auth import MISSING_PASSWORD_ERROR, MISSING_SECRET_ERROR


def make_config(**overrides):
    values = {
        "mod_password": "pw",
        "mod_password_hash": "",
        "auth_secret": "secret",
        "auth_ttl_seconds": 60,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_valid_config(caplog):
    with caplog.at_level(logging.INFO):
        assert validate_ops_env(make_config()) == []
    assert "Configuration Validated." in caplog.text


def test_missing_secret_is_warned(caplog):
    with caplog.at_level(logging.WARNING):
        problems = validate_ops_env(make_config(auth_secret=""))
    assert problems == [MISSING_SECRET_ERROR]
    assert "missing AUTH_SECRET" in caplog.text


def test_missing_password():
    assert validate_ops_env(make_config(mod_password="")) == [MISSING_PASSWORD_ERROR]


def test_both_passwords_and_bad_ttl():
    problems = validate_ops_env(make_config(mod_password_hash="$argon2id$x", auth_ttl_seconds=0))
    assert len(problems) == 2


# --- Settings from the environment ---


def test_settings_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("MODDASH_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("MOD_PASSWORD", '  "quoted-pw" ')
    monkeypatch.setenv("AUTH_SECRET", "'abc'")
    monkeypatch.setenv("AUTH_TTL_SECONDS", "120")
    monkeypatch.setenv("MODDASH_ENV", "Production")
    monkeypatch.setenv("MODDASH_MEMBER_STORE", "JSON")

    s = Settings()

    assert s.mod_password == "quoted-pw"
    assert s.auth_secret == "abc"
    assert s.auth_ttl_seconds == 120
    assert s.cookie_secure is True
    assert s.member_store == "json"
    assert s.db_path == str(tmp_path / "moddash.db")
    assert s.members_json_path == tmp_path / "members.json"


def test_settings_defaults(monkeypatch):
    for name in ("AUTH_TTL_SECONDS", "MODDASH_ENV", "MODDASH_MEMBER_STORE"):
        monkeypatch.delenv(name, raising=False)

    s = Settings()

    assert s.auth_ttl_seconds == DEFAULT_TTL_SECONDS == 60 * 60 * 24 * 30
    assert s.cookie_secure is False
    assert s.member_store == "sqlite"


def test_bad_ttl_falls_back(monkeypatch):
    monkeypatch.setenv("AUTH_TTL_SECONDS", "forever")
    assert Settings().auth_ttl_seconds == DEFAULT_TTL_SECONDS
