import secrets
from datetime import UTC, datetime, timedelta

from moddash.domain.entities import ModSession

from .models import (
    INVALID_PASSWORD_ERROR,
    MISSING_PASSWORD_ERROR,
    MISSING_SECRET_ERROR,
    AuthOutput,
    LoginInput,
    VerifySessionInput,
)
from .ports import AuthAdapterPort, AuthConfigPort, TimePort


def check_config(config: AuthConfigPort) -> str | None:
    """Return the configuration error a login would hit, if any."""
    if not config.auth_secret:
        return MISSING_SECRET_ERROR
    if not config.mod_password and not config.mod_password_hash:
        return MISSING_PASSWORD_ERROR
    return None


def run_login(
    inp: LoginInput,
    config: AuthConfigPort,
    auth_adapter: AuthAdapterPort,
    time: TimePort,
) -> AuthOutput:
    config_error = check_config(config)
    if config_error:
        return AuthOutput(success=False, error=config_error, config_error=True)

    # Plain password wins over the hash when both are set
    if config.mod_password:
        ok = secrets.compare_digest(inp.password.encode(), config.mod_password.encode())
    else:
        ok = auth_adapter.verify_password(inp.password, config.mod_password_hash)

    if not ok:
        return AuthOutput(success=False, error=INVALID_PASSWORD_ERROR)

    now = time.now_utc()
    token = auth_adapter.create_token(config.auth_ttl_seconds, now)
    session = ModSession(
        issued_at=now,
        expires_at=now + timedelta(seconds=config.auth_ttl_seconds),
    )
    return AuthOutput(session=session, token_raw=token, success=True)


def run_verify_session(
    inp: VerifySessionInput,
    config: AuthConfigPort,
    auth_adapter: AuthAdapterPort,
) -> AuthOutput:
    if not inp.token:
        return AuthOutput(success=False, error="Not authenticated")
    if not config.auth_secret:
        return AuthOutput(success=False, error=MISSING_SECRET_ERROR, config_error=True)

    payload = auth_adapter.decode_token(inp.token)
    if not payload:
        return AuthOutput(success=False, error="Invalid token")

    if payload.get("role") != "mod":
        return AuthOutput(success=False, error="Invalid token payload")

    session = ModSession(
        issued_at=datetime.fromtimestamp(int(payload.get("iat", 0)), UTC),
        expires_at=datetime.fromtimestamp(int(payload.get("exp", 0)), UTC),
    )
    return AuthOutput(session=session, token_raw=inp.token, success=True)


def run(
    inp: LoginInput | VerifySessionInput,
    *,
    config: AuthConfigPort | None = None,
    auth_adapter: AuthAdapterPort | None = None,
    time: TimePort | None = None,
) -> AuthOutput:
    if isinstance(inp, LoginInput):
        assert config and auth_adapter and time
        return run_login(inp, config, auth_adapter, time)

    elif isinstance(inp, VerifySessionInput):
        assert config and auth_adapter
        return run_verify_session(inp, config, auth_adapter)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
