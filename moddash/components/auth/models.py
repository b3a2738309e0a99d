from dataclasses import dataclass

from moddash.domain.entities import ModSession

MISSING_SECRET_ERROR = "Server env not configured (missing AUTH_SECRET)."
MISSING_PASSWORD_ERROR = "No password configured. Set MOD_PASSWORD or MOD_PASSWORD_HASH."
INVALID_PASSWORD_ERROR = "Invalid password."


@dataclass
class LoginInput:
    password: str


@dataclass
class VerifySessionInput:
    token: str | None


@dataclass
class AuthOutput:
    session: ModSession | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None
    # True when the failure is a server misconfiguration, not a bad password
    config_error: bool = False
