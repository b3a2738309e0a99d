from datetime import datetime
from typing import Any, Protocol


class AuthConfigPort(Protocol):
    """Shared-password configuration, already cleaned of quotes/whitespace."""

    mod_password: str
    mod_password_hash: str
    auth_secret: str
    auth_ttl_seconds: int


class AuthAdapterPort(Protocol):
    def verify_password(self, plain: str, hashed: str) -> bool: ...
    def create_token(self, ttl_seconds: int, now_utc: datetime) -> str: ...
    def decode_token(self, token: str) -> dict[str, Any] | None: ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...
