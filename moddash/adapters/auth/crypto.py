from datetime import datetime, timedelta
from typing import Any

from moddash.api.auth_utils import (
    MOD_ROLE,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class JWTAuthAdapter:
    """Auth adapter that signs HS256 JWTs and checks argon2 or bcrypt hashes via passlib."""

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        return verify_password(plain, hashed)

    def create_token(self, ttl_seconds: int, now_utc: datetime) -> str:
        return create_access_token(
            {"role": MOD_ROLE},
            self._secret,
            expires_delta=timedelta(seconds=ttl_seconds),
            now_utc=now_utc,
        )

    def decode_token(self, token: str) -> dict[str, Any] | None:
        return decode_access_token(token, self._secret)
