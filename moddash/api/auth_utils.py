from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import jwt
from passlib.context import CryptContext

ALGORITHM = "HS256"
MOD_ROLE = "mod"

# New hashes are argon2; bcrypt hashes from older deployments still verify
pwd_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto")


def clean_env(value: str | None) -> str:
    """Trim and strip one pair of surrounding quotes, as pasted .env values often have."""
    text = (value or "").strip()
    if text[:1] in ("'", '"'):
        text = text[1:]
    if text[-1:] in ("'", '"'):
        text = text[:-1]
    return text


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        result: bool = pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Not a hash passlib recognises
        return False
    return result


def get_password_hash(password: str) -> str:
    result: str = pwd_context.hash(password)
    return result


def create_access_token(
    data: dict[str, Any],
    secret: str,
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token
        secret: HMAC signing key
        expires_delta: Optional custom expiration delta
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
    """
    to_encode = data.copy()
    current_time = now_utc if now_utc is not None else datetime.now(UTC)

    if expires_delta:
        expire = current_time + expires_delta
    else:
        expire = current_time + timedelta(minutes=15)

    to_encode.update({"iat": current_time, "exp": expire})
    encoded_jwt: str = jwt.encode(to_encode, secret, algorithm=ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str, secret: str) -> dict[str, Any] | None:
    if not token or not secret:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        return cast(dict[str, Any], payload)
    except jwt.JWTError:
        return None

