from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
MemberStatus = Literal["active", "expiring", "lapsed", "unknown"]

# Stored members carry real datetimes, imported members carry the raw strings.
Timestamp = datetime | date | str

# --- Members ---


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    tier: int = Field(default=1, ge=1)
    start: datetime | str | None = None
    end: datetime | str | None = None
    is_moderator: bool = False


# --- Reference data ---


class RoleMapping(BaseModel):
    plan: str
    tier: int = Field(ge=1)
    discord_role: str


# --- Auth ---


class ModSession(BaseModel):
    role: Literal["mod"] = "mod"
    issued_at: datetime
    expires_at: datetime


def timestamp_to_iso(value: Timestamp | None) -> str:
    """Render a stored or imported timestamp the way the client expects it."""
    if value is None:
        return ""
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value
