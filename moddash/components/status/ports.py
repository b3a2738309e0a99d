"""
Status component - Port interfaces.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from moddash.domain.entities import Member


class MemberSourcePort(Protocol):
    """Anything that can hand over the current member list."""

    def list_members(self) -> list[Member]:
        """Return members, ordering is up to the source."""
        ...


class TimePort(Protocol):
    """Port for time operations - enables deterministic testing."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class StatusRulesPort(Protocol):
    expiring_window_days: int
    grace_window_days: int
    shortlist_cap: int
