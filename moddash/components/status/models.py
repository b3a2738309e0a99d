"""
Status component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from moddash.domain.entities import Member

# --- Input Models ---


@dataclass(frozen=True)
class ClassifyInput:
    """Input for a status summary. `now` defaults to the time port."""

    now: datetime | None = None


# --- Output Models ---


@dataclass(frozen=True)
class StatusSummary:
    """Derived status counts. Recomputed on every request, never persisted."""

    active: int
    expiring: int
    lapsed: int
    expiring_soon: tuple[Member, ...]
    moderators: tuple[Member, ...]


@dataclass(frozen=True)
class ClassifyOutput:
    """Output from run_classify."""

    summary: StatusSummary
    members: tuple[Member, ...]
    now: datetime
