"""
Actions component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from moddash.components.status import StatusSummary


class DashboardAction(str, Enum):
    """Buttons on the dashboard."""

    ASSIGN_MOD = "assign_mod"
    SEND_EXPIRING_SOON = "send_expiring_soon"
    REFRESH_CHANNEL = "refresh_channel"
    SYNC_ROLES = "sync_roles"
    RECOMPUTE_STATS = "recompute_stats"
    SETTINGS = "settings"

    @property
    def label(self) -> str:
        return ACTION_LABELS[self]


ACTION_LABELS: dict[DashboardAction, str] = {
    DashboardAction.ASSIGN_MOD: "Assign Mod",
    DashboardAction.SEND_EXPIRING_SOON: "Send Expiring Soon",
    DashboardAction.REFRESH_CHANNEL: "Refresh Channel",
    DashboardAction.SYNC_ROLES: "Sync Roles",
    DashboardAction.RECOMPUTE_STATS: "Recompute Stats",
    DashboardAction.SETTINGS: "Settings",
}


@dataclass(frozen=True)
class ActionInput:
    action: DashboardAction


@dataclass(frozen=True)
class ActionOutput:
    action: DashboardAction
    implemented: bool
    success: bool
    message: str
    summary: StatusSummary | None = None
