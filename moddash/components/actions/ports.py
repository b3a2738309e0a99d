"""
Actions component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from moddash.domain.entities import Member, RoleMapping

from .models import ActionOutput, DashboardAction


class DiscordActionsPort(Protocol):
    """Operations that would talk to the Discord guild."""

    def perform(
        self,
        action: DashboardAction,
        members: list[Member],
        role_mappings: list[RoleMapping],
    ) -> ActionOutput:
        """Carry out a dashboard action."""
        ...

    def list_role_mismatches(
        self, members: list[Member], role_mappings: list[RoleMapping]
    ) -> list[str]:
        """Usernames whose Discord role does not match their tier."""
        ...
