"""
Discord actions stub adapter (dev/MVP).

Stub implementation of DiscordActionsPort. Nothing is sent to Discord;
every action is logged and reported as not implemented.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from moddash.components.actions.models import ActionOutput, DashboardAction
from moddash.domain.entities import Member, RoleMapping

logger = logging.getLogger(__name__)


@dataclass
class DiscordActionsStub:
    """Stub Discord adapter. Keeps no history of the actions it is asked to run."""

    _mismatches: list[str] = field(default_factory=list)

    def perform(
        self,
        action: DashboardAction,
        members: list[Member],
        role_mappings: list[RoleMapping],
    ) -> ActionOutput:
        logger.info(
            f"DiscordActionsStub.perform: action={action.value}, "
            f"members={len(members)}, mappings={len(role_mappings)}"
        )
        return ActionOutput(
            action=action,
            implemented=False,
            success=False,
            message=f"{action.label} is not implemented yet.",
        )

    def list_role_mismatches(
        self, members: list[Member], role_mappings: list[RoleMapping]
    ) -> list[str]:
        return list(self._mismatches)

    # --- Testing Helpers ---

    def set_mismatches(self, usernames: list[str]) -> None:
        self._mismatches = list(usernames)
