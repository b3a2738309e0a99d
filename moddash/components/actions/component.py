"""
Actions component - Dashboard action buttons.

Shell Layer - recompute is handled locally, everything else goes to the
Discord port.
"""

from __future__ import annotations

from moddash.components.status import (
    ClassifyInput,
    MemberSourcePort,
    StatusRulesPort,
    TimePort,
    run_classify,
)
from moddash.domain.entities import RoleMapping

from .models import ActionInput, ActionOutput, DashboardAction
from .ports import DiscordActionsPort


def parse_action(name: str) -> DashboardAction | None:
    """Accept both `sync_roles` and `sync-roles` spellings."""
    try:
        return DashboardAction(name.strip().lower().replace("-", "_"))
    except ValueError:
        return None


def run_action(
    inp: ActionInput,
    member_source: MemberSourcePort,
    role_mappings: list[RoleMapping],
    discord: DiscordActionsPort,
    time: TimePort,
    rules: StatusRulesPort | None = None,
) -> ActionOutput:
    if inp.action is DashboardAction.RECOMPUTE_STATS:
        result = run_classify(ClassifyInput(), member_source, time, rules)
        s = result.summary
        return ActionOutput(
            action=inp.action,
            implemented=True,
            success=True,
            message=f"Stats recomputed: {s.active} active, {s.expiring} expiring, "
            f"{s.lapsed} lapsed.",
            summary=s,
        )

    return discord.perform(inp.action, member_source.list_members(), role_mappings)
