"""
Actions component - Dashboard buttons (assign mod, notices, role sync, ...).
"""

from .component import parse_action, run_action
from .models import ACTION_LABELS, ActionInput, ActionOutput, DashboardAction
from .ports import DiscordActionsPort

__all__ = [
    "run_action",
    "parse_action",
    "ACTION_LABELS",
    "ActionInput",
    "ActionOutput",
    "DashboardAction",
    "DiscordActionsPort",
]
