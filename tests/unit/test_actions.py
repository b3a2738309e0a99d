from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from moddash.adapters.clock import FixedClock
from moddash.adapters.discord_stub import DiscordActionsStub
from moddash.adapters.member_sources import StaticMemberSource
from moddash.components.actions import (
    ACTION_LABELS,
    ActionInput,
    DashboardAction,
    parse_action,
    run_action,
)
from moddash.domain.entities import RoleMapping

NOW = datetime(2025, 8, 30, tzinfo=UTC)
MAPPINGS = [RoleMapping(plan="Tiktok - 1 month", tier=1, discord_role="NEWB")]


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("sync_roles", DashboardAction.SYNC_ROLES),
        ("sync-roles", DashboardAction.SYNC_ROLES),
        ("  Recompute-Stats ", DashboardAction.RECOMPUTE_STATS),
        ("settings", DashboardAction.SETTINGS),
        ("launch_rockets", None),
        ("", None),
    ],
)
def test_parse_action(name, expected):
    assert parse_action(name) is expected


def test_every_action_has_a_label():
    assert set(ACTION_LABELS) == set(DashboardAction)
    assert DashboardAction.SEND_EXPIRING_SOON.label == "Send Expiring Soon"


def test_recompute_runs_classifier():
    stub = Mock(wraps=DiscordActionsStub())

    out = run_action(
        ActionInput(DashboardAction.RECOMPUTE_STATS),
        StaticMemberSource(),
        MAPPINGS,
        stub,
        FixedClock(NOW),
    )

    assert out.implemented is True
    assert out.success is True
    assert out.summary is not None
    assert (out.summary.active, out.summary.expiring, out.summary.lapsed) == (6, 3, 0)
    assert out.message == "Stats recomputed: 6 active, 3 expiring, 0 lapsed."
    stub.perform.assert_not_called()


@pytest.mark.parametrize(
    "action",
    [a for a in DashboardAction if a is not DashboardAction.RECOMPUTE_STATS],
)
def test_other_actions_go_to_discord_stub(action):
    stub = Mock(wraps=DiscordActionsStub())

    out = run_action(ActionInput(action), StaticMemberSource(), MAPPINGS, stub, FixedClock(NOW))

    assert out.implemented is False
    assert out.success is False
    assert out.message == f"{ACTION_LABELS[action]} is not implemented yet."
    stub.perform.assert_called_once()
    assert stub.perform.call_args.args[0] is action


def test_stub_role_mismatches():
    stub = DiscordActionsStub()
    members = StaticMemberSource().list_members()

    assert stub.list_role_mismatches(members, MAPPINGS) == []

    stub.set_mismatches(["Alice"])
    assert stub.list_role_mismatches(members, MAPPINGS) == ["Alice"]


def test_stub_keeps_no_history():
    stub = DiscordActionsStub()

    for _ in range(3):
        stub.perform(DashboardAction.SYNC_ROLES, [], MAPPINGS)

    assert vars(stub) == {"_mismatches": []}
