"""
Status component - Membership status summary.

Shell Layer - reads members and the clock through ports, then hands off to
the pure classifier.
"""

from __future__ import annotations

from moddash.domain.entities import Member, MemberStatus

from ._impl import (
    DEFAULT_EXPIRING_WINDOW_DAYS,
    DEFAULT_GRACE_WINDOW_DAYS,
    classify,
    status_of,
)
from .models import ClassifyInput, ClassifyOutput
from .ports import MemberSourcePort, StatusRulesPort, TimePort


def run_classify(
    inp: ClassifyInput,
    member_source: MemberSourcePort,
    time: TimePort,
    rules: StatusRulesPort | None = None,
) -> ClassifyOutput:
    now = inp.now if inp.now is not None else time.now_utc()
    members = tuple(member_source.list_members())

    if rules is None:
        summary = classify(members, now)
    else:
        summary = classify(
            members,
            now,
            rules.expiring_window_days,
            rules.grace_window_days,
            shortlist_cap=rules.shortlist_cap,
        )

    return ClassifyOutput(summary=summary, members=members, now=now)


def run_label(
    members: tuple[Member, ...] | list[Member],
    output: ClassifyOutput,
    rules: StatusRulesPort | None = None,
) -> list[MemberStatus]:
    """Status label per member, in the order given, using the same anchor as the summary."""
    expiring_days = rules.expiring_window_days if rules else DEFAULT_EXPIRING_WINDOW_DAYS
    grace_days = rules.grace_window_days if rules else DEFAULT_GRACE_WINDOW_DAYS
    return [status_of(m, output.now, expiring_days, grace_days) for m in members]


def run(
    inp: ClassifyInput,
    *,
    member_source: MemberSourcePort | None = None,
    time: TimePort | None = None,
    rules: StatusRulesPort | None = None,
) -> ClassifyOutput:
    assert member_source and time
    return run_classify(inp, member_source, time, rules)
