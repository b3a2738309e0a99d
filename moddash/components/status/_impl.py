"""
Status classifier - Membership status buckets for the dashboard.

Functional Core - pure business logic.

Key behaviors:
- Lapsed means the end date is strictly before now minus the grace window
- Expiring is a subset of active: now <= end <= now plus the expiring window
- Members without a parseable end date are left out of every count
- Moderators are listed in input order and still counted like everyone else
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime, time, timedelta

from moddash.domain.entities import Member, MemberStatus

from .models import StatusSummary

DEFAULT_EXPIRING_WINDOW_DAYS = 14
DEFAULT_GRACE_WINDOW_DAYS = 3
SHORTLIST_CAP = 10

EndAccessor = Callable[[Member], datetime | None]


# --- Timestamp handling ---


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_timestamp(value: object) -> datetime | None:
    """
    Parse a stored or imported timestamp.

    Accepts datetimes, dates and ISO 8601 strings (date-only included).
    Naive values are taken as UTC. Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def member_end(member: Member) -> datetime | None:
    return parse_timestamp(member.end)


# --- Classification ---


def _cutoffs(
    now: datetime, expiring_window_days: int, grace_window_days: int
) -> tuple[datetime, datetime, datetime]:
    anchor = _as_utc(now)
    return (
        anchor,
        anchor + timedelta(days=expiring_window_days),
        anchor - timedelta(days=grace_window_days),
    )


def classify(
    members: Iterable[Member],
    now: datetime,
    expiring_window_days: int = DEFAULT_EXPIRING_WINDOW_DAYS,
    grace_window_days: int = DEFAULT_GRACE_WINDOW_DAYS,
    *,
    end_of: EndAccessor = member_end,
    shortlist_cap: int = SHORTLIST_CAP,
) -> StatusSummary:
    """
    Partition members into active/expiring/lapsed counts.

    Args:
        members: Member records, stored or imported
        now: Time anchor for the windows
        expiring_window_days: Days ahead that count as "expiring soon"
        grace_window_days: Days past the end date before a member is lapsed
        end_of: Reads a comparable end timestamp from a member (None = skip)
        shortlist_cap: Maximum length of the expiring-soon shortlist

    Returns:
        StatusSummary with counts, the sorted shortlist and the moderators
    """
    anchor, soon_cutoff, grace_cutoff = _cutoffs(now, expiring_window_days, grace_window_days)

    active = expiring = lapsed = 0
    soon: list[tuple[datetime, Member]] = []
    moderators: list[Member] = []

    for member in members:
        if member.is_moderator:
            moderators.append(member)

        end = end_of(member)
        if end is None:
            continue

        if end < grace_cutoff:
            lapsed += 1
        elif anchor <= end <= soon_cutoff:
            active += 1
            expiring += 1
            soon.append((end, member))
        else:
            active += 1

    # sorted() is stable, ties keep input order
    soon = sorted(soon, key=lambda pair: pair[0])

    return StatusSummary(
        active=active,
        expiring=expiring,
        lapsed=lapsed,
        expiring_soon=tuple(member for _, member in soon[:shortlist_cap]),
        moderators=tuple(moderators),
    )


def status_of(
    member: Member,
    now: datetime,
    expiring_window_days: int = DEFAULT_EXPIRING_WINDOW_DAYS,
    grace_window_days: int = DEFAULT_GRACE_WINDOW_DAYS,
    *,
    end_of: EndAccessor = member_end,
) -> MemberStatus:
    """Label a single member using the same windows as classify()."""
    end = end_of(member)
    if end is None:
        return "unknown"

    anchor, soon_cutoff, grace_cutoff = _cutoffs(now, expiring_window_days, grace_window_days)
    if end < grace_cutoff:
        return "lapsed"
    if anchor <= end <= soon_cutoff:
        return "expiring"
    return "active"
