"""
Status classifier tests.

Covers the window boundaries, the grace period, the expiring-soon shortlist
ordering and cap, moderator handling and timestamp parsing.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from moddash.components.status import (
    SHORTLIST_CAP,
    classify,
    parse_timestamp,
    status_of,
)
from moddash.domain.entities import Member

NOW = datetime(2025, 8, 30, 12, 0, tzinfo=UTC)


def member(username: str, end: object, **kwargs) -> Member:
    return Member(username=username, end=end, **kwargs)


def days(n: float) -> timedelta:
    return timedelta(days=n)


# --- Boundaries ---


class TestBoundaries:
    def test_end_equal_to_now_is_active_and_expiring(self) -> None:
        s = classify([member("a", NOW)], NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 1, 0)
        assert [m.username for m in s.expiring_soon] == ["a"]

    def test_end_at_window_edge_is_expiring(self) -> None:
        s = classify([member("a", NOW + days(14))], NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 1, 0)

    def test_end_just_past_window_is_active_only(self) -> None:
        s = classify([member("a", NOW + days(14) + timedelta(seconds=1))], NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 0, 0)
        assert s.expiring_soon == ()

    def test_end_at_grace_cutoff_is_not_lapsed(self) -> None:
        s = classify([member("a", NOW - days(3))], NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 0, 0)

    def test_end_before_grace_cutoff_is_lapsed(self) -> None:
        s = classify([member("a", NOW - days(3) - timedelta(seconds=1))], NOW)
        assert (s.active, s.expiring, s.lapsed) == (0, 0, 1)

    def test_recently_ended_within_grace_is_active_not_expiring(self) -> None:
        s = classify([member("a", NOW - timedelta(hours=1))], NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 0, 0)

    def test_zero_grace_lapses_immediately(self) -> None:
        s = classify([member("a", NOW - timedelta(seconds=1))], NOW, grace_window_days=0)
        assert s.lapsed == 1

    def test_custom_expiring_window(self) -> None:
        members = [member("a", NOW + days(5)), member("b", NOW + days(8))]
        s = classify(members, NOW, expiring_window_days=7)
        assert s.expiring == 1
        assert [m.username for m in s.expiring_soon] == ["a"]


# --- Reference scenario ---


def test_demo_roster_example() -> None:
    now = datetime(2025, 8, 30, tzinfo=UTC)
    members = [
        member("Shawn", "2025-08-31", is_moderator=True),
        member("HorrorGirl", "2025-09-23", is_moderator=True),
        member("Syd", "2025-12-31", is_moderator=True),
        member("Alice", "2025-09-02", tier=2),
        member("Bob", "2025-09-10", tier=3),
        member("Charlie", "2025-08-28", tier=2),
    ]

    s = classify(members, now)

    assert (s.active, s.expiring, s.lapsed) == (6, 3, 0)
    assert [m.username for m in s.expiring_soon] == ["Shawn", "Alice", "Bob"]
    assert [m.username for m in s.moderators] == ["Shawn", "HorrorGirl", "Syd"]


def test_empty_input() -> None:
    s = classify([], NOW)
    assert (s.active, s.expiring, s.lapsed) == (0, 0, 0)
    assert s.expiring_soon == ()
    assert s.moderators == ()


# --- Shortlist ---


class TestShortlist:
    def test_sorted_by_end_ascending(self) -> None:
        members = [
            member("late", NOW + days(10)),
            member("early", NOW + days(1)),
            member("mid", NOW + days(5)),
        ]
        s = classify(members, NOW)
        assert [m.username for m in s.expiring_soon] == ["early", "mid", "late"]

    def test_ties_keep_input_order(self) -> None:
        end = NOW + days(2)
        members = [member(name, end) for name in ("c", "a", "b")]
        s = classify(members, NOW)
        assert [m.username for m in s.expiring_soon] == ["c", "a", "b"]

    def test_capped_at_ten_but_all_counted(self) -> None:
        members = [member(f"m{i:02d}", NOW + timedelta(hours=i)) for i in range(15, 0, -1)]
        s = classify(members, NOW)

        assert s.expiring == 15
        assert len(s.expiring_soon) == SHORTLIST_CAP == 10
        assert [m.username for m in s.expiring_soon] == [f"m{i:02d}" for i in range(1, 11)]

    def test_custom_cap(self) -> None:
        members = [member(f"m{i}", NOW + days(1)) for i in range(5)]
        s = classify(members, NOW, shortlist_cap=2)
        assert [m.username for m in s.expiring_soon] == ["m0", "m1"]


# --- Moderators ---


class TestModerators:
    def test_moderators_are_still_counted(self) -> None:
        members = [
            member("mod-lapsed", NOW - days(30), is_moderator=True),
            member("mod-soon", NOW + days(1), is_moderator=True),
        ]
        s = classify(members, NOW)
        assert (s.active, s.expiring, s.lapsed) == (1, 1, 1)
        assert [m.username for m in s.expiring_soon] == ["mod-soon"]

    def test_moderator_with_bad_date_is_listed_but_not_counted(self) -> None:
        s = classify([member("mod", "someday", is_moderator=True)], NOW)
        assert [m.username for m in s.moderators] == ["mod"]
        assert (s.active, s.expiring, s.lapsed) == (0, 0, 0)


# --- Unparseable dates ---


@pytest.mark.parametrize("end", [None, "", "not-a-date", "2025-13-45", "31/12/2025"])
def test_unparseable_end_is_skipped(end: object) -> None:
    s = classify([member("x", end), member("ok", NOW + days(30))], NOW)
    assert (s.active, s.expiring, s.lapsed) == (1, 0, 0)
    assert s.expiring_soon == ()


# --- Invariants over a spread of offsets ---


@pytest.mark.parametrize("grace", [0, 3, 10])
@pytest.mark.parametrize("window", [0, 7, 14, 30])
def test_bucket_invariants(window: int, grace: int) -> None:
    offsets = [-40, -10, -3.5, -3, -1, 0, 0.5, 1, 6.9, 7, 13.9, 14, 14.1, 29, 31, 90]
    members = [member(f"m{i}", NOW + days(o)) for i, o in enumerate(offsets)]
    members.append(member("bad", "nope"))

    s = classify(members, NOW, expiring_window_days=window, grace_window_days=grace)

    assert s.active + s.lapsed == len(offsets)
    assert s.expiring <= s.active
    assert len(s.expiring_soon) == min(s.expiring, SHORTLIST_CAP)
    ends = [parse_timestamp(m.end) for m in s.expiring_soon]
    assert ends == sorted(ends)


def test_classify_does_not_mutate_input() -> None:
    members = [member("b", NOW + days(3)), member("a", NOW + days(1))]
    before = list(members)
    classify(members, NOW)
    assert members == before


# --- Timestamp forms ---


class TestTimestampForms:
    def test_strings_and_datetimes_agree(self) -> None:
        ends = [NOW - days(10), NOW + days(2), NOW + days(20)]
        as_datetimes = [member(f"m{i}", e) for i, e in enumerate(ends)]
        as_strings = [member(f"m{i}", e.isoformat()) for i, e in enumerate(ends)]

        stored = classify(as_datetimes, NOW)
        imported = classify(as_strings, NOW)

        assert (stored.active, stored.expiring, stored.lapsed) == (
            imported.active,
            imported.expiring,
            imported.lapsed,
        )
        assert [m.username for m in stored.expiring_soon] == [
            m.username for m in imported.expiring_soon
        ]

    def test_zulu_suffix(self) -> None:
        s = classify([member("z", "2025-09-01T00:00:00Z")], NOW)
        assert s.expiring == 1

    def test_offset_is_respected(self) -> None:
        # 23:00 at -05:00 is 04:00 UTC the next day
        assert parse_timestamp("2025-09-01T23:00:00-05:00") == datetime(
            2025, 9, 2, 4, 0, tzinfo=UTC
        )

    def test_naive_values_are_utc(self) -> None:
        expected = datetime(2025, 9, 1, 8, 0, tzinfo=UTC)
        assert parse_timestamp(datetime(2025, 9, 1, 8, 0)) == expected
        assert parse_timestamp("2025-09-01T08:00:00") == expected

    def test_date_becomes_midnight(self) -> None:
        assert parse_timestamp(date(2025, 9, 1)) == datetime(2025, 9, 1, tzinfo=UTC)
        assert parse_timestamp("2025-09-01") == datetime(2025, 9, 1, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, 12345, "", "   ", "tomorrow"])
    def test_unparseable(self, value: object) -> None:
        assert parse_timestamp(value) is None

    def test_naive_now_is_treated_as_utc(self) -> None:
        s = classify([member("a", NOW + days(1))], NOW.replace(tzinfo=None))
        assert s.expiring == 1


def test_custom_end_accessor() -> None:
    # Classify on start instead of end
    m = Member(username="a", start=NOW + days(1), end=NOW - days(100))
    s = classify([m], NOW, end_of=lambda x: parse_timestamp(x.start))
    assert (s.active, s.expiring, s.lapsed) == (1, 1, 0)


# --- Single-member labels ---


@pytest.mark.parametrize(
    ("end", "expected"),
    [
        (NOW - days(4), "lapsed"),
        (NOW - days(1), "active"),
        (NOW, "expiring"),
        (NOW + days(14), "expiring"),
        (NOW + days(15), "active"),
        ("garbage", "unknown"),
        (None, "unknown"),
    ],
)
def test_status_of(end: object, expected: str) -> None:
    assert status_of(member("x", end), NOW) == expected
