"""Member sources that are not a real store: demo data and fallback chains."""

from collections.abc import Sequence

from moddash.components.status import MemberSourcePort
from moddash.domain.entities import Member

DEMO_MEMBERS: tuple[Member, ...] = (
    Member(username="Shawn", tier=1, start="2025-01-01", end="2025-08-31", is_moderator=True),
    Member(username="HorrorGirl", tier=1, start="2025-01-01", end="2025-09-23", is_moderator=True),
    Member(username="Syd", tier=1, start="2025-01-01", end="2025-12-31", is_moderator=True),
    Member(username="Alice", tier=2, start="2025-06-01", end="2025-09-02"),
    Member(username="Bob", tier=3, start="2025-07-10", end="2025-09-10"),
    Member(username="Charlie", tier=2, start="2025-08-01", end="2025-08-28"),
)


class StaticMemberSource:
    def __init__(self, members: Sequence[Member] = DEMO_MEMBERS) -> None:
        self._members = list(members)

    def list_members(self) -> list[Member]:
        return list(self._members)


class FallbackMemberSource:
    """Returns the first non-empty list from the chained sources."""

    def __init__(self, *sources: MemberSourcePort) -> None:
        self.sources = sources

    def list_members(self) -> list[Member]:
        for source in self.sources:
            members = source.list_members()
            if members:
                return members
        return []
