from datetime import UTC, datetime


class SystemClock:
    def now(self) -> datetime:
        return datetime.now()

    def now_utc(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock pinned to one instant, for previews and tests."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def now_utc(self) -> datetime:
        return self._instant
