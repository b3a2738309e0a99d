import sqlite3
from datetime import UTC, datetime
from typing import Any

from moddash.components.status import parse_timestamp
from moddash.domain.entities import Member, RoleMapping


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _to_db_timestamp(value: datetime | str | None) -> str | None:
    """Store parseable timestamps as UTC ISO strings, keep anything else verbatim."""
    if value is None or value == "":
        return None
    parsed = parse_timestamp(value)
    if parsed is None:
        return str(value)
    return parsed.astimezone(UTC).isoformat()


def _from_db_timestamp(value: str | None) -> datetime | str | None:
    if value is None:
        return None
    parsed = parse_timestamp(value)
    return parsed if parsed is not None else value


class SQLiteBaseRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLiteMemberRepo(SQLiteBaseRepo):
    """Members table. Parseable dates come back as datetimes."""

    def list_members(self) -> list[Member]:
        conn = self._get_conn()
        try:
            # Missing end dates sort last, ties keep insertion order
            rows = conn.execute(
                "SELECT * FROM members "
                "ORDER BY end_at IS NULL, end_at ASC, position ASC, id ASC"
            ).fetchall()
            return [self._row_to_member(r) for r in rows]
        finally:
            conn.close()

    def replace_all(self, members: list[Member]) -> int:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM members")
            conn.executemany(
                """
                INSERT INTO members (username, tier, start_at, end_at, is_moderator, position)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        m.username,
                        m.tier,
                        _to_db_timestamp(m.start),
                        _to_db_timestamp(m.end),
                        1 if m.is_moderator else 0,
                        i,
                    )
                    for i, m in enumerate(members)
                ],
            )
            conn.commit()
            return len(members)
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def count(self) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT COUNT(*) AS n FROM members").fetchone()
            return int(row["n"])
        finally:
            conn.close()

    def _row_to_member(self, row: dict[str, Any]) -> Member:
        return Member(
            username=row["username"],
            tier=row["tier"],
            start=_from_db_timestamp(row["start_at"]),
            end=_from_db_timestamp(row["end_at"]),
            is_moderator=bool(row["is_moderator"]),
        )


class SQLiteRoleMappingRepo(SQLiteBaseRepo):
    def list_all(self) -> list[RoleMapping]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT * FROM role_mappings ORDER BY tier ASC, id ASC").fetchall()
            return [
                RoleMapping(plan=r["plan"], tier=r["tier"], discord_role=r["discord_role"])
                for r in rows
            ]
        finally:
            conn.close()

    def replace_all(self, mappings: list[RoleMapping]) -> int:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM role_mappings")
            conn.executemany(
                "INSERT INTO role_mappings (plan, tier, discord_role) VALUES (?, ?, ?)",
                [(m.plan, m.tier, m.discord_role) for m in mappings],
            )
            conn.commit()
            return len(mappings)
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def count(self) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT COUNT(*) AS n FROM role_mappings").fetchone()
            return int(row["n"])
        finally:
            conn.close()
