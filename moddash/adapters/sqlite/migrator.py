import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DOWN_MARKER = "-- Down"


def up_script(sql: str) -> str:
    """The part of a migration file above its "-- Down" marker."""
    return sql.split(DOWN_MARKER, 1)[0]


class SQLiteMigrator:
    """Applies `migrations/NNN_name.sql` files in name order, each one once."""

    def __init__(self, db_path: str, migrations_dir: str):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def pending(self, conn: sqlite3.Connection) -> list[Path]:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS _migrations ("
            "filename TEXT PRIMARY KEY, "
            "applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP)"
        )
        done = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        return [p for p in sorted(self.migrations_dir.glob("*.sql")) if p.name not in done]

    def run_migrations(self) -> list[str]:
        """Apply pending migrations. Returns the filenames applied."""
        conn = sqlite3.connect(self.db_path)
        applied: list[str] = []
        try:
            for path in self.pending(conn):
                logger.info(f"Applying migration: {path.name}")
                try:
                    conn.executescript(up_script(path.read_text(encoding="utf-8")))
                    conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (path.name,))
                    conn.commit()
                except sqlite3.Error as e:
                    conn.rollback()
                    raise RuntimeError(f"Migration {path.name} failed: {e}") from e
                applied.append(path.name)
            return applied
        finally:
            conn.close()
