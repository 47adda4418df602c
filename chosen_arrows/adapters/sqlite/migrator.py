"""
Forward-only SQL migrations.

Each ``NNNN_name.sql`` file in ``migrations/`` is applied once, in filename
order, and recorded in ``_migrations``. Only the part before a ``-- Down``
marker runs. A file's statements and its ``_migrations`` row commit together,
so a failing migration leaves no partial schema behind.
"""

import logging
import os
import sqlite3

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), "migrations")


class MigrationError(RuntimeError):
    pass


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str = MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = migrations_dir

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(
            "CREATE TABLE IF NOT EXISTS _migrations ("
            " id INTEGER PRIMARY KEY AUTOINCREMENT,"
            " filename TEXT UNIQUE NOT NULL,"
            " applied_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        )
        return conn

    def available(self) -> list[str]:
        return sorted(f for f in os.listdir(self.migrations_dir) if f.endswith(".sql"))

    def pending_migrations(self) -> list[str]:
        conn = self._connect()
        try:
            return self._pending(conn)
        finally:
            conn.close()

    def _pending(self, conn: sqlite3.Connection) -> list[str]:
        applied = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        return [f for f in self.available() if f not in applied]

    def run_migrations(self) -> list[str]:
        """Apply every pending migration. Returns the filenames applied."""
        conn = self._connect()
        try:
            pending = self._pending(conn)
            for filename in pending:
                logger.info("Applying migration: %s", filename)
                self._apply(conn, filename)
        finally:
            conn.close()
        logger.info("Migrations up to date (%d new)", len(pending))
        return pending

    def _up_script(self, filename: str) -> str:
        with open(os.path.join(self.migrations_dir, filename), encoding="utf-8") as f:
            return f.read().split("-- Down", 1)[0]

    def _apply(self, conn: sqlite3.Connection, filename: str) -> None:
        record = filename.replace("'", "''")
        script = (
            "BEGIN;\n"
            f"{self._up_script(filename)}\n"
            f"INSERT INTO _migrations (filename) VALUES ('{record}');\n"
            "COMMIT;"
        )
        try:
            conn.executescript(script)
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise MigrationError(f"Migration {filename} failed: {e}") from e
