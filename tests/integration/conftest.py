from pathlib import Path

import pytest

from chosen_arrows.adapters.sqlite.migrator import SQLiteMigrator
from chosen_arrows.adapters.sqlite.tables import SQLitePrivilegedTables, SQLiteTables


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    path = str(tmp_path / "arrows.db")
    SQLiteMigrator(path).run_migrations()
    return path


@pytest.fixture
def sqlite_db(db_path: str, clock) -> SQLiteTables:
    return SQLiteTables(db_path, clock=clock)


@pytest.fixture
def sqlite_privileged(db_path: str) -> SQLitePrivilegedTables:
    return SQLitePrivilegedTables(db_path)
