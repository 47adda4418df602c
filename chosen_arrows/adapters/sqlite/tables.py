"""
SQLite backend.

Implements DataPort over the schema created by ``migrations/``. Each call
opens its own connection, except inside ``transaction()`` where the calling
thread reuses one connection until the block exits. Unique keys, cascading
foreign keys and the audit log triggers live in the database itself.
"""

import json
import logging
import sqlite3
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from chosen_arrows.adapters.clock import SystemClock
from chosen_arrows.adapters.rows import check_columns, new_row
from chosen_arrows.core.ports.db import BackendError, Order, Row
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.schema import TableSpec, get_table

logger = logging.getLogger(__name__)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _backend_error(exc: sqlite3.Error) -> BackendError:
    message = str(exc)
    code = None
    if isinstance(exc, sqlite3.IntegrityError):
        if "UNIQUE" in message:
            code = "23505"
        elif "FOREIGN KEY" in message:
            code = "23503"
        elif "NOT NULL" in message:
            code = "23502"
    elif "no such column" in message:
        code = "42703"
    elif "no such table" in message:
        code = "42P01"
    return BackendError(message, code=code)


def _encode(spec: TableSpec, row: Mapping[str, Any]) -> dict[str, Any]:
    encoded = {}
    for column, value in row.items():
        if value is not None and column in spec.json_columns:
            value = json.dumps(value)
        elif value is not None and column in spec.bool_columns:
            value = 1 if value else 0
        encoded[column] = value
    return encoded


def _decode(spec: TableSpec, row: dict[str, Any]) -> Row:
    for column in spec.json_columns:
        if row.get(column) is not None:
            row[column] = json.loads(row[column])
    for column in spec.bool_columns:
        if row.get(column) is not None:
            row[column] = bool(row[column])
    return row


def _where(
    eq: Mapping[str, Any] | None,
    neq: Mapping[str, Any] | None = None,
    in_: Mapping[str, Sequence[Any]] | None = None,
    *,
    spec: TableSpec,
) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    for column, value in _encode(spec, eq or {}).items():
        if value is None:
            clauses.append(f"{column} IS NULL")
        else:
            clauses.append(f"{column} = ?")
            params.append(value)
    for column, value in _encode(spec, neq or {}).items():
        if value is None:
            clauses.append(f"{column} IS NOT NULL")
        else:
            clauses.append(f"{column} IS NOT ?")
            params.append(value)
    for column, values in (in_ or {}).items():
        if not values:
            clauses.append("0")
            continue
        clauses.append(f"{column} IN ({', '.join('?' for _ in values)})")
        params.extend(_encode(spec, {column: v})[column] for v in values)
    if not clauses:
        return "", params
    return " WHERE " + " AND ".join(clauses), params


def _order_by(order: Sequence[Order]) -> str:
    if not order:
        return ""
    parts = []
    for column, direction in order:
        if direction == "desc":
            parts.append(f"{column} DESC NULLS FIRST")
        else:
            parts.append(f"{column} ASC NULLS LAST")
    return " ORDER BY " + ", ".join(parts)


class SQLiteTables:
    def __init__(self, db_path: str, clock: TimePort | None = None):
        self.db_path = db_path
        self._clock = clock or SystemClock()
        self._local = threading.local()

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    @contextmanager
    def _read(self) -> Iterator[sqlite3.Connection]:
        held = getattr(self._local, "conn", None)
        conn = held if held is not None else self._get_conn()
        try:
            yield conn
        except sqlite3.Error as e:
            raise _backend_error(e) from e
        finally:
            if held is None:
                conn.close()

    @contextmanager
    def _write(self) -> Iterator[sqlite3.Connection]:
        held = getattr(self._local, "conn", None)
        if held is not None:
            try:
                yield held
            except sqlite3.Error as e:
                raise _backend_error(e) from e
            return
        conn = self._get_conn()
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise _backend_error(e) from e
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    def select(
        self,
        table: str,
        *,
        columns: Sequence[str] | None = None,
        eq: Mapping[str, Any] | None = None,
        neq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Sequence[Any]] | None = None,
        order: Sequence[Order] = (),
        limit: int | None = None,
    ) -> list[Row]:
        spec = self._spec(table)
        check_columns(spec, [*(columns or ()), *(eq or {}), *(neq or {}), *(in_ or {})])
        check_columns(spec, [column for column, _ in order])
        where, params = _where(eq, neq, in_, spec=spec)
        projection = ", ".join(columns) if columns else "*"
        sql = f"SELECT {projection} FROM {table}{where}{_order_by(order)}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        with self._read() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_decode(spec, row) for row in rows]

    def count(self, table: str, *, eq: Mapping[str, Any] | None = None) -> int:
        spec = self._spec(table)
        check_columns(spec, list(eq or {}))
        where, params = _where(eq, spec=spec)
        with self._read() as conn:
            row = conn.execute(f"SELECT COUNT(*) AS n FROM {table}{where}", params).fetchone()
        return int(row["n"])

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        spec = self._spec(table)
        now = self._clock.now_utc()
        prepared = [new_row(spec, row, now) for row in rows]
        with self._write() as conn:
            for row in prepared:
                encoded = _encode(spec, row)
                names = ", ".join(encoded)
                marks = ", ".join("?" for _ in encoded)
                conn.execute(
                    f"INSERT INTO {table} ({names}) VALUES ({marks})", list(encoded.values())
                )
        return prepared

    def update(
        self,
        table: str,
        values: Row,
        *,
        eq: Mapping[str, Any],
        neq: Mapping[str, Any] | None = None,
    ) -> list[Row]:
        spec = self._spec(table)
        check_columns(spec, [*values, *eq, *(neq or {})])
        changes = dict(values)
        if spec.has_updated_at and "updated_at" not in changes:
            changes["updated_at"] = self._clock.now_utc().isoformat()
        where, params = _where(eq, neq, spec=spec)
        encoded = _encode(spec, changes)
        assignments = ", ".join(f"{column} = ?" for column in encoded)
        with self._write() as conn:
            found = conn.execute(f"SELECT id FROM {table}{where}", params).fetchall()
            ids = [r["id"] for r in found]
            if not ids:
                return []
            conn.execute(f"UPDATE {table} SET {assignments}{where}", [*encoded.values(), *params])
            marks = ", ".join("?" for _ in ids)
            rows = conn.execute(f"SELECT * FROM {table} WHERE id IN ({marks})", ids).fetchall()
        return [_decode(spec, row) for row in rows]

    def delete(self, table: str, *, eq: Mapping[str, Any]) -> int:
        spec = self._spec(table)
        check_columns(spec, list(eq))
        where, params = _where(eq, spec=spec)
        with self._write() as conn:
            deleted = conn.execute(f"DELETE FROM {table}{where}", params).rowcount
        return deleted

    def upsert(
        self,
        table: str,
        rows: Sequence[Row],
        *,
        on_conflict: Sequence[str],
    ) -> list[Row]:
        spec = self._spec(table)
        check_columns(spec, on_conflict)
        now = self._clock.now_utc()
        result: list[Row] = []
        with self._write() as conn:
            for values in rows:
                row = _encode(spec, new_row(spec, values, now))
                names = ", ".join(row)
                marks = ", ".join("?" for _ in row)
                targets = [c for c in values if c not in ("id", "created_at", *on_conflict)]
                if spec.has_updated_at and "updated_at" not in targets:
                    targets.append("updated_at")
                if not targets:
                    targets = [on_conflict[0]]
                assignments = ", ".join(f"{c} = excluded.{c}" for c in targets)
                conn.execute(
                    f"INSERT INTO {table} ({names}) VALUES ({marks}) "
                    f"ON CONFLICT({', '.join(on_conflict)}) DO UPDATE SET {assignments}",
                    list(row.values()),
                )
                where, params = _where({c: values.get(c) for c in on_conflict}, spec=spec)
                stored = conn.execute(f"SELECT * FROM {table}{where}", params).fetchone()
                result.append(_decode(spec, stored))
        return result

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if getattr(self._local, "conn", None) is not None:
            yield
            return
        conn = self._get_conn()
        self._local.conn = conn
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise _backend_error(e) from e
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            self._local.conn = None
            conn.close()

    def _spec(self, table: str) -> TableSpec:
        try:
            return get_table(table)
        except KeyError:
            raise BackendError(f'relation "{table}" does not exist', code="42P01") from None


class SQLitePrivilegedTables:
    """Service-role access to admin_users."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def fetch_admin_user(self, user_id: str) -> Row | None:
        conn = self._get_conn()
        try:
            return conn.execute("SELECT * FROM admin_users WHERE id = ?", (user_id,)).fetchone()
        except sqlite3.Error as e:
            raise _backend_error(e) from e
        finally:
            conn.close()

    def record_login(self, user_id: str, at: datetime) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                "UPDATE admin_users SET last_login = ? WHERE id = ?", (at.isoformat(), user_id)
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise _backend_error(e) from e
        finally:
            conn.close()
