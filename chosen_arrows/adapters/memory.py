"""
In-memory backend.

Implements DataPort and PrivilegedDataPort over plain dicts with the same
constraints the hosted backend enforces: unique keys, foreign keys with
cascading deletes, and transactional rollback. Used by the test suite and for
running the app without a database file.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from chosen_arrows.adapters.clock import SystemClock
from chosen_arrows.adapters.rows import check_columns, matches, new_row, project, sort_rows
from chosen_arrows.core.ports.db import BackendError, Order, Row
from chosen_arrows.core.ports.time import TimePort
from chosen_arrows.domain.schema import TABLES, TableSpec, child_tables, get_table


@dataclass
class _Failure:
    verb: str
    table: str
    skip: int
    message: str


class InMemoryStore:
    """Table storage shared by the request-scoped and privileged ports."""

    def __init__(self) -> None:
        self.tables: dict[str, list[Row]] = {name: [] for name in TABLES}
        self.lock = threading.RLock()


class InMemoryTables:
    """DataPort over an InMemoryStore."""

    def __init__(self, store: InMemoryStore | None = None, clock: TimePort | None = None) -> None:
        self.store = store or InMemoryStore()
        self._clock = clock or SystemClock()
        self._tx_depth = 0
        self._failures: list[_Failure] = []

    # --- failure injection ---

    def fail_on(
        self, verb: str, table: str, *, skip: int = 0, message: str = "backend unavailable"
    ) -> None:
        """Make the next matching call (after ``skip`` successful ones) raise BackendError."""
        self._failures.append(_Failure(verb=verb, table=table, skip=skip, message=message))

    def _maybe_fail(self, verb: str, table: str) -> None:
        for failure in self._failures:
            if failure.verb == verb and failure.table == table:
                if failure.skip > 0:
                    failure.skip -= 1
                    return
                self._failures.remove(failure)
                raise BackendError(failure.message)

    # --- helpers ---

    def _rows(self, table: str) -> tuple[TableSpec, list[Row]]:
        try:
            spec = get_table(table)
        except KeyError:
            raise BackendError(f'relation "{table}" does not exist', code="42P01") from None
        return spec, self.store.tables[table]

    def _check_unique(self, spec: TableSpec, rows: list[Row], candidate: Row) -> None:
        keys = [("id",), *spec.unique]
        for key in keys:
            values = tuple(candidate.get(c) for c in key)
            if any(v is None for v in values):
                continue
            for existing in rows:
                if existing is candidate:
                    continue
                if tuple(existing.get(c) for c in key) == values:
                    constraint = f"{spec.name}_{'_'.join(key)}_key"
                    raise BackendError(
                        f'duplicate key value violates unique constraint "{constraint}"',
                        code="23505",
                    )

    def _check_foreign_keys(self, spec: TableSpec, candidate: Row) -> None:
        for column, parent in spec.foreign_keys.items():
            value = candidate.get(column)
            if value is None:
                continue
            if not any(r["id"] == value for r in self.store.tables[parent]):
                raise BackendError(
                    f'insert or update on table "{spec.name}" violates foreign key constraint '
                    f'"{spec.name}_{column}_fkey"',
                    code="23503",
                )

    def _cascade(self, table: str, ids: set[Any]) -> None:
        for child, column in child_tables(table):
            rows = self.store.tables[child.name]
            doomed = [r for r in rows if r.get(column) in ids]
            if not doomed:
                continue
            self.store.tables[child.name] = [r for r in rows if r.get(column) not in ids]
            self._cascade(child.name, {r["id"] for r in doomed})

    # --- DataPort ---

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
        self._maybe_fail("select", table)
        with self.store.lock:
            spec, rows = self._rows(table)
            check_columns(spec, [*(columns or ()), *(eq or {}), *(neq or {}), *(in_ or {})])
            found = [r for r in rows if matches(r, eq, neq, in_)]
            found = sort_rows(found, order)
            if limit is not None:
                found = found[:limit]
            return [copy.deepcopy(project(r, columns)) for r in found]

    def count(self, table: str, *, eq: Mapping[str, Any] | None = None) -> int:
        self._maybe_fail("count", table)
        with self.store.lock:
            _, rows = self._rows(table)
            return sum(1 for r in rows if matches(r, eq))

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        self._maybe_fail("insert", table)
        with self.store.lock:
            spec, existing = self._rows(table)
            now = self._clock.now_utc()
            prepared = [new_row(spec, row, now) for row in rows]
            staged = list(existing)
            for row in prepared:
                self._check_foreign_keys(spec, row)
                staged.append(row)
                self._check_unique(spec, staged, row)
            self.store.tables[table] = staged
            return [copy.deepcopy(r) for r in prepared]

    def update(
        self,
        table: str,
        values: Row,
        *,
        eq: Mapping[str, Any],
        neq: Mapping[str, Any] | None = None,
    ) -> list[Row]:
        self._maybe_fail("update", table)
        with self.store.lock:
            spec, rows = self._rows(table)
            check_columns(spec, list(values))
            staged = copy.deepcopy(rows)
            changes = dict(values)
            if spec.has_updated_at and "updated_at" not in changes:
                changes["updated_at"] = self._clock.now_utc().isoformat()
            updated: list[Row] = []
            for row in staged:
                if matches(row, eq, neq):
                    row.update(changes)
                    self._check_foreign_keys(spec, row)
                    self._check_unique(spec, staged, row)
                    updated.append(row)
            self.store.tables[table] = staged
            return [copy.deepcopy(r) for r in updated]

    def delete(self, table: str, *, eq: Mapping[str, Any]) -> int:
        self._maybe_fail("delete", table)
        with self.store.lock:
            _, rows = self._rows(table)
            doomed = [r for r in rows if matches(r, eq)]
            if not doomed:
                return 0
            self.store.tables[table] = [r for r in rows if not matches(r, eq)]
            self._cascade(table, {r["id"] for r in doomed})
            return len(doomed)

    def upsert(
        self,
        table: str,
        rows: Sequence[Row],
        *,
        on_conflict: Sequence[str],
    ) -> list[Row]:
        self._maybe_fail("upsert", table)
        with self.store.lock:
            spec, existing = self._rows(table)
            check_columns(spec, on_conflict)
            now = self._clock.now_utc()
            staged = copy.deepcopy(existing)
            result: list[Row] = []
            for values in rows:
                key = {column: values.get(column) for column in on_conflict}
                current = next((r for r in staged if matches(r, key)), None)
                if current is None:
                    row = new_row(spec, values, now)
                    self._check_foreign_keys(spec, row)
                    staged.append(row)
                    self._check_unique(spec, staged, row)
                    result.append(row)
                    continue
                check_columns(spec, list(values))
                current.update({k: v for k, v in values.items() if k not in ("id", "created_at")})
                if spec.has_updated_at and "updated_at" not in values:
                    current["updated_at"] = now.isoformat()
                self._check_unique(spec, staged, current)
                result.append(current)
            self.store.tables[table] = staged
            return [copy.deepcopy(r) for r in result]

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self.store.lock:
            snapshot = copy.deepcopy(self.store.tables) if self._tx_depth == 0 else None
            self._tx_depth += 1
            try:
                yield
            except BaseException:
                if snapshot is not None:
                    self.store.tables = snapshot
                raise
            finally:
                self._tx_depth -= 1


class InMemoryPrivilegedTables:
    """PrivilegedDataPort over an InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def fetch_admin_user(self, user_id: str) -> Row | None:
        with self.store.lock:
            for row in self.store.tables["admin_users"]:
                if row["id"] == user_id:
                    return dict(row)
        return None

    def record_login(self, user_id: str, at: datetime) -> None:
        with self.store.lock:
            for row in self.store.tables["admin_users"]:
                if row["id"] == user_id:
                    row["last_login"] = at.isoformat()
