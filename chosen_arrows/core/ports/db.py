"""
Backend data ports.

Protocol-based interfaces for the hosted relational backend.
Implementations: SQLite (local), in-memory (tests).

Two ports are deliberately separate:

- DataPort is the request-scoped, table-oriented query interface every
  data-access function receives.
- PrivilegedDataPort is the service-role credential. It bypasses row-level
  restrictions and is only handed to the admin gate, so it exposes nothing
  but the admin-role lookups the gate needs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Literal, Protocol

Row = dict[str, Any]
Order = tuple[str, Literal["asc", "desc"]]


class BackendError(Exception):
    """A backend query or mutation failed."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class DataPort(Protocol):
    """
    Table-oriented query/mutation verbs.

    Filters are equality (``eq``), inequality (``neq``) and membership (``in_``).
    Every verb raises BackendError on failure.
    """

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
        """Rows matching all filters, in the given order."""
        ...

    def count(self, table: str, *, eq: Mapping[str, Any] | None = None) -> int:
        """Count-only query."""
        ...

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        """Insert rows; returns them with generated ids and timestamps."""
        ...

    def update(
        self,
        table: str,
        values: Row,
        *,
        eq: Mapping[str, Any],
        neq: Mapping[str, Any] | None = None,
    ) -> list[Row]:
        """Update matching rows; returns the updated rows."""
        ...

    def delete(self, table: str, *, eq: Mapping[str, Any]) -> int:
        """Delete matching rows (cascading to child tables); returns count."""
        ...

    def upsert(
        self,
        table: str,
        rows: Sequence[Row],
        *,
        on_conflict: Sequence[str],
    ) -> list[Row]:
        """Insert, or update the row sharing the ``on_conflict`` columns."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """All writes inside the block commit together or not at all."""
        ...


class PrivilegedDataPort(Protocol):
    """Service-role access to the admin-role table."""

    def fetch_admin_user(self, user_id: str) -> Row | None:
        """Admin-role row for an identity, or None."""
        ...

    def record_login(self, user_id: str, at: datetime) -> None:
        """Stamp last_login for an admin."""
        ...
