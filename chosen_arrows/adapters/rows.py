"""Row helpers shared by the backend adapters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any
from uuid import uuid4

from chosen_arrows.core.ports.db import BackendError, Order, Row
from chosen_arrows.domain.schema import TableSpec


def check_columns(spec: TableSpec, columns: Sequence[str]) -> None:
    unknown = [c for c in columns if c not in spec.columns]
    if unknown:
        raise BackendError(
            f"column {unknown[0]!r} of relation {spec.name!r} does not exist",
            code="42703",
        )


def new_row(spec: TableSpec, values: Mapping[str, Any], now: datetime) -> Row:
    """Complete an insert payload with id, defaults and timestamps."""
    check_columns(spec, list(values))
    row: Row = {column: None for column in spec.columns}
    row.update(spec.defaults)
    row.update(values)
    if spec.generated_id and not row.get("id"):
        row["id"] = str(uuid4())
    if not row.get("id"):
        raise BackendError(f'null value in column "id" of relation "{spec.name}"', code="23502")
    stamp = now.isoformat()
    if spec.has_created_at and not row.get("created_at"):
        row["created_at"] = stamp
    if spec.has_updated_at and not row.get("updated_at"):
        row["updated_at"] = stamp
    return row


def matches(
    row: Row,
    eq: Mapping[str, Any] | None = None,
    neq: Mapping[str, Any] | None = None,
    in_: Mapping[str, Sequence[Any]] | None = None,
) -> bool:
    for column, value in (eq or {}).items():
        if row.get(column) != value:
            return False
    for column, value in (neq or {}).items():
        if row.get(column) == value:
            return False
    for column, values in (in_ or {}).items():
        if row.get(column) not in values:
            return False
    return True


def sort_rows(rows: list[Row], order: Sequence[Order]) -> list[Row]:
    """Sort by several keys; NULLs sort last ascending and first descending."""
    result = list(rows)
    for column, direction in reversed(order):
        result.sort(
            key=lambda r, c=column: (r.get(c) is None, r.get(c)),
            reverse=direction == "desc",
        )
    return result


def project(row: Row, columns: Sequence[str] | None) -> Row:
    if not columns:
        return dict(row)
    return {column: row.get(column) for column in columns}
