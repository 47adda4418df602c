"""
Shared setup for HTTP tests.

The real application is used with its backends swapped for in-memory fakes
through ``dependency_overrides``. Clients are created without entering the
lifespan, so no database file or rules path is touched.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from chosen_arrows.adapters.page_cache import PageCache
from chosen_arrows.adapters.payment_stub import SimulatedPaymentProcessor
from chosen_arrows.api import deps
from chosen_arrows.api.main import app as main_app


@pytest.fixture
def page_cache() -> PageCache:
    return PageCache()


@pytest.fixture
def revalidated(page_cache: PageCache) -> list[str]:
    paths: list[str] = []
    page_cache.on_revalidate(paths.append)
    return paths


@pytest.fixture
def payments() -> SimulatedPaymentProcessor:
    return SimulatedPaymentProcessor(delay_seconds=0, failure_rate=0.0, seed=7)


@pytest.fixture
def app(
    db, privileged, identity, storage, clock, rules, page_cache, payments
) -> Iterator[FastAPI]:
    main_app.dependency_overrides.update(
        {
            deps.get_rules: lambda: rules,
            deps.get_clock: lambda: clock,
            deps.get_db: lambda: db,
            deps.get_privileged_db: lambda: privileged,
            deps.get_identity: lambda: identity,
            deps.get_storage: lambda: storage,
            deps.get_page_cache: lambda: page_cache,
            deps.get_revalidator: lambda: page_cache,
            deps.get_payments: lambda: payments,
        }
    )
    yield main_app
    main_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client(app: FastAPI, admin_gate) -> TestClient:
    """Client whose every request passes the admin gate."""
    app.dependency_overrides[deps.get_gate] = lambda: admin_gate
    return TestClient(app)


@pytest.fixture
def admin_id(db, identity) -> str:
    """A registered identity with an admin row; signs in with grace@chosenarrows.org / s3cret."""
    user = identity.add("grace@chosenarrows.org", "s3cret")
    db.insert("auth_users", [{"id": user.id, "email": user.email, "password_hash": "x"}])
    db.insert("admin_users", [{"id": user.id, "full_name": "Grace Admin"}])
    return user.id
