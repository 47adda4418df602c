from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import uuid4

import pytest

from chosen_arrows.adapters.clock import FixedClock
from chosen_arrows.adapters.memory import InMemoryPrivilegedTables, InMemoryStore, InMemoryTables
from chosen_arrows.components.auth import NOT_ADMIN, NOT_AUTHENTICATED, AdminAuthOutput
from chosen_arrows.core.ports.storage import StorageError, StoredObject
from chosen_arrows.domain.entities import AdminPrincipal, Identity
from chosen_arrows.rules.loader import load_rules
from chosen_arrows.rules.models import Rules

ROOT = Path(__file__).resolve().parent.parent
FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


# --- Fakes ---


class StaticGate:
    """Admin gate with a fixed answer."""

    def __init__(self, user: AdminPrincipal | None = None, error: str = NOT_AUTHENTICATED) -> None:
        self.user = user
        self.error = error
        self.calls = 0

    def check(self) -> AdminAuthOutput:
        self.calls += 1
        if self.user is not None:
            return AdminAuthOutput(user=self.user)
        return AdminAuthOutput(error=self.error)


class RecordingRevalidator:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def revalidate_path(self, path: str) -> None:
        self.paths.append(path)


class FakeIdentity:
    """Identity provider with plain-text passwords and opaque tokens."""

    def __init__(self) -> None:
        self.users: dict[str, tuple[Identity, str]] = {}
        self.tokens: dict[str, Identity] = {}

    def add(self, email: str, password: str, user_id: str | None = None) -> Identity:
        identity = Identity(id=user_id or str(uuid4()), email=email)
        self.users[email] = (identity, password)
        return identity

    def sign_in(self, email: str, password: str) -> Identity | None:
        entry = self.users.get(email)
        if entry is None or entry[1] != password:
            return None
        return entry[0]

    def resolve(self, token: str | None) -> Identity | None:
        return self.tokens.get(token or "")

    def issue_token(self, identity: Identity) -> str:
        token = f"token-{identity.id}"
        self.tokens[token] = identity
        return token


class InMemoryObjectStore:
    """ObjectStoragePort over a dict. ``fail_remove`` makes remove raise."""

    def __init__(self, clock: FixedClock, base_url: str = "http://test") -> None:
        self.clock = clock
        self.base_url = base_url
        self.objects: dict[str, tuple[bytes, str, datetime]] = {}
        self.fail_remove = False

    def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        cache_control: str = "3600",
        upsert: bool = False,
    ) -> str:
        if path in self.objects and not upsert:
            raise StorageError("The resource already exists")
        self.objects[path] = (data, content_type, self.clock.now_utc())
        return path

    def read(self, path: str) -> bytes:
        if path not in self.objects:
            raise FileNotFoundError(path)
        return self.objects[path][0]

    def list(self, folder: str, *, limit: int = 100, offset: int = 0) -> list[StoredObject]:
        prefix = f"{folder.strip('/')}/" if folder else ""
        found = [
            StoredObject(name=path[len(prefix) :], size=len(data), created_at=at, updated_at=at)
            for path, (data, _, at) in self.objects.items()
            if path.startswith(prefix) and "/" not in path[len(prefix) :]
        ]
        found.sort(key=lambda o: (o.created_at, o.name), reverse=True)
        return found[offset : offset + limit]

    def remove(self, paths: Sequence[str]) -> None:
        if self.fail_remove:
            raise StorageError("storage unavailable")
        for path in paths:
            self.objects.pop(path, None)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/images/{path}"


# --- Fixtures ---


@pytest.fixture
def rules() -> Rules:
    return load_rules(ROOT / "rules.yaml")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def db(store: InMemoryStore, clock: FixedClock) -> InMemoryTables:
    return InMemoryTables(store, clock=clock)


@pytest.fixture
def privileged(store: InMemoryStore) -> InMemoryPrivilegedTables:
    return InMemoryPrivilegedTables(store)


@pytest.fixture
def admin() -> AdminPrincipal:
    return AdminPrincipal(id="admin-1", role="admin", full_name="Grace Admin")


@pytest.fixture
def admin_gate(admin: AdminPrincipal) -> StaticGate:
    return StaticGate(user=admin)


@pytest.fixture
def anon_gate() -> StaticGate:
    return StaticGate(error=NOT_AUTHENTICATED)


@pytest.fixture
def non_admin_gate() -> StaticGate:
    return StaticGate(error=NOT_ADMIN)


@pytest.fixture
def revalidator() -> RecordingRevalidator:
    return RecordingRevalidator()


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def storage(clock: FixedClock) -> InMemoryObjectStore:
    return InMemoryObjectStore(clock)


@pytest.fixture
def tick(clock: FixedClock):
    """Advance the fixed clock so created_at ordering is deterministic."""

    def advance(seconds: int = 1) -> None:
        clock.advance(timedelta(seconds=seconds))

    return advance
