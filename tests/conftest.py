# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.

The Supabase-backed stores are replaced by in-memory doubles that keep
the same interface (and, for the record store, the real subscription
fan-out), wired into the app through dependency_overrides.
"""

import copy
import uuid
from collections import defaultdict
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock

from core.credential_store import CredentialStore
from core.errors import CredentialError
from core.record_store import RecordStore
from core.utils import sanitize
from dependencies.auth import get_credential_store, get_record_store
from main import create_app
from models.auth import AuthContext, Session
from models.enums import CredentialErrorKind


# ============================================================
# IN-MEMORY RECORD STORE
# ============================================================
def _lookup(row: dict, key: str):
    """Resolve a plain column or a `column->>key` JSON path."""
    if "->>" in key:
        column, path = key.split("->>", 1)
        section = row.get(column) or {}
        return section.get(path) if isinstance(section, dict) else None
    return row.get(key)


def _matches(row: dict, filters: Optional[dict]) -> bool:
    return all(_lookup(row, k) == v for k, v in (filters or {}).items())


class InMemoryRecordStore(RecordStore):
    def __init__(self):
        super().__init__(client=None)
        self.tables: Dict[str, Dict[str, dict]] = defaultdict(dict)
        self.writes: List[tuple] = []

    def seed(self, collection, record: dict) -> str:
        """Insert without notifying or logging a write."""
        record = copy.deepcopy(record)
        record.setdefault("id", uuid.uuid4().hex)
        self.tables[str(collection)][record["id"]] = record
        return record["id"]

    def get_one(self, collection, record_id):
        row = self.tables[str(collection)].get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def get_all(self, collection, filters=None):
        return [
            copy.deepcopy(row)
            for row in self.tables[str(collection)].values()
            if _matches(row, filters)
        ]

    def count(self, collection, filters=None):
        return len(self.get_all(collection, filters))

    def count_ignore_case(self, collection, column, value):
        return sum(
            1 for row in self.tables[str(collection)].values()
            if str(row.get(column) or "").lower() == value.lower()
        )

    def create(self, collection, data, record_id=None):
        payload = sanitize(data)
        payload["id"] = record_id or uuid.uuid4().hex
        self.tables[str(collection)][payload["id"]] = payload
        self.writes.append(("create", str(collection), payload["id"]))
        self._notify(collection)
        return payload["id"]

    def update(self, collection, record_id, data):
        row = self.tables[str(collection)].setdefault(record_id, {"id": record_id})
        row.update(sanitize(data))
        self.writes.append(("update", str(collection), record_id))
        self._notify(collection)

    def delete(self, collection, record_id):
        self.tables[str(collection)].pop(record_id, None)
        self.writes.append(("delete", str(collection), record_id))
        self._notify(collection)


# ============================================================
# FAKE CREDENTIAL STORE
# ============================================================
class FakeCredentialStore(CredentialStore):
    """
    One client-side session at a time, like the real GoTrue client.
    Issued access tokens stay valid until signed out.
    """

    def __init__(self):
        super().__init__(client=None)
        self.users: Dict[str, dict] = {}
        self.tokens: Dict[str, Session] = {}
        self.current: Optional[Session] = None
        self.sign_outs: List[Optional[Session]] = []
        self.reset_emails: List[str] = []
        self.listeners: List = []

    def add_user(self, email: str, password: str, user_id: Optional[str] = None) -> str:
        user_id = user_id or uuid.uuid4().hex
        self.users[email.lower()] = {"id": user_id, "password": password}
        return user_id

    def _issue(self, email: str) -> Session:
        user = self.users[email]
        session = Session(
            user_id=user["id"],
            email=email,
            access_token=f"token-{uuid.uuid4().hex}",
            refresh_token="refresh",
        )
        self.tokens[session.access_token] = session
        self.current = session
        self._emit(session)
        return session

    def _emit(self, session: Optional[Session]) -> None:
        for callback in list(self.listeners):
            callback(session)

    def verify_credentials(self, email, password):
        user = self.users.get(email.lower())
        if user is None:
            raise CredentialError(CredentialErrorKind.not_found, "User not found")
        if user["password"] != password:
            raise CredentialError(CredentialErrorKind.wrong_password, "Wrong password")
        return self._issue(email.lower())

    def create_credential(self, email, password):
        email = email.lower()
        if email in self.users:
            raise CredentialError(CredentialErrorKind.email_in_use, "User already registered")
        if len(password) < 6:
            raise CredentialError(CredentialErrorKind.weak_password, "Password should be at least 6 characters")
        self.add_user(email, password)
        return self._issue(email)

    def current_session(self):
        return self.current

    def get_session_user(self, access_token):
        return self.tokens.get(access_token)

    def sign_out(self, session=None):
        self.sign_outs.append(session)
        target = session or self.current
        if target is not None:
            self.tokens.pop(target.access_token, None)
        if session is None or (self.current and self.current.access_token == session.access_token):
            self.current = None
            self._emit(None)

    def send_password_reset(self, email):
        self.reset_emails.append(email)

    def on_session_change(self, callback):
        self.listeners.append(callback)
        callback(self.current)
        return Mock(unsubscribe=lambda: self.listeners.remove(callback))


# ============================================================
# SEED HELPERS
# ============================================================
def admin_record(
    name="Admin",
    email="admin@example.com",
    role="super",
    status="active",
    assigned_office=None,
    **extra,
) -> dict:
    record = {
        "name": name,
        "email": email,
        "role": role,
        "status": status,
        "assigned_office": assigned_office,
        "login_count": 0,
    }
    record.update(extra)
    return record


def office_record(name="Lahore Main", city="Lahore", **extra) -> dict:
    record = {
        "basic_info": {"name": name, "city": city, "phone": "03001234567", "address": "Mall Road"},
        "location": {"coordinates": {"lat": 31.5, "lng": 74.3}, "service_areas": [], "radius": 20},
        "details": {"type": "branch", "status": "active", "facilities": []},
    }
    record.update(extra)
    return record


def worker_record(name="Ali", category_id="cat-1", office_id="office-1", status="pending", **extra) -> dict:
    record = {
        "personal_info": {"name": name, "phone": "03001234567"},
        "work_info": {"category_id": category_id, "office_id": office_id, "skills": []},
        "verification": {"status": status},
    }
    record.update(extra)
    return record


# ============================================================
# FIXTURES
# ============================================================
@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def credential_store() -> FakeCredentialStore:
    return FakeCredentialStore()


@pytest.fixture
def office_id(record_store) -> str:
    return record_store.seed("offices", office_record(id="office-1"))


@pytest.fixture
def category_id(record_store) -> str:
    return record_store.seed("work_categories", {"id": "cat-1", "name": "Plumber", "icon": "🔧", "status": "active"})


@pytest.fixture
def make_admin(record_store, credential_store):
    """Seed an identity-provider user plus its admin record."""

    def factory(email="super@example.com", password="secret123", role="super", status="active", **extra):
        user_id = credential_store.add_user(email, password)
        record_store.seed("admins", admin_record(id=user_id, email=email, role=role, status=status, **extra))
        return user_id

    return factory


@pytest.fixture
def super_context(make_admin) -> AuthContext:
    user_id = make_admin(email="super@example.com", name="Sara Super")
    return AuthContext(user_id=user_id, role="super", name="Sara Super", email="super@example.com")


@pytest.fixture
def sub_context(make_admin, office_id) -> AuthContext:
    user_id = make_admin(
        email="sub@example.com",
        role="sub",
        name="Bilal Sub",
        assigned_office={"office_id": office_id, "office_name": "Lahore Main", "office_city": "Lahore"},
    )
    return AuthContext(user_id=user_id, role="sub", name="Bilal Sub", email="sub@example.com")


@pytest.fixture(scope="function")
def app(record_store, credential_store):
    """Create a test FastAPI application instance wired to the in-memory stores."""
    app = create_app(validate_config=False)
    app.state.record_store = record_store
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_credential_store] = lambda: credential_store
    return app


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(credential_store):
    """Bearer headers for a seeded admin."""

    def factory(email="super@example.com", password="secret123") -> dict:
        session = credential_store.verify_credentials(email, password)
        return {"Authorization": f"Bearer {session.access_token}"}

    return factory


@pytest.fixture
def mock_supabase_client():
    """Create a mock Supabase client."""
    mock_client = Mock()
    mock_table = Mock()
    mock_client.table.return_value = mock_table
    return mock_client


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Reset the in-memory rate limiter before each test."""
    from core.rate_limiter import reset_rate_limits as reset
    reset()
    yield
    reset()
