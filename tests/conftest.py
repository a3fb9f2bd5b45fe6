"""Global test fixtures and shared test infrastructure.

Provides:
- Environment variable defaults (must be set before any app import)
- In-memory staff/loan stores injected via dependency overrides
- Token factories for each role
- A fresh in-memory rate limit counter per test
"""

from __future__ import annotations

import os

# Environment defaults must be set before importing the app, which triggers
# pydantic Settings validation on import.
os.environ.setdefault("JWT_SECRET", "test-secret-key-boot")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import timedelta
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.security import create_session_token
from app.main import app
from app.schemas.auth import Identity
from app.services.loan_store import LoanStore, get_loan_store
from app.services.staff_store import StaffStore, get_staff_store


STAFF_ENTRIES: list[dict[str, Any]] = [
    {"id": 1, "name": "Sam Staff", "email": "staff@example.com", "password": "staff-pass", "role": "staff"},
    {"id": 2, "name": "Ada Admin", "email": "admin@example.com", "password": "admin-pass", "role": "admin"},
    {
        "id": 3,
        "name": "Sid Super",
        "email": "super@example.com",
        "password": "super-pass",
        "role": "superAdmin",
    },
]

LOAN_ENTRIES: list[dict[str, Any]] = [
    {
        "id": "L-1",
        "status": "active",
        "maturityDate": "2099-01-31",
        "applicant": {"name": "Foo Bar", "email": "Foo@Bar.com", "phone": "555-0001", "totalLoan": 1000},
    },
    {
        "id": "L-2",
        "status": "pending",
        "maturityDate": "2001-05-01",
        "applicant": {"name": "Foo Bar", "email": "foo@bar.com", "phone": "555-0001", "totalLoan": 2500.75},
    },
    {
        "id": "L-3",
        "status": "active",
        "maturityDate": "2010-12-31",
        "region": "north",
        "applicant": {"name": "Jane Roe", "email": "jane@roe.org", "totalLoan": 300},
    },
    {
        "id": "L-4",
        "status": "closed",
        "maturityDate": "2098-07-04",
        "applicant": {"name": "John Doe", "email": "john@doe.net", "totalLoan": 42},
    },
]

PASSWORDS = {entry["role"]: entry["password"] for entry in STAFF_ENTRIES}


def make_identity(role: str = "staff", **overrides: Any) -> Identity:
    entry = next((e for e in STAFF_ENTRIES if e["role"] == role), STAFF_ENTRIES[0])
    defaults: dict[str, Any] = dict(id=entry["id"], name=entry["name"], email=entry["email"], role=role)
    defaults.update(overrides)
    return Identity(**defaults)


# ---------------------------------------------------------------------------
# Shared pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _disable_rate_limiter():
    """Give every test its own in-memory rate limit counters."""
    original = app.state.limiter
    app.state.limiter = Limiter(
        key_func=get_remote_address,
        storage_uri="memory://",
    )
    yield
    app.state.limiter = original


@pytest.fixture(scope="session")
def staff_store() -> StaffStore:
    return StaffStore.from_raw(STAFF_ENTRIES)


@pytest.fixture
def loan_store() -> LoanStore:
    return LoanStore.from_raw(LOAN_ENTRIES)


@pytest.fixture
def override_stores(staff_store, loan_store):
    app.dependency_overrides[get_staff_store] = lambda: staff_store
    app.dependency_overrides[get_loan_store] = lambda: loan_store

    yield

    app.dependency_overrides.clear()


@pytest.fixture
def client(override_stores) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(role: str = "staff", ttl: timedelta | None = None, **overrides: Any) -> str:
        return create_session_token(make_identity(role, **overrides), ttl=ttl)

    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[[str], dict[str, str]]:
    def _headers(role: str = "staff") -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(role)}"}

    return _headers
