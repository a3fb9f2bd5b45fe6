from datetime import timedelta

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
import pytest

from app.api import deps
from app.core.errors import INVALID_TOKEN_MESSAGE, NO_TOKEN_MESSAGE, register_exception_handlers
from app.schemas.auth import Identity, Role

from conftest import make_identity


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/protected")
    async def protected_route(identity: Identity = Depends(deps.get_current_identity)):
        return {"email": identity.email, "role": identity.role}

    @app.get("/super-only")
    async def super_only(identity: Identity = Depends(deps.require_roles(Role.SUPER_ADMIN))):
        return {"role": identity.role}

    return app


@pytest.fixture
def gate_client() -> TestClient:
    return TestClient(_build_app())


def test_missing_token_is_rejected(gate_client):
    resp = gate_client.get("/protected")

    assert resp.status_code == 401
    assert resp.json() == {"status": "error", "statusCode": 401, "message": NO_TOKEN_MESSAGE}


def test_bearer_header_is_accepted(gate_client, make_token):
    resp = gate_client.get("/protected", headers={"Authorization": f"Bearer {make_token('admin')}"})

    assert resp.status_code == 200
    assert resp.json() == {"email": "admin@example.com", "role": "admin"}


def test_cookie_is_accepted(gate_client, make_token):
    gate_client.cookies.set("token", make_token("staff"))

    resp = gate_client.get("/protected")

    assert resp.status_code == 200
    assert resp.json()["role"] == "staff"


def test_cookie_takes_precedence_over_header(gate_client, make_token):
    gate_client.cookies.set("token", make_token("staff"))

    resp = gate_client.get("/protected", headers={"Authorization": f"Bearer {make_token('admin')}"})

    assert resp.json()["role"] == "staff"


def test_invalid_cookie_is_not_rescued_by_header(gate_client, make_token):
    gate_client.cookies.set("token", "not-a-token")

    resp = gate_client.get("/protected", headers={"Authorization": f"Bearer {make_token('admin')}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == INVALID_TOKEN_MESSAGE


def test_non_bearer_scheme_counts_as_no_token(gate_client, make_token):
    resp = gate_client.get("/protected", headers={"Authorization": f"Basic {make_token('admin')}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == NO_TOKEN_MESSAGE


def test_tampered_token_is_invalid(gate_client, make_token):
    token = make_token("staff")
    tampered = token[:-2] + ("AA" if not token.endswith("AA") else "BB")

    resp = gate_client.get("/protected", headers={"Authorization": f"Bearer {tampered}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == INVALID_TOKEN_MESSAGE


def test_expired_token_is_invalid(gate_client, make_token):
    token = make_token("staff", ttl=timedelta(seconds=-1))

    resp = gate_client.get("/protected", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["message"] == INVALID_TOKEN_MESSAGE
    assert INVALID_TOKEN_MESSAGE != NO_TOKEN_MESSAGE


@pytest.mark.parametrize("role,expected", [("staff", 403), ("admin", 403), ("superAdmin", 200)])
def test_role_gate(gate_client, make_token, role, expected):
    resp = gate_client.get("/super-only", headers={"Authorization": f"Bearer {make_token(role)}"})

    assert resp.status_code == expected


def test_role_gate_runs_after_auth(gate_client):
    assert gate_client.get("/super-only").status_code == 401


@pytest.mark.parametrize(
    "role,allowed,expected",
    [
        ("staff", {Role.SUPER_ADMIN}, False),
        ("superAdmin", {Role.SUPER_ADMIN}, True),
        ("admin", {"admin", "superAdmin"}, True),
        ("auditor", {Role.STAFF, Role.ADMIN, Role.SUPER_ADMIN}, False),
        ("admin", set(), False),
    ],
)
def test_check_role(role, allowed, expected):
    assert deps.check_role(make_identity(role), allowed) is expected


def test_extract_token_prefers_cookie():
    from fastapi.security import HTTPAuthorizationCredentials

    bearer = HTTPAuthorizationCredentials(scheme="Bearer", credentials="from-header")
    assert deps.extract_token("from-cookie", bearer) == "from-cookie"
    assert deps.extract_token(None, bearer) == "from-header"
    assert deps.extract_token("", None) is None
