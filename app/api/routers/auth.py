import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.api.auth_utils import constant_time_verify
from app.core.errors import INVALID_CREDENTIALS_MESSAGE, BadRequest, Unauthorized
from app.core.logging import get_audit_logger
from app.core.response_envelope import success_envelope
from app.core.security import create_session_token
from app.core.settings import settings
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.loan import MessageResponse
from app.services.staff_store import StaffStore, get_staff_store

logger = logging.getLogger(__name__)
audit_logger = get_audit_logger()

router = APIRouter(tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_token_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


@router.post("/login", response_model=LoginResponse, summary="Exchange credentials for a session token")
async def login(
    response: Response,
    credentials: Optional[LoginRequest] = None,
    staff_store: StaffStore = Depends(get_staff_store),
) -> dict:
    email = credentials.email if credentials else None
    password = credentials.password if credentials else None
    if not email or not password:
        raise BadRequest("Email and password are required")

    staff = staff_store.find_by_email(email)
    if not constant_time_verify(staff.password_hash if staff else None, password):
        audit_logger.info("Login failed for email=%s", email)
        raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)

    identity = staff.to_identity()
    token = create_session_token(identity)
    # Same token goes out twice: cookie for browsers, body for bearer clients
    _set_session_cookie(response, token)
    audit_logger.info("Login succeeded for staff id=%s role=%s", identity.id, identity.role)
    return success_envelope(
        message="Login successful",
        data={"user": identity.model_dump(), "token": token},
    )


@router.post("/logout", response_model=MessageResponse, summary="Clear the session cookie")
async def logout(response: Response) -> dict:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
    return success_envelope(message="Logout successful")
