from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.core.settings import settings
from app.schemas.auth import Identity


class InvalidToken(ValueError):
    pass


class TokenExpired(InvalidToken):
    pass


_IDENTITY_CLAIMS = ("id", "name", "email", "role")


@lru_cache(maxsize=1)
def _pwd_context() -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def get_password_hash(password: str) -> str:
    return _pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _pwd_context().verify(plain_password, hashed_password)


def session_token_ttl() -> timedelta:
    return timedelta(minutes=settings.session_token_ttl_minutes)


def create_session_token(
    identity: Identity,
    secret: str | None = None,
    ttl: timedelta | None = None,
) -> str:
    """Sign the identity claims into a time-limited session token."""
    issued_at = datetime.now(timezone.utc)
    to_encode: dict[str, Any] = identity.model_dump(include=set(_IDENTITY_CLAIMS))
    to_encode["iat"] = issued_at
    to_encode["exp"] = issued_at + (ttl or session_token_ttl())
    return jwt.encode(to_encode, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, secret: str | None = None) -> Identity:
    """Verify signature and expiry, then return the embedded identity verbatim.

    Raises ``TokenExpired`` once the expiry instant is reached and
    ``InvalidToken`` for any signature, format or claim problem.
    """
    try:
        payload = jwt.decode(token, secret or settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token expired") from exc
    except JWTError as exc:
        raise InvalidToken("Invalid token") from exc

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise InvalidToken("Invalid token")
    if datetime.now(timezone.utc).timestamp() >= exp:
        raise TokenExpired("Token expired")

    try:
        return Identity.model_validate({claim: payload.get(claim) for claim in _IDENTITY_CLAIMS})
    except ValidationError as exc:
        raise InvalidToken("Invalid token") from exc
