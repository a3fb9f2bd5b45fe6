import logging
from typing import Iterable, Optional

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from app.core.context import set_actor_id
from app.core.errors import INVALID_TOKEN_MESSAGE, NO_TOKEN_MESSAGE, Forbidden, Unauthorized
from app.core.security import InvalidToken, TokenExpired, decode_session_token
from app.core.settings import settings
from app.schemas.auth import Identity, Role

logger = logging.getLogger(__name__)

cookie_scheme = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    cookie_token: Optional[str],
    bearer: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    """Cookie wins over the Authorization header."""
    if cookie_token:
        return cookie_token
    if bearer and bearer.credentials:
        return bearer.credentials
    return None


async def get_current_identity(
    cookie_token: Optional[str] = Depends(cookie_scheme),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    token = extract_token(cookie_token, bearer)
    if not token:
        raise Unauthorized(NO_TOKEN_MESSAGE)
    try:
        identity = decode_session_token(token)
    except TokenExpired as exc:
        logger.info("Rejected expired session token")
        raise Unauthorized(INVALID_TOKEN_MESSAGE) from exc
    except InvalidToken as exc:
        logger.info("Rejected invalid session token")
        raise Unauthorized(INVALID_TOKEN_MESSAGE) from exc
    set_actor_id(str(identity.id))
    return identity


def check_role(identity: Identity, allowed_roles: Iterable[Role | str]) -> bool:
    allowed = {role.value if isinstance(role, Role) else role for role in allowed_roles}
    return identity.role in allowed


def require_roles(*roles: Role | str):
    async def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if not check_role(identity, roles):
            logger.info("Role %s is not permitted here", identity.role)
            raise Forbidden()
        return identity

    return dependency
