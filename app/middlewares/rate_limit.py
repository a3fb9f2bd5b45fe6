from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.errors import throttled_response
from app.core.settings import settings

# Every /api route draws from this one bucket per client.
API_SCOPE = "api"


def is_limited_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


class ApiRateLimitMiddleware(BaseHTTPMiddleware):
    """Enforce one shared request budget per client across the whole /api prefix.

    Counting is done on the path prefix rather than per route handler, so
    unmatched /api paths are counted too and /health never is.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled or not is_limited_path(request.url.path):
            return await call_next(request)

        item = parse(settings.rate_limit)
        if not limiter.limiter.hit(item, get_remote_address(request), API_SCOPE):
            return throttled_response(request)
        return await call_next(request)
