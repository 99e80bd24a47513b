import logging
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per incoming request: [timestamp] METHOD /path
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        now = datetime.now(timezone.utc).isoformat()
        logger.info(f"[{now}] {request.method} {request.url.path}")
        return await call_next(request)
