import time
from collections import defaultdict

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .errors import RateLimited
from .logging_config import generate_request_id, get_logger

logger = get_logger(__name__)

UNLIMITED_PATHS = ("/docs", "/openapi.json", "/health", "/redoc")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or generate_request_id()
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                status=500,
                duration_ms=round(duration_ms, 2),
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-Id"] = request_id

        logger.info(
            "request",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round(duration_ms, 2),
            user_sub=getattr(request.state, "user_sub", None),
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed one-minute window per client address, kept in process memory."""

    def __init__(self, app, max_per_minute: int = 120):
        super().__init__(app)
        self.max_per_minute = max_per_minute
        self._counts: dict[tuple[str, int], int] = defaultdict(int)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNLIMITED_PATHS or request.url.path.startswith("/docs/"):
            return await call_next(request)

        ip = request.client.host if request.client else "unknown"
        epoch_minute = int(time.time() // 60)

        # drop windows that have already closed
        for key in [k for k in self._counts if k[1] < epoch_minute]:
            del self._counts[key]

        key = (ip, epoch_minute)
        self._counts[key] += 1

        if self._counts[key] > self.max_per_minute:
            exc = RateLimited("Too many requests", details={"limitPerMinute": self.max_per_minute})
            return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())

        return await call_next(request)
