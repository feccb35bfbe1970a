# ===== salonbook/api/middleware/rate_limit_middleware.py =====
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
import time

from salonbook.core.middleware import client_ip


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP rate limit for public booking submissions.

    Only POSTs under ``path_prefix`` are counted; slot browsing is not
    limited. State is per process.
    """

    def __init__(
            self,
            app,
            requests_per_minute: int = 30,
            path_prefix: str = "/api/v1/public/"
    ):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.path_prefix = path_prefix
        self.request_times = {}

    async def dispatch(self, request: Request, call_next):
        if (
                self.requests_per_minute <= 0
                or request.method != "POST"
                or not request.url.path.startswith(self.path_prefix)
        ):
            return await call_next(request)

        ip = client_ip(request)
        current_time = time.time()

        # Sliding window of the last 60 seconds
        recent = [
            t for t in self.request_times.get(ip, [])
            if current_time - t < 60.0
        ]

        if len(recent) >= self.requests_per_minute:
            self.request_times[ip] = recent
            retry_after = max(1, int(60 - (current_time - recent[0])))
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many booking attempts. Please wait a moment.",
                    "reason": "rate_limited",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        recent.append(current_time)
        self.request_times[ip] = recent

        return await call_next(request)
