# api/interfaces/api/middleware/rate_limit.py
#
# Per-IP sliding window in front of the photo proxy.
#
# Design decisions:
#   - Only LIMITED_PREFIXES are counted. Document generation is CPU-only and
#     the browser calls it once per print; the proxy is the one route that
#     turns a request into outbound IO.
#   - Responses are plain text, like the proxy's own 400/403/502 errors, with
#     Retry-After pointing at the end of the current window.
#   - The limit is read from get_settings() per request so tests can change
#     it with cache_clear(). 0 = unlimited.
#   - Clients idle for a whole window are dropped by a sweep that runs at most
#     once per window, so the table only holds recently active IPs.
from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.infrastructure.config import get_settings

LIMITED_PREFIXES = ("/api/card-photo",)
WINDOW_SECONDS = 60.0


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: object, clock: Callable[[], float] = time.monotonic) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def _sweep(self, agora: float) -> None:
        if agora - self._last_sweep < WINDOW_SECONDS:
            return
        self._last_sweep = agora
        stale = [ip for ip, hits in self._hits.items() if not hits or agora - hits[-1] >= WINDOW_SECONDS]
        for ip in stale:
            del self._hits[ip]

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        limite = get_settings().rate_limit_per_minute
        if limite == 0 or not request.url.path.startswith(LIMITED_PREFIXES):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        agora = self._clock()
        self._sweep(agora)
        hits = self._hits.setdefault(client_ip, deque())
        while hits and agora - hits[0] >= WINDOW_SECONDS:
            hits.popleft()

        if len(hits) >= limite:
            retry_after = max(1, math.ceil(WINDOW_SECONDS - (agora - hits[0])))
            return PlainTextResponse(
                "Rate limit excedido. Tente novamente em instantes.",
                status_code=429,
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(agora)
        return await call_next(request)
