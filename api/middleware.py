"""
Middleware уровня приложения: ограничение частоты запросов,
заголовки безопасности и таймер.
"""

import logging
import math
import threading
import time
from typing import Dict, Optional, Tuple

from fastapi import FastAPI, Request, status

from api.errors import error_response

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class FixedWindowRateLimiter:
    """Не более ``max_requests`` запросов с одного ключа за окно ``window_seconds``"""

    def __init__(self, max_requests: int = 100, window_seconds: int = 15 * 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, now: Optional[float] = None) -> Tuple[bool, int]:
        """Учесть запрос; вернуть (разрешён ли, секунд до сброса окна)"""
        now = time.monotonic() if now is None else now
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            self._purge(now)
        retry_after = max(0, math.ceil(started + self.window_seconds - now))
        return count <= self.max_requests, retry_after

    def _purge(self, now: float) -> None:
        if len(self._windows) < 10000:
            return
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def client_ip(request: Request, proxy_header: Optional[str] = None) -> str:
    """Адрес клиента; за прокси берётся первый адрес из его заголовка"""
    if proxy_header:
        forwarded = request.headers.get(proxy_header, "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


def register_middleware(app: FastAPI, settings) -> None:
    """Подключить middleware приложения"""

    if settings.rate_limit_enabled:
        limiter = FixedWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
        app.state.rate_limiter = limiter

        @app.middleware("http")
        async def rate_limit(request: Request, call_next):
            ip = client_ip(request, settings.trusted_proxy_header)
            allowed, retry_after = limiter.hit(ip)
            if not allowed:
                logger.warning("Rate limit exceeded for %s", ip)
                return error_response(
                    status.HTTP_429_TOO_MANY_REQUESTS,
                    RATE_LIMIT_MESSAGE,
                    headers={"Retry-After": str(retry_after)},
                )
            return await call_next(request)

    if settings.security_headers_enabled:

        @app.middleware("http")
        async def security_headers(request: Request, call_next):
            response = await call_next(request)
            for name, value in SECURITY_HEADERS.items():
                response.headers.setdefault(name, value)
            return response

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s - %.3fs", request.method, request.url.path, elapsed)
        return response
