# middleware.py
"""
Request-level middleware.

This module provides:
- APIRateLimitMiddleware: fixed-window request limit per client IP on /api/
- RequestLoggingMiddleware: one structured log entry per HTTP request
"""

import time
from typing import Any

from django.conf import settings
from django.core.cache import cache
from django.http import HttpRequest, JsonResponse

from classifiedsutils.log_helpers import get_client_ip
from classifiedsutils.logging import get_logger

logger = get_logger(__name__)


class APIRateLimitMiddleware:
    """
    Limit every client IP to RATE_LIMIT_REQUESTS API calls per
    RATE_LIMIT_WINDOW_SECONDS.

    Counters live in the default cache. The window starts with the first
    request and is not sliding. Exceeding the limit returns 429.
    """

    cache_prefix = "ratelimit:api"

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> Any:
        if getattr(settings, "RATE_LIMIT_ENABLED", True) and request.path.startswith(
            "/api/"
        ):
            limit = getattr(settings, "RATE_LIMIT_REQUESTS", 100)
            window = getattr(settings, "RATE_LIMIT_WINDOW_SECONDS", 900)
            client_ip = get_client_ip(request)
            key = f"{self.cache_prefix}:{client_ip}"

            # add() is a no-op when the window is already open
            cache.add(key, 0, timeout=window)
            try:
                count = cache.incr(key)
            except ValueError:
                # window expired between add() and incr()
                cache.set(key, 1, timeout=window)
                count = 1

            if count > limit:
                logger.warning(
                    "rate_limit_exceeded",
                    client_ip=client_ip,
                    path=request.path,
                    limit=limit,
                    window_seconds=window,
                )
                response = JsonResponse(
                    {
                        "error": "Too many requests from this IP, please try again later."
                    },
                    status=429,
                )
                response["Retry-After"] = str(window)
                return response

        return self.get_response(request)


class RequestLoggingMiddleware:
    """
    Logs method, path, status, duration, user and client IP for every request.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> Any:
        start_time = time.time()
        response = self.get_response(request)
        duration = time.time() - start_time

        user = getattr(request, "user", None)
        logger.info(
            "http_request",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_seconds=round(duration, 4),
            user_id=getattr(user, "user_id", None),
            client_ip=get_client_ip(request),
            user_agent=request.META.get("HTTP_USER_AGENT", "")[:200],
        )
        return response
