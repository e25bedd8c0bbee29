"""
Decorators for request handling.
"""

import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.cache import cache
from django.http import HttpRequest

from apps.web.core.http import json_response

IDEMPOTENCY_TTL = 86400  # 24 hours


def idempotent(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that replays responses for a repeated Idempotency-Key header.

    The header is optional: requests without it are processed normally.
    Only successful responses are cached, so a client can resubmit after
    fixing a rejected order.

    Usage:
        @idempotent
        def order_collection(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        key = request.headers.get("Idempotency-Key")
        if not key or request.method != "POST":
            return view_func(request, *args, **kwargs)

        cache_key = f"idempotency:{request.path}:{key}"
        cached = cache.get(cache_key)

        if cached:
            return json_response(cached["data"], status=cached["status"])

        response = view_func(request, *args, **kwargs)

        if response.status_code < 400:
            cache.set(
                cache_key,
                {
                    "data": json.loads(response.content),
                    "status": response.status_code,
                },
                timeout=IDEMPOTENCY_TTL,
            )

        return response

    return wrapper
