"""
JSON response helpers shared by the public API views.
"""

from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse


def cors_headers() -> dict[str, str]:
    """CORS headers for the menu site."""
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOWED_ORIGIN,
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Idempotency-Key",
    }


def json_response(data: Any, status: int = 200) -> JsonResponse:
    """Create a JSON response with CORS headers."""
    response = JsonResponse(data, status=status, safe=False)
    for key, value in cors_headers().items():
        response[key] = value
    return response


def error_response(message: str, status: int = 400, **extra: Any) -> JsonResponse:
    """Create a `{"error": ...}` JSON response."""
    return json_response({"error": message, **extra}, status=status)


def no_content() -> HttpResponse:
    """204 response with CORS headers."""
    response = HttpResponse(status=204)
    for key, value in cors_headers().items():
        response[key] = value
    return response


def options_response() -> JsonResponse:
    """Response for CORS preflight requests."""
    return json_response({})


def not_found(
    request: HttpRequest, exception: Exception | None = None
) -> JsonResponse:
    """
    JSON 404 handler.

    Uses the Http404 message when a view raised one; URL resolver misses
    carry a dict instead and get the generic message.
    """
    detail = exception.args[0] if exception and exception.args else None
    message = detail if isinstance(detail, str) else "Not found"
    return error_response(message, status=404)
