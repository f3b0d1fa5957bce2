"""
Client IP resolution for FastAPI requests.

The reveal flow stamps the caller's IP on the scan for rate-limit
accounting, so extraction must never fail: when no proxy header is present
the sentinel ``UNKNOWN_IP`` is returned.
"""

from __future__ import annotations

from fastapi import Request

UNKNOWN_IP = "0.0.0.0"

# Priority order
_IP_HEADERS: tuple[str, ...] = (
    "X-Forwarded-For",
    "CF-Connecting-IP",
    "X-Real-IP",
)


def get_client_ip(request: Request) -> str:
    """Extract the real client IP from a FastAPI ``Request``.

    Checks proxy headers in priority order:

    1. ``X-Forwarded-For`` — standard proxy header (first IP in list)
    2. ``CF-Connecting-IP`` — Cloudflare
    3. ``X-Real-IP`` — nginx / other reverse proxies

    Args:
        request: The current FastAPI ``Request`` object.

    Returns:
        The resolved client IP string, or ``UNKNOWN_IP`` if none can be found.
    """
    for header in _IP_HEADERS:
        ip_value: str | None = request.headers.get(header)
        if ip_value:
            client_ip: str = ip_value.split(",")[0].strip()
            if client_ip:
                return client_ip

    return UNKNOWN_IP
