"""
Rate limiting configuration for FastAPI.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from packages.market_insights.settings import settings


def get_client_identifier(request: Request) -> str:
    """
    Caller identity for rate limiting.

    Prefers proxy headers (first X-Forwarded-For hop, X-Real-IP,
    CF-Connecting-IP) over the socket peer address.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    for header in ("x-real-ip", "cf-connecting-ip"):
        value = request.headers.get(header)
        if value:
            return value

    if request.client is None:
        return "unknown"
    return get_remote_address(request)


# Fixed-window counters keyed by caller, kept in slowapi's in-memory storage
limiter = Limiter(
    key_func=get_client_identifier,
    headers_enabled=True,
    enabled=settings.rate_limit_enabled,
)
