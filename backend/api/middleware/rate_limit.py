"""
Rate limiting middleware using slowapi.

Limits are keyed by the real client IP. Storage defaults to in-memory and
can point at Redis through RATE_LIMIT_STORAGE_URI.

Rate Limits:
- Login: 5 attempts per minute
- Registration: 3 attempts per minute
- Generation: 30 requests per minute
- Webhooks: 100 deliveries per minute
- Default: 100 requests per minute
"""

import ipaddress
import logging
import re

from starlette.requests import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

# Simple pattern to quickly reject obviously invalid IPs before parsing
_IP_LIKE = re.compile(r"^[\d.:a-fA-F]+$")


def _is_valid_ip(value: str) -> bool:
    """Return True if *value* looks like a valid IPv4 or IPv6 address."""
    if not _IP_LIKE.match(value):
        return False
    try:
        ipaddress.ip_address(value)
        return True
    except ValueError:
        return False


def _is_private_ip(value: str) -> bool:
    """Private, loopback and link-local addresses in proxy headers can be spoofed."""
    try:
        addr = ipaddress.ip_address(value)
        return addr.is_private or addr.is_loopback or addr.is_link_local
    except ValueError:
        return False


def get_real_ip(request: Request) -> str:
    """Extract the client IP from proxy headers, falling back to the remote address.

    Header values are validated, and private addresses are ignored so a
    client cannot pick its own rate-limit bucket.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # X-Forwarded-For can be a comma-separated list; first entry is the client
        candidate = forwarded.split(",")[0].strip()
        if _is_valid_ip(candidate) and not _is_private_ip(candidate):
            return candidate
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        candidate = real_ip.strip()
        if _is_valid_ip(candidate) and not _is_private_ip(candidate):
            return candidate
    return get_remote_address(request)


# Format: "count/period" where period can be: second, minute, hour, day
RATE_LIMITS = {
    "login": "5/minute",
    "register": "3/minute",
    "generation": "30/minute",
    "webhook": "100/minute",
    "default": "100/minute",
}

if settings.rate_limit_storage_uri.startswith("memory://"):
    logger.info("Rate limiter using in-memory storage")
    if settings.is_production:
        logger.warning("In-memory rate limiting is per-process; set RATE_LIMIT_STORAGE_URI for multi-worker deployments")

limiter = Limiter(
    key_func=get_real_ip,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[RATE_LIMITS["default"]],
)


def get_rate_limit(endpoint: str) -> str:
    """
    Get rate limit configuration for a specific endpoint.

    Example:
        >>> get_rate_limit("login")
        "5/minute"
        >>> get_rate_limit("unknown")
        "100/minute"
    """
    return RATE_LIMITS.get(endpoint, RATE_LIMITS["default"])
