"""Per-client request limiting using slowapi."""

import ipaddress
import logging
from functools import lru_cache

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60


@lru_cache(maxsize=1)
def _get_trusted_proxies() -> tuple[
    frozenset[str],
    tuple[ipaddress.IPv4Network | ipaddress.IPv6Network, ...],
]:
    """Return trusted proxy IPs and CIDR networks from settings (cached)."""
    settings = get_settings()
    exact = set()
    networks = []
    for entry in settings.trusted_proxies.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if "/" in entry:
            networks.append(ipaddress.ip_network(entry, strict=False))
        else:
            exact.add(entry)
    return frozenset(exact), tuple(networks)


def _is_trusted_proxy(ip: str) -> bool:
    """Check if an IP is in the trusted proxies list (exact match or CIDR)."""
    exact, networks = _get_trusted_proxies()
    if ip in exact:
        return True
    if not networks:
        return False
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return any(addr in net for net in networks)


def get_client_ip(request: Request) -> str:
    """Get the client IP, honouring proxy headers only from trusted proxies.

    Priority:
    1. X-Real-IP
    2. First X-Forwarded-For entry
    3. Direct connection IP
    """
    direct_ip = get_remote_address(request)
    if not _is_trusted_proxy(direct_ip):
        return direct_ip

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    return direct_ip


limiter = Limiter(key_func=get_client_ip, enabled=get_settings().is_rate_limit_enabled)


def _retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length of the exceeded window, e.g. 60 for "30 per 1 minute"."""
    limit = getattr(exc, "limit", None)
    item = getattr(limit, "limit", None)
    if item is None:
        return DEFAULT_RETRY_AFTER
    try:
        return int(item.get_expiry())
    except (AttributeError, TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Return 429 with a Retry-After hint."""
    retry_after = _retry_after_seconds(exc)
    logger.warning("Rate limit exceeded for %s on %s", get_client_ip(request), request.url.path)
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Rate limit exceeded. Please try again later.",
            "retry_after": retry_after,
        },
        headers={"Retry-After": str(retry_after)},
    )
