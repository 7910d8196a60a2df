"""Request guards run before routing.

A guard is an async callable taking the request and returning either
``None`` (continue) or a response that short-circuits the pipeline.
Guards run in list order; the first rejection wins.
"""
import logging
from typing import Awaitable, Callable, Iterable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from app.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

Guard = Callable[[Request], Awaitable[Response | None]]


async def run_guards(guards: Iterable[Guard], request: Request) -> Response | None:
    for guard in guards:
        rejection = await guard(request)
        if rejection is not None:
            return rejection
    return None


def client_key(request: Request) -> str:
    """Caller identity for rate limiting: the peer network address.

    X-Forwarded-For is not trusted. Behind a shared proxy every caller
    collapses onto the proxy's address.
    """
    return request.client.host if request.client else "unknown"


def origin_guard(allowed_origins: frozenset[str]) -> Guard:
    async def guard(request: Request) -> Response | None:
        origin = request.headers.get("origin")
        if not allowed_origins or not origin or origin in allowed_origins:
            return None
        logger.warning("Rejected request from origin %s", origin)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": f"Not allowed by CORS: {origin}"},
        )

    return guard


def rate_limit_guard(limiter: RateLimiter) -> Guard:
    async def guard(request: Request) -> Response | None:
        if await limiter.hit(client_key(request)):
            return None
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"error": "Rate limit exceeded"},
        )

    return guard
