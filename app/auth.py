"""Shared-secret authentication for the proxy routes."""
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from app.pipeline import Guard

HEALTH_PATH = "/health"


def shared_secret_guard(
    secret: str,
    header_name: str,
    exempt_paths: frozenset[str] = frozenset({HEALTH_PATH}),
) -> Guard:
    """Require ``header_name`` to carry exactly ``secret`` on every non-exempt path.

    With no secret configured every protected request fails closed with 500,
    so a missing SHARED_SECRET never silently disables auth. Starlette header
    lookup is case-insensitive.
    """

    async def guard(request: Request) -> Response | None:
        if request.url.path in exempt_paths:
            return None
        if not secret:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Server not configured (missing SHARED_SECRET)"},
            )
        token = request.headers.get(header_name)
        if not token or token != secret:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "Unauthorised"},
            )
        return None

    return guard
