"""Companies House proxy router: search, company detail, officers."""
import logging

import httpx
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app import ch_client
from app.models import project_officers, project_search

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies-house")

# Shorter search terms return nothing without calling upstream.
MIN_QUERY_LENGTH = 3


def _upstream_error(exc: httpx.HTTPStatusError) -> JSONResponse:
    """Forward the upstream status with its raw body under detail."""
    return JSONResponse(
        status_code=exc.response.status_code,
        content={"error": "CH error", "detail": exc.response.text},
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@router.get("/search")
async def search(q: str = ""):
    if len(q) < MIN_QUERY_LENGTH:
        return {"items": []}

    try:
        data = await ch_client.search_companies(q)
        return project_search(data)
    except httpx.HTTPStatusError as exc:
        return _upstream_error(exc)
    except Exception:
        logger.exception("CH search failed")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"items": []})


# ---------------------------------------------------------------------------
# Officers (declared before the detail route so /{number} does not shadow it)
# ---------------------------------------------------------------------------

@router.get("/{number}/officers")
async def officers(number: str):
    if not number.strip():
        return {"items": []}

    try:
        data = await ch_client.get_officers(number)
        return project_officers(data)
    except httpx.HTTPStatusError as exc:
        return _upstream_error(exc)
    except Exception:
        logger.exception("CH officers failed for %s", number)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"items": []})


# ---------------------------------------------------------------------------
# Company detail (passed through unmodified)
# ---------------------------------------------------------------------------

@router.get("/")
async def company_missing_number():
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No company number"})


@router.get("/{number}")
async def company(number: str):
    if not number.strip():
        return await company_missing_number()

    try:
        data = await ch_client.get_company(number)
    except httpx.HTTPStatusError as exc:
        return _upstream_error(exc)
    except Exception:
        logger.exception("CH details failed for %s", number)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch company details"},
        )
    return JSONResponse(content=data)
