"""Companies House client: authenticated REST lookups."""
import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.config import Settings, settings

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 20
OFFICERS_PAGE_SIZE = 50

# ---------------------------------------------------------------------------
# Persistent HTTP client
# ---------------------------------------------------------------------------
_client: httpx.AsyncClient | None = None


def _require_client() -> httpx.AsyncClient:
    """Return the persistent client, or raise if not initialized."""
    if _client is None:
        raise RuntimeError("CH client not initialized, call init_client() first")
    return _client


def init_client(config: Settings = settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
    global _client
    if _client is not None:
        return  # idempotent: keep the existing client
    # Basic auth with the API key as username and an empty password
    _client = httpx.AsyncClient(
        base_url=config.ch_base_url.rstrip("/"),
        auth=(config.ch_api_key, ""),
        headers={"Accept": "application/json"},
        timeout=config.ch_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )


async def close_client() -> None:
    global _client
    if _client:
        await _client.aclose()
        _client = None


# ---------------------------------------------------------------------------
# REST lookups (no retries; non-2xx raises httpx.HTTPStatusError)
# ---------------------------------------------------------------------------

async def _get_json(path: str, params: dict[str, Any] | None = None) -> Any:
    resp = await _require_client().get(path, params=params)
    resp.raise_for_status()
    return resp.json()


async def search_companies(q: str) -> dict:
    return await _get_json("/search/companies", {"q": q, "items_per_page": SEARCH_PAGE_SIZE})


async def get_company(number: str) -> dict:
    return await _get_json(f"/company/{quote(number, safe='')}")


async def get_officers(number: str) -> dict:
    return await _get_json(
        f"/company/{quote(number, safe='')}/officers",
        {"items_per_page": OFFICERS_PAGE_SIZE},
    )
