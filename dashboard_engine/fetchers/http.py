"""
Econ Dashboard — Shared HTTP Client
────────────────────────────────────
One pooled httpx.AsyncClient per process, and a single GET helper that turns
every upstream problem into an UpstreamError. No retries: the browser client
re-requests whatever failed.
"""

import logging
from typing import Any, Optional

import httpx

from dashboard_engine.errors import UpstreamError

log = logging.getLogger("ed.fetchers")

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_client(timeout: float = 8.0, max_connections: int = 50) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        limits=httpx.Limits(max_connections=max_connections, max_keepalive_connections=20),
        timeout=timeout,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    label: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> Any:
    try:
        r = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException:
        log.warning(f"Timeout from {url[:60]}")
        raise UpstreamError(f"{label} API timeout")
    except httpx.HTTPError as e:
        log.warning(f"Network error from {url[:60]}: {e}")
        raise UpstreamError(f"{label} API unreachable: {e}")

    if not r.is_success:
        log.warning(f"HTTP {r.status_code} from {url[:60]}")
        raise UpstreamError(f"{label} API error: {r.status_code}", status=r.status_code)

    try:
        return r.json()
    except ValueError:
        log.warning(f"Malformed JSON from {url[:60]}")
        raise UpstreamError(f"{label} API returned malformed JSON")
