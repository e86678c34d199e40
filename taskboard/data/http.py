from __future__ import annotations

import httpx

from taskboard.core.settings import get_settings


def get_client() -> httpx.AsyncClient:
    """
    New AsyncClient bound to the configured API base URL.
    Callers own it: use `async with get_client() as client:`.
    """
    settings = get_settings()
    return httpx.AsyncClient(
        base_url=settings.API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"Accept": "application/json"},
    )
