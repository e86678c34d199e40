# taskboard/data/users_api.py
from __future__ import annotations

from typing import Optional

import httpx
import structlog

from taskboard.data.http import get_client


logger = structlog.get_logger(__name__)


async def create_user(email: str, password: str, client: Optional[httpx.AsyncClient] = None) -> httpx.Response:
    """
    POST /users with trimmed credentials.

    Contract:
      - Returns the response for any 2xx status (caller decides on 201).
      - Raises httpx.HTTPStatusError for 4xx/5xx, httpx.TransportError on I/O failure.
    """
    body = {"email": (email or "").strip(), "password": (password or "").strip()}

    if client is None:
        async with get_client() as own:
            return await _post_user(own, body)
    return await _post_user(client, body)


async def _post_user(client: httpx.AsyncClient, body: dict) -> httpx.Response:
    logger.info("create_user_request", email=body["email"])
    response = await client.post("/users", json=body)
    logger.info("create_user_response", status_code=response.status_code)
    response.raise_for_status()
    return response
