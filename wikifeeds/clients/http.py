"""Shared HTTP helpers for upstream calls."""

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import FeedError

logger = logging.getLogger(__name__)


def create_client(timeout: float, user_agent: str) -> httpx.AsyncClient:
    """Create the async client shared by all upstream calls of a request."""
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={
            "User-Agent": user_agent,
            "Accept": "application/json; charset=utf-8",
        },
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Raises:
        FeedError: 404 for a missing resource, 504 for any other error status
        httpx.TransportError: on connection failures and timeouts
    """
    logger.debug("GET %s", url)
    response = await client.get(url, params=params, headers=headers)

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            raise FeedError.not_found(f"Not found: {url}") from e
        raise FeedError.upstream_error(
            f"HTTP {e.response.status_code} from {url}"
        ) from e

    return response.json()
