"""Page summary client."""

from typing import Optional
from urllib.parse import quote

import httpx

from ..errors import FeedError
from ..models import PageSummary
from .http import get_json


class SummaryClient:
    """Fetch page summaries from a site's REST API."""

    def __init__(self, client: httpx.AsyncClient, rest_url_template: str) -> None:
        self.client = client
        self.rest_url_template = rest_url_template

    async def fetch_summary(
        self,
        domain: str,
        title: str,
        accept_language: Optional[str] = None,
    ) -> PageSummary:
        """Fetch the summary of a page, following redirects."""
        base_url = self.rest_url_template.format(domain=domain).rstrip("/")
        url = f"{base_url}/page/summary/{quote(title, safe='')}"
        headers = {"Accept-Language": accept_language} if accept_language else None

        data = await get_json(self.client, url, headers=headers)
        if not isinstance(data, dict) or not data.get("title"):
            raise FeedError.upstream_error(f"Malformed summary for {title!r}")

        # Legacy clients expect the display title separately
        data["normalizedtitle"] = data["title"]
        data["title"] = data["title"].replace(" ", "_")
        return PageSummary.model_validate(data)
