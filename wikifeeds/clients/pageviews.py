"""Wikimedia pageviews API client."""

from datetime import date
from enum import Enum
from typing import List
from urllib.parse import quote

import httpx

from ..errors import FeedError
from ..models import DatedPageviews, PageviewEntry, TopPageviews
from ..util.dates import pageviews_timestamp, parse_pageviews_timestamp
from .http import get_json


class Platform(str, Enum):
    """Access method segment."""

    ALL = "all-access"
    DESKTOP_WEB = "desktop"
    MOBILE_APP = "mobile-app"
    MOBILE_WEB = "mobile-web"


class Agent(str, Enum):
    """Agent type segment."""

    ALL = "all-agents"
    USER = "user"
    SPIDER = "spider"
    AUTOMATED = "automated"


class Granularity(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


def project_for_domain(domain: str) -> str:
    """Remove the top-level domain, e.g. 'en.wikipedia.org' -> 'en.wikipedia'."""
    return ".".join(domain.split(".")[:2])


class PageviewsClient:
    """Fetch top lists and per-article series from the pageviews API."""

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        """Initialize pageviews client."""
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def fetch_top(self, project: str, platform: Platform, day: date) -> TopPageviews:
        """
        Fetch the top-viewed articles of a day.

        The service may answer for a different day than requested; the
        returned year/month/day are the ones it reported.

        Raises:
            FeedError: 404 when the service has no list for the day
        """
        url = (
            f"{self.base_url}/metrics/pageviews/top/{project}/{Platform(platform).value}"
            f"/{day.year:04d}/{day.month:02d}/{day.day:02d}"
        )
        data = await get_json(self.client, url)

        items = data.get("items") or []
        if not items:
            raise FeedError.not_found(f"No top pageviews for {project} on {day.isoformat()}")

        first = items[0]
        try:
            articles = [
                PageviewEntry(
                    title=article["article"],
                    views=article["views"],
                    rank=article.get("rank", 0),
                )
                for article in first.get("articles") or []
            ]

            return TopPageviews(
                year=str(first["year"]),
                month=str(first["month"]).zfill(2),
                day=str(first["day"]).zfill(2),
                articles=articles,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise FeedError.upstream_error(f"Malformed top pageviews for {project}: {e!r}") from e

    async def fetch_daily_series(
        self,
        project: str,
        platform: Platform,
        agent: Agent,
        title: str,
        granularity: Granularity,
        start: date,
        end: date,
    ) -> List[DatedPageviews]:
        """Fetch the view series of one article between two dates (inclusive)."""
        url = (
            f"{self.base_url}/metrics/pageviews/per-article/{project}"
            f"/{Platform(platform).value}/{Agent(agent).value}/{quote(title, safe='')}"
            f"/{Granularity(granularity).value}"
            f"/{pageviews_timestamp(start)}/{pageviews_timestamp(end)}"
        )
        data = await get_json(self.client, url)

        try:
            return [
                DatedPageviews(
                    date=parse_pageviews_timestamp(item["timestamp"]),
                    views=item["views"],
                )
                for item in data.get("items") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise FeedError.upstream_error(f"Malformed pageviews for {title}: {e!r}") from e
