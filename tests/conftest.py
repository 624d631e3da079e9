"""Shared fixtures: a fake wiki serving pageview, summary and siteinfo APIs."""

import asyncio
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

import httpx
import pytest

from wikifeeds.config import ConfigModel
from wikifeeds.models import Namespace, SiteInfo
from wikifeeds.pipeline import build_orchestrator

LEGAL_TITLE_CHARS = r""" %!"$&'()*,\-.\/0-9:;=?@A-Z\\^_`a-z~\x80-\xFF+"""

NAMESPACES = {
    "-1": {"id": -1, "name": "Special", "canonical": "Special", "case": "first-letter"},
    "0": {"id": 0, "name": "", "case": "first-letter", "content": True},
    "1": {"id": 1, "name": "Talk", "canonical": "Talk", "case": "first-letter"},
    "4": {"id": 4, "name": "Wikipedia", "canonical": "Project", "case": "first-letter"},
}


def siteinfo_response(lang: str = "en", variants: Optional[Dict] = None) -> Dict:
    return {
        "batchcomplete": True,
        "query": {
            "general": {
                "mainpage": "Main Page",
                "lang": lang,
                "case": "first-letter",
                "legaltitlechars": LEGAL_TITLE_CHARS,
            },
            "namespaces": NAMESPACES,
            "namespacealiases": [{"id": 4, "alias": "WP"}],
            "languagevariants": variants or {},
        },
    }


class FakeWiki:
    """Serves upstream responses for one site from in-memory data."""

    def __init__(
        self,
        combined: List[Dict],
        desktop: Optional[List[Dict]] = None,
        result_date: date = date(2017, 1, 10),
        redirects: Optional[Dict[str, str]] = None,
        failing_summaries: Iterable[str] = (),
        failing_histories: Iterable[str] = (),
        daily_views: Optional[Dict[str, int]] = None,
        missing_days: Iterable[str] = (),
        top_status: int = 200,
        top_body: Optional[Any] = None,
        variants: Optional[Dict] = None,
    ) -> None:
        self.combined = combined
        self.desktop = desktop
        self.result_date = result_date
        self.redirects = redirects or {}
        self.failing_summaries = set(failing_summaries)
        self.failing_histories = set(failing_histories)
        self.daily_views = daily_views or {}
        self.missing_days = set(missing_days)
        self.top_status = top_status
        self.top_body = top_body
        self.variants = variants
        self.requests: List[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)

        if request.url.host == "wikimedia.org":
            parts = path.split("/")
            if parts[5] == "top":
                return self._top(parts)
            if parts[5] == "per-article":
                return self._per_article(parts)

        if path == "/w/api.php":
            return httpx.Response(200, json=siteinfo_response(variants=self.variants))

        prefix = "/api/rest_v1/page/summary/"
        if path.startswith(prefix):
            return self._summary(path[len(prefix):])

        return httpx.Response(404, json={"type": "not_found"})

    def requested(self, fragment: str) -> List[str]:
        return [path for path in self.requests if fragment in path]

    def _top(self, parts: List[str]) -> httpx.Response:
        if self.top_status != 200:
            return httpx.Response(self.top_status, json={"title": "Not found."})
        if self.top_body is not None:
            return httpx.Response(200, json=self.top_body)

        access = parts[7]
        if access == "desktop":
            articles = self.desktop
            if articles is None:
                articles = [dict(a, views=a["views"] // 2) for a in self.combined]
        else:
            articles = self.combined

        return httpx.Response(200, json={
            "items": [{
                "project": parts[6],
                "access": access,
                "year": f"{self.result_date.year:04d}",
                "month": f"{self.result_date.month:02d}",
                "day": f"{self.result_date.day:02d}",
                "articles": articles,
            }]
        })

    def _per_article(self, parts: List[str]) -> httpx.Response:
        title = parts[9]
        if title in self.failing_histories:
            return httpx.Response(500, json={})

        start = _parse_timestamp(parts[11])
        end = _parse_timestamp(parts[12])
        items = []
        day = start
        while day <= end:
            timestamp = day.strftime("%Y%m%d00")
            if f"{title}@{day.isoformat()}" not in self.missing_days:
                items.append({
                    "article": title,
                    "timestamp": timestamp,
                    "views": self.daily_views.get(title, 10),
                })
            day += timedelta(days=1)
        return httpx.Response(200, json={"items": items})

    def _summary(self, title: str) -> httpx.Response:
        if title in self.failing_summaries:
            return httpx.Response(404, json={"type": "not_found"})
        canonical = self.redirects.get(title, title)
        return httpx.Response(200, json={
            "type": "standard",
            "title": canonical.replace("_", " "),
            "description": f"Description of {canonical}",
            "extract": f"Extract of {canonical}",
            "lang": "en",
        })


def _parse_timestamp(value: str) -> date:
    return date(int(value[0:4]), int(value[4:6]), int(value[6:8]))


def top(*entries) -> List[Dict]:
    """Build a ranked top list from (title, views) pairs."""
    return [
        {"article": title, "views": views, "rank": rank}
        for rank, (title, views) in enumerate(entries, start=1)
    ]


@pytest.fixture
def siteinfo() -> SiteInfo:
    return SiteInfo(
        mainpage="Main Page",
        lang="en",
        case="first-letter",
        legaltitlechars=LEGAL_TITLE_CHARS,
        namespaces={
            int(key): Namespace(
                id=ns["id"], name=ns["name"], canonical=ns.get("canonical"), case=ns["case"]
            )
            for key, ns in NAMESPACES.items()
        },
        namespacealiases={"WP": 4},
    )


@pytest.fixture
def run_feed():
    """Run the most-read orchestrator against a FakeWiki."""

    def run(
        fake: FakeWiki,
        domain: str = "en.wikipedia.org",
        when=("2017", "01", "10"),
        config: Optional[ConfigModel] = None,
        **kwargs,
    ):
        async def go():
            transport = httpx.MockTransport(fake.handler)
            async with httpx.AsyncClient(transport=transport) as client:
                orchestrator = build_orchestrator(config or ConfigModel(), client)
                return await orchestrator.run(domain, *when, **kwargs)

        return asyncio.run(go())

    return run
