"""Site metadata client and cache."""

import logging
import time
from collections import OrderedDict
from typing import Callable, Tuple

import httpx

from ..errors import FeedError
from ..models import Namespace, SiteInfo
from .http import get_json

logger = logging.getLogger(__name__)


class SiteInfoClient:
    """Fetch siteinfo from the MediaWiki action API."""

    def __init__(self, client: httpx.AsyncClient, action_api_url_template: str) -> None:
        self.client = client
        self.action_api_url_template = action_api_url_template

    async def fetch_siteinfo(self, domain: str) -> SiteInfo:
        """Fetch main page, namespaces and language variants of a site."""
        url = self.action_api_url_template.format(domain=domain)
        params = {
            "action": "query",
            "meta": "siteinfo",
            "siprop": "general|languagevariants|namespaces|namespacealiases",
            "format": "json",
            "formatversion": 2,
        }
        data = await get_json(self.client, url, params=params)

        query = data.get("query") if isinstance(data, dict) else None
        if not query or "general" not in query:
            raise FeedError.upstream_error(f"No siteinfo in response for {domain}")

        general = query["general"]
        default_case = general.get("case", "first-letter")

        namespaces = {}
        for key, ns in (query.get("namespaces") or {}).items():
            namespaces[int(key)] = Namespace(
                id=ns.get("id", int(key)),
                name=ns.get("name", ""),
                canonical=ns.get("canonical"),
                case=ns.get("case", default_case),
            )

        aliases = {
            alias["alias"]: alias["id"]
            for alias in query.get("namespacealiases") or []
        }

        variants = (query.get("languagevariants") or {}).get(general["lang"]) or {}

        return SiteInfo(
            mainpage=general["mainpage"],
            lang=general["lang"],
            case=default_case,
            legaltitlechars=general.get("legaltitlechars"),
            namespaces=namespaces,
            namespacealiases=aliases,
            variants=list(variants.keys()),
        )


class SiteInfoCache:
    """Siteinfo per domain, with expiry and a bounded number of entries."""

    def __init__(
        self,
        client: SiteInfoClient,
        ttl_seconds: float = 3600.0,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize siteinfo cache.

        Args:
            client: Client used on misses and expired entries
            ttl_seconds: Entry lifetime
            max_entries: Oldest entries are evicted beyond this size
            clock: Monotonic time source
        """
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, SiteInfo]]" = OrderedDict()

    async def get(self, domain: str) -> SiteInfo:
        """Get siteinfo for a domain, fetching it if missing or expired."""
        now = self._clock()
        entry = self._entries.get(domain)
        if entry is not None and now - entry[0] < self.ttl_seconds:
            return entry[1]

        siteinfo = await self.client.fetch_siteinfo(domain)
        self._entries[domain] = (now, siteinfo)
        self._entries.move_to_end(domain)

        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted siteinfo for %s", evicted)

        return siteinfo

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, domain: str) -> bool:
        return domain in self._entries

    def __len__(self) -> int:
        return len(self._entries)
