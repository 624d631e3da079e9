"""Most-read feed orchestrator.

Builds the list of the most viewed articles of a site on a date: fetches
the top pageviews (and, for bot filtering, the desktop-only top list),
drops ineligible titles, enriches each remaining article with its summary
and recent view history, merges redirect duplicates and returns the feed.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Dict, List, Optional, Tuple

import httpx
import pendulum

from ..clients import (
    Agent,
    Granularity,
    PageviewsClient,
    Platform,
    SiteInfoCache,
    SiteInfoClient,
    SummaryClient,
    create_client,
    project_for_domain,
)
from ..config import ConfigModel, MostReadConfig
from ..errors import FeedError, InvalidTitleError
from ..filters import DenyList, filter_bots, is_in_main_namespace, is_not_main_page
from ..models import (
    DatedPageviews,
    FeedMeta,
    MostReadFeed,
    MostReadResponse,
    PageviewEntry,
    ResolvedArticle,
    SiteInfo,
)
from ..util import Title, dedupe_articles, resolve_all
from ..util.dates import add_days, date_string, iso8601_date, requested_date

logger = logging.getLogger(__name__)


class MostReadOrchestrator:
    """Builds most-read feeds from live upstream data."""

    def __init__(
        self,
        config: MostReadConfig,
        pageviews: PageviewsClient,
        summaries: SummaryClient,
        siteinfo_cache: SiteInfoCache,
    ) -> None:
        """
        Initialize most-read orchestrator.

        Args:
            config: Pipeline configuration
            pageviews: Pageviews API client
            summaries: Page summary client
            siteinfo_cache: Siteinfo source, shared across requests
        """
        self.config = config
        self.pageviews = pageviews
        self.summaries = summaries
        self.siteinfo_cache = siteinfo_cache
        self.deny_list = DenyList(config.deny_list)

    async def run(
        self,
        domain: str,
        yyyy: Any,
        mm: Any,
        dd: Any,
        aggregated: bool = False,
        accept_language: Optional[str] = None,
    ) -> MostReadResponse:
        """
        Build the most-read feed for a site and date.

        Args:
            domain: Site domain, e.g. 'en.wikipedia.org'
            yyyy: Requested year
            mm: Requested month
            dd: Requested day
            aggregated: Best-effort mode; the day before the requested date
                is queried and every failure yields an empty response
            accept_language: Forwarded to the summary service

        Returns:
            Feed response; empty in best-effort mode when no data is available

        Raises:
            FeedError: outside best-effort mode, for invalid dates, excluded
                domains, missing data and upstream failures; any other
                error becomes a 500
        """
        try:
            return await self._build(domain, yyyy, mm, dd, aggregated, accept_language)
        except Exception as e:
            if aggregated:
                logger.info("Empty most-read feed for %s %s/%s/%s: %s", domain, yyyy, mm, dd, e)
                return MostReadResponse.empty()
            if isinstance(e, FeedError):
                raise
            if isinstance(e, httpx.HTTPError):
                raise FeedError.upstream_error(str(e)) from e
            logger.exception("Most-read feed failed for %s", domain)
            raise FeedError.internal_error(str(e)) from e

    async def _build(
        self,
        domain: str,
        yyyy: Any,
        mm: Any,
        dd: Any,
        aggregated: bool,
        accept_language: Optional[str],
    ) -> MostReadResponse:
        if domain in self.config.excluded_domains:
            raise FeedError.not_found(f"Most-read articles are not available for {domain}")

        req_date = requested_date(yyyy, mm, dd, earliest=self.config.earliest_date)
        # Pageviews are aggregated with a lag, ask for the previous day
        query_date = add_days(req_date, -1) if aggregated else req_date

        project = project_for_domain(domain)
        combined, desktop, siteinfo, result_date = await self._fetch_top(
            domain, project, query_date
        )

        start = add_days(result_date, -(self.config.history_days - 1))
        locale = domain.split(".")[0]
        main_page = Title.from_text(siteinfo.mainpage, siteinfo).prefixed_dbkey

        if self.config.bot_filter_enabled:
            combined = filter_bots(combined, desktop, self.config.bot_filter_threshold)

        candidates = [
            (entry, title)
            for entry, title in self._annotate(combined, siteinfo)
            if is_in_main_namespace(title.namespace)
            and is_not_main_page(title.prefixed_dbkey, main_page)
            and self.deny_list.is_allowed(locale, title.prefixed_dbkey)
        ]

        if not candidates:
            raise FeedError.not_found()

        articles = await self._enrich(
            domain, project, candidates, start, result_date, accept_language
        )

        articles = [
            article
            for article in articles
            if is_not_main_page(article.title, main_page)
            and self.deny_list.is_allowed(locale, article.title)
        ]
        articles = dedupe_articles(articles)

        if not articles:
            raise FeedError.not_found()

        return MostReadResponse(
            payload=MostReadFeed(date=iso8601_date(result_date), articles=articles),
            meta=FeedMeta(
                revision=date_string(req_date),
                vary="accept-language" if siteinfo.has_variants else None,
            ),
        )

    async def _fetch_top(
        self,
        domain: str,
        project: str,
        query_date: date,
    ) -> Tuple[List[PageviewEntry], List[PageviewEntry], SiteInfo, pendulum.Date]:
        """Fetch top lists and siteinfo concurrently."""
        pending: Dict[str, Awaitable] = {
            "combined": self.pageviews.fetch_top(project, Platform.ALL, query_date),
            "siteinfo": self.siteinfo_cache.get(domain),
        }
        if self.config.bot_filter_enabled:
            pending["desktop"] = self.pageviews.fetch_top(
                project, Platform.DESKTOP_WEB, query_date
            )

        fetched = await resolve_all(pending)

        top = fetched["combined"]
        # The service reports which day it actually answered for
        result_date = pendulum.date(int(top.year), int(top.month), int(top.day))

        max_titles = self.config.max_titles
        # Desktop ranks can differ from combined ranks near the cut-off
        desktop_titles = max_titles * self.config.desktop_titles_multiplier

        combined = top.articles[:max_titles]
        desktop = fetched["desktop"].articles[:desktop_titles] if "desktop" in fetched else []

        return combined, desktop, fetched["siteinfo"], result_date

    def _annotate(
        self, entries: List[PageviewEntry], siteinfo: SiteInfo
    ) -> List[Tuple[PageviewEntry, Title]]:
        """Parse titles, dropping those that cannot be parsed."""
        annotated = []
        for entry in entries:
            try:
                annotated.append((entry, Title.from_text(entry.title, siteinfo)))
            except InvalidTitleError as e:
                logger.warning("Skipping unparseable title %r: %s", entry.title, e.reason)
        return annotated

    async def _enrich(
        self,
        domain: str,
        project: str,
        candidates: List[Tuple[PageviewEntry, Title]],
        start: date,
        end: date,
        accept_language: Optional[str],
    ) -> List[ResolvedArticle]:
        """Fetch summaries and view histories, dropping failed articles."""
        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        records = [
            {
                "raw_title": entry.title,
                "namespace": title.namespace,
                "views": entry.views,
                "rank": entry.rank,
                "summary": _bounded(
                    semaphore,
                    self.summaries.fetch_summary(domain, entry.title, accept_language),
                ),
                "view_history": _bounded(
                    semaphore,
                    self._view_history(project, entry.title, start, end),
                ),
            }
            for entry, title in candidates
        ]

        resolved = await resolve_all(records, ignore_failures=True)

        articles = []
        for record in resolved:
            if "summary" not in record or "view_history" not in record:
                logger.warning("Dropping %r: enrichment incomplete", record["raw_title"])
                continue
            articles.append(ResolvedArticle(**record))

        logger.debug("Enriched %d of %d candidates", len(articles), len(records))
        return articles

    async def _view_history(
        self, project: str, title: str, start: date, end: date
    ) -> List[DatedPageviews]:
        """Daily user views over the window; days without data count as zero."""
        series = await self.pageviews.fetch_daily_series(
            project, Platform.ALL, Agent.USER, title, Granularity.DAILY, start, end
        )
        views = {entry.date: entry.views for entry in series}

        history = []
        for offset in range(self.config.history_days):
            day = iso8601_date(add_days(start, offset))
            history.append(DatedPageviews(date=day, views=views.get(day, 0)))
        return history


async def _bounded(semaphore: asyncio.Semaphore, awaitable: Awaitable) -> Any:
    async with semaphore:
        return await awaitable


def build_orchestrator(
    config: ConfigModel,
    http_client: httpx.AsyncClient,
    siteinfo_cache: Optional[SiteInfoCache] = None,
) -> MostReadOrchestrator:
    """Wire an orchestrator to upstream clients sharing one HTTP client."""
    upstream = config.upstream
    if siteinfo_cache is None:
        siteinfo_cache = SiteInfoCache(
            SiteInfoClient(http_client, upstream.action_api_url_template),
            ttl_seconds=config.siteinfo_cache.ttl_seconds,
            max_entries=config.siteinfo_cache.max_entries,
        )

    return MostReadOrchestrator(
        config=config.most_read,
        pageviews=PageviewsClient(http_client, upstream.pageviews_base_url),
        summaries=SummaryClient(http_client, upstream.rest_url_template),
        siteinfo_cache=siteinfo_cache,
    )


async def most_read(
    domain: str,
    yyyy: Any,
    mm: Any,
    dd: Any,
    aggregated: bool = False,
    config: Optional[ConfigModel] = None,
    user_agent: Optional[str] = None,
) -> MostReadResponse:
    """Build one most-read feed with a fresh HTTP client."""
    if config is None:
        config = ConfigModel()

    async with create_client(
        config.upstream.timeout, user_agent or config.upstream.user_agent
    ) as client:
        orchestrator = build_orchestrator(config, client)
        return await orchestrator.run(domain, yyyy, mm, dd, aggregated=aggregated)


def most_read_sync(*args: Any, **kwargs: Any) -> MostReadResponse:
    """Synchronous wrapper for most_read."""
    return asyncio.run(most_read(*args, **kwargs))
