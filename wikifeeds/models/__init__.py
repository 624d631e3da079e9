"""Data models for Wikifeeds."""

from .article import PageSummary, ResolvedArticle
from .feed import FeedMeta, MostReadFeed, MostReadResponse, etag
from .pageviews import DatedPageviews, PageviewEntry, TopPageviews
from .siteinfo import Namespace, SiteInfo

__all__ = [
    "DatedPageviews",
    "FeedMeta",
    "MostReadFeed",
    "MostReadResponse",
    "Namespace",
    "PageSummary",
    "PageviewEntry",
    "ResolvedArticle",
    "SiteInfo",
    "TopPageviews",
    "etag",
]
