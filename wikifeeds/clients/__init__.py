"""Clients for upstream content and statistics services."""

from .http import create_client, get_json
from .pageviews import Agent, Granularity, PageviewsClient, Platform, project_for_domain
from .siteinfo import SiteInfoCache, SiteInfoClient
from .summary import SummaryClient

__all__ = [
    "Agent",
    "Granularity",
    "PageviewsClient",
    "Platform",
    "SiteInfoCache",
    "SiteInfoClient",
    "SummaryClient",
    "create_client",
    "get_json",
    "project_for_domain",
]
