"""Configuration models."""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


def default_deny_list() -> Dict[str, List[str]]:
    """Titles persistently in the most-read results with few human viewers."""
    return {
        "*": [
            "-",
            "Test_card",
            "Web_scraping",
            "XHamster",
            "Java_(programming_language)",
            "Images/upload/bel.jpg",
            "Superintelligence:_Paths,_Dangers,_Strategies",
            "Okto",
            "Proyecto_40",
            "AMGTV",
            "Lali_Espósito",
            "La7",
            "Vagina",
        ],
        "mzn": ["کس", "مقعد"],
        "de": ["Tobias_Sammet", "Avantasia", "Edguy", "Pornhub"],
    }


class UpstreamConfig(BaseModel):
    """Upstream service locations and HTTP client settings."""

    pageviews_base_url: str = Field(
        "https://wikimedia.org/api/rest_v1", description="Pageviews REST API base URL"
    )
    rest_url_template: str = Field(
        "https://{domain}/api/rest_v1", description="Per-site REST API base URL"
    )
    action_api_url_template: str = Field(
        "https://{domain}/w/api.php", description="Per-site MediaWiki action API URL"
    )
    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0.0)
    user_agent: str = Field(
        "Wikifeeds/0.1 (https://www.mediawiki.org/wiki/Wikifeeds)",
        description="User-Agent sent upstream",
    )
    user_agent_env: Optional[str] = Field(
        None, description="Environment variable overriding the User-Agent"
    )


class MostReadConfig(BaseModel):
    """Most-read pipeline configuration."""

    max_titles: int = Field(50, description="Titles kept from the top list", ge=1, le=1000)
    desktop_titles_multiplier: int = Field(
        2, description="Desktop titles kept per combined title", ge=1, le=10
    )
    history_days: int = Field(5, description="Days of view history per article", ge=1, le=60)
    bot_filter_enabled: bool = Field(True, description="Compare desktop and combined views")
    bot_filter_threshold: float = Field(
        0.1, description="Minimum desktop or non-desktop share of views", ge=0.0, le=1.0
    )
    max_concurrent: int = Field(
        10, description="Concurrent enrichment requests per feed", ge=1, le=200
    )
    excluded_domains: List[str] = Field(
        default_factory=lambda: ["fy.wikipedia.org"],
        description="Domains that never get a most-read feed",
    )
    earliest_date: date = Field(
        date(2015, 7, 1), description="First date with pageview data"
    )
    deny_list: Dict[str, List[str]] = Field(
        default_factory=default_deny_list,
        description="Titles always excluded, keyed by locale ('*' for all)",
    )


class SiteInfoCacheConfig(BaseModel):
    """Site metadata cache configuration."""

    ttl_seconds: float = Field(3600.0, description="Entry lifetime in seconds", gt=0.0)
    max_entries: int = Field(256, description="Maximum cached domains", ge=1)


class ConfigModel(BaseModel):
    """Main configuration model."""

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    most_read: MostReadConfig = Field(default_factory=MostReadConfig)
    siteinfo_cache: SiteInfoCacheConfig = Field(default_factory=SiteInfoCacheConfig)
    log_level: str = Field("INFO", description="Root log level")
