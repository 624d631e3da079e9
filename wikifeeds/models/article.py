"""Article models carried through the most-read pipeline."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pageviews import DatedPageviews


class PageSummary(BaseModel):
    """Page summary from the content summary service.

    Upstream fields beyond the declared ones are kept as extras and end up
    in the feed output unchanged.
    """

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., description="Canonical title (db key form)")
    normalizedtitle: Optional[str] = Field(None, description="Display form of the title")
    description: Optional[str] = Field(None, description="Short description")
    extract: Optional[str] = Field(None, description="Plain text extract")
    thumbnail: Optional[Dict[str, Any]] = Field(None, description="Thumbnail image")


class ResolvedArticle(BaseModel):
    """Per-article working record after enrichment."""

    raw_title: str = Field(..., description="Title as reported by the pageview service")
    namespace: int = Field(0, description="Namespace id of the raw title")
    views: int = Field(..., description="Views on the result date", ge=0)
    rank: int = Field(0, description="Rank in the combined top list")
    view_history: List[DatedPageviews] = Field(
        default_factory=list, description="Trailing daily views, chronological"
    )
    summary: PageSummary = Field(..., description="Content summary")

    @property
    def title(self) -> str:
        """Canonical title after redirect resolution."""
        return self.summary.title

    def to_feed_item(self) -> Dict[str, Any]:
        """Shape the article for the feed response."""
        item = self.summary.model_dump(exclude_none=True)
        item["views"] = self.views
        item["rank"] = self.rank
        item["view_history"] = [entry.model_dump() for entry in self.view_history]
        return item
