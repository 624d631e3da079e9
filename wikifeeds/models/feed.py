"""Feed response models."""

import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .article import ResolvedArticle


class MostReadFeed(BaseModel):
    """Most-read feed payload."""

    date: str = Field(..., description="Result date (YYYY-MM-DDZ)")
    articles: List[ResolvedArticle] = Field(default_factory=list)

    def body(self) -> Dict[str, Any]:
        """Serialize to the feed JSON body."""
        return {
            "date": self.date,
            "articles": [article.to_feed_item() for article in self.articles],
        }


class FeedMeta(BaseModel):
    """Cache-relevant metadata for the caller."""

    revision: Optional[str] = Field(None, description="Revision token derived from the request date")
    vary: Optional[str] = Field(None, description="Vary header hint")


class MostReadResponse(BaseModel):
    """Result of one most-read request."""

    payload: Optional[MostReadFeed] = Field(None, description="Feed, absent for empty results")
    meta: FeedMeta = Field(default_factory=FeedMeta)

    @property
    def is_empty(self) -> bool:
        return self.payload is None

    def body(self) -> Dict[str, Any]:
        """JSON body; empty results serialize to {}."""
        if self.payload is None:
            return {}
        return self.payload.body()

    def headers(self, tid: Optional[str] = None) -> Dict[str, str]:
        """Response headers for the feed; empty results carry none."""
        headers = {}
        if self.meta.revision and not self.is_empty:
            headers["etag"] = etag(self.meta.revision, tid)
        if self.meta.vary:
            headers["vary"] = self.meta.vary
        return headers

    @classmethod
    def empty(cls) -> "MostReadResponse":
        return cls()


def etag(revision: str, tid: Optional[str] = None) -> str:
    """Build an ETag value from a revision and a time-based id."""
    if not tid:
        tid = str(uuid.uuid1())
    return f'"{revision}/{tid}"'
