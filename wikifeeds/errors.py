"""Error types surfaced by the feed pipeline."""

from typing import Any, Dict, Optional


class FeedError(Exception):
    """Error wrapping an HTTP problem response."""

    def __init__(
        self,
        status: int = 500,
        type: str = "internal_error",
        title: str = "Internal error",
        detail: Optional[Any] = None,
    ) -> None:
        """Initialize feed error."""
        self.status = status
        self.type = type
        self.title = title
        self.detail = detail if detail is not None else ""
        super().__init__(f"{status}: {type}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a problem response body."""
        return {
            "status": self.status,
            "type": self.type,
            "title": self.title,
            "detail": self.detail,
        }

    @classmethod
    def invalid_date(cls, detail: str = "Invalid date") -> "FeedError":
        return cls(400, "invalid_request", "Invalid date", detail)

    @classmethod
    def not_found(cls, detail: str = "No results found.") -> "FeedError":
        return cls(404, "not_found", "Not found", detail)

    @classmethod
    def internal_error(cls, detail: str = "An internal error occurred") -> "FeedError":
        return cls(500, "internal_error", "Internal error", detail)

    @classmethod
    def upstream_error(cls, detail: Any) -> "FeedError":
        return cls(504, "api_error", "Upstream API error", detail)


class InvalidTitleError(ValueError):
    """Raised when a page title cannot be parsed."""

    def __init__(self, title: str, reason: str) -> None:
        self.title = title
        self.reason = reason
        super().__init__(f"{reason}: {title!r}")
