"""Generic helpers: concurrent resolution, deduplication, dates and titles."""

from .dedupe import collapse_duplicates, dedupe_articles, merge_article_views
from .resolver import FailurePolicy, IgnoreFailures, PropagateFailures, resolve_all
from .title import Title, to_db_key

__all__ = [
    "FailurePolicy",
    "IgnoreFailures",
    "PropagateFailures",
    "Title",
    "collapse_duplicates",
    "dedupe_articles",
    "merge_article_views",
    "resolve_all",
    "to_db_key",
]
