"""Collapsing of duplicate entries in ordered sequences."""

from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

from ..models import ResolvedArticle

T = TypeVar("T")


def collapse_duplicates(
    items: Iterable[T],
    key: Callable[[T], Hashable],
    combine: Callable[[T, T], None],
) -> List[T]:
    """
    Keep one item per key, at the position of its first occurrence.

    Args:
        items: Ordered items
        key: Identity of an item
        combine: Called as ``combine(first, later)`` for every later
            occurrence; updates ``first`` in place

    Returns:
        Items with duplicates folded into their first occurrence
    """
    seen: Dict[Hashable, T] = {}
    result: List[T] = []

    for item in items:
        item_key = key(item)
        if item_key in seen:
            combine(seen[item_key], item)
        else:
            seen[item_key] = item
            result.append(item)

    return result


def merge_article_views(original: ResolvedArticle, dupe: ResolvedArticle) -> None:
    """Add a duplicate's views into the original, date by date."""
    original.views += dupe.views

    # The original's date window is authoritative
    dupe_views: Dict[str, int] = {}
    for entry in dupe.view_history:
        dupe_views[entry.date] = dupe_views.get(entry.date, 0) + entry.views

    for entry in original.view_history:
        if entry.date in dupe_views:
            entry.views += dupe_views[entry.date]


def dedupe_articles(articles: Iterable[ResolvedArticle]) -> List[ResolvedArticle]:
    """Merge articles reached through different redirect titles."""
    return collapse_duplicates(articles, lambda article: article.title, merge_article_views)
