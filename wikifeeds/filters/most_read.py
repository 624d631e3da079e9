"""Filters deciding which top-viewed articles belong in the most-read feed."""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..errors import FeedError
from ..models import PageviewEntry

logger = logging.getLogger(__name__)

MAIN_NAMESPACE = 0

# Articles with less than this proportion of pageviews on either desktop or
# mobile are likely bot traffic. Must be in the interval [0, 1].
BOT_FILTER_THRESHOLD = 0.1


class DenyList:
    """Titles always excluded from the feed, per locale."""

    def __init__(self, titles: Mapping[str, Iterable[str]]) -> None:
        self.titles = {locale: frozenset(values) for locale, values in titles.items()}

    def is_allowed(self, locale: str, canonical_title: str) -> bool:
        """Whether a db key title is absent from the locale and universal lists."""
        for key in (locale, "*"):
            if canonical_title in self.titles.get(key, ()):
                return False
        return True


def is_in_main_namespace(namespace: int) -> bool:
    return namespace == MAIN_NAMESPACE


def is_not_main_page(canonical_title: str, main_page_title: str) -> bool:
    """Whether a title differs, ignoring case, from the site's main page."""
    return canonical_title.casefold() != main_page_title.casefold()


def filter_bots(
    combined: Sequence[PageviewEntry],
    desktop: Sequence[PageviewEntry],
    threshold: float = BOT_FILTER_THRESHOLD,
) -> List[PageviewEntry]:
    """
    Drop articles whose views are almost all desktop or almost all mobile.

    Top-viewed articles with a very uneven desktop/mobile mix are presumed to
    be inflated by automated traffic. An entry is kept when its desktop views
    D and total views V satisfy ``V * t <= D <= V * (1 - t)``; entries
    missing from the desktop list are dropped.

    Args:
        combined: Top list across all platforms
        desktop: Top list for desktop only, covering more ranks than
            ``combined`` so edge ranks can still be compared
        threshold: Minimum share ``t`` of either platform

    Raises:
        FeedError: 500 if ``threshold`` is outside [0, 1]
    """
    if threshold < 0 or threshold > 1:
        logger.error("Bot filter threshold %s is outside [0, 1]", threshold)
        raise FeedError.internal_error()

    desktop_views: Dict[str, int] = {entry.title: entry.views for entry in desktop}

    kept = []
    for entry in combined:
        views: Optional[int] = desktop_views.get(entry.title)
        if views is None:
            continue
        if entry.views * threshold <= views <= entry.views * (1 - threshold):
            kept.append(entry)

    dropped = len(combined) - len(kept)
    if dropped:
        logger.debug("Bot filter dropped %d of %d entries", dropped, len(combined))
    return kept
