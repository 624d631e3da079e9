"""Most-read eligibility filters."""

from .most_read import (
    BOT_FILTER_THRESHOLD,
    MAIN_NAMESPACE,
    DenyList,
    filter_bots,
    is_in_main_namespace,
    is_not_main_page,
)

__all__ = [
    "BOT_FILTER_THRESHOLD",
    "DenyList",
    "MAIN_NAMESPACE",
    "filter_bots",
    "is_in_main_namespace",
    "is_not_main_page",
]
