"""font_scout.discovery: ranking the same-site pages worth analysing."""

from .crawler import PageDiscovery, discover_pages, merge_candidates, select_pages
from .links import HttpPageReader, PageReader
from .models import DiscoveredPage, PageLink, PageSnapshot, PageSource

__all__ = [
    "DiscoveredPage",
    "PageLink",
    "PageSnapshot",
    "PageSource",
    "PageReader",
    "HttpPageReader",
    "PageDiscovery",
    "discover_pages",
    "merge_candidates",
    "select_pages",
]
