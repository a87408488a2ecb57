# font_scout/discovery/models.py
"""
Data models for page discovery.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PageSource(str, Enum):
    """Where a discovered page came from."""

    ORIGINAL = "original"
    SITEMAP = "sitemap"
    INTERNAL_LINK = "internal-link"
    COMMON_PATH = "common-path"


@dataclass(slots=True)
class DiscoveredPage:
    """A normalized same-site URL with its ranking; higher priority wins."""

    url: str
    priority: float
    source: PageSource
    title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "priority": self.priority, "source": self.source.value}
        if self.title is not None:
            data["title"] = self.title
        return data


@dataclass(slots=True)
class PageLink:
    """An anchor found on a rendered page: absolute URL and visible text."""

    url: str
    text: str = ""


@dataclass(slots=True)
class PageSnapshot:
    """What a page reader reports after loading a page."""

    url: str
    title: Optional[str] = None
    links: List[PageLink] = field(default_factory=list)
