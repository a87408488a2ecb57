from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlsplit

from aiohttp import ClientSession

from font_scout.config import DiscoveryConfig
from font_scout.discovery.common_paths import discover_common_paths
from font_scout.discovery.links import HttpPageReader, PageReader, discover_from_links
from font_scout.discovery.models import DiscoveredPage, PageSource
from font_scout.discovery.sitemap import discover_from_sitemap
from font_scout.utils import normalize_url, url_origin

__all__ = ("ORIGINAL_PRIORITY", "merge_candidates", "select_pages", "PageDiscovery", "discover_pages")

ORIGINAL_PRIORITY = 100


def merge_candidates(
    pages: Dict[str, DiscoveredPage],
    candidates: Iterable[DiscoveredPage],
    limit: int,
) -> int:
    """Insert candidates whose URL is not known yet while *pages* holds fewer than *limit* entries.

    The first source to record a URL keeps it. Returns the number of inserted pages.
    """
    added = 0
    for page in candidates:
        if len(pages) >= limit:
            break
        if page.url in pages:
            continue
        pages[page.url] = page
        added += 1
    return added


def select_pages(pages: Iterable[DiscoveredPage], max_pages: int) -> List[DiscoveredPage]:
    """Highest priority first, the original page always leading; cut to *max_pages*."""
    ranked = sorted(pages, key=lambda p: (p.source is not PageSource.ORIGINAL, -p.priority))
    return ranked[:max_pages]


class PageDiscovery:
    """Finds the pages of a site worth analysing next to the one requested."""

    def __init__(
        self,
        config: Optional[DiscoveryConfig] = None,
        *,
        session: Optional[ClientSession] = None,
        page_reader: Optional[PageReader] = None,
    ) -> None:
        self.config = config or DiscoveryConfig()
        self.session: Optional[ClientSession] = session
        self.page_reader: Optional[PageReader] = page_reader
        self._owns_session = session is None
        self.logger = logging.getLogger("FontScout")

    async def __aenter__(self) -> PageDiscovery:
        if self.session is None:
            self.session = ClientSession(headers={"User-Agent": self.config.user_agent})
        if self.page_reader is None:
            self.page_reader = HttpPageReader(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def discover(self, base_url: str) -> List[DiscoveredPage]:
        if self.session is None or self.page_reader is None:
            raise RuntimeError("Session not initialized")
        cfg = self.config
        start = time.monotonic()
        root = normalize_url(base_url)
        pages: Dict[str, DiscoveredPage] = {
            root: DiscoveredPage(url=root, priority=ORIGINAL_PRIORITY, source=PageSource.ORIGINAL)
        }
        try:
            origin = url_origin(root)
            host = urlsplit(root).hostname
        except ValueError:
            host = None
        if not host or not root.startswith(("http://", "https://")):
            self.logger.warning("Cannot discover pages for malformed URL %s", base_url)
            return list(pages.values())
        self.logger.info("Discovering pages for %s", root)

        found = await discover_from_sitemap(
            self.session, origin, timeout=cfg.sitemap_timeout, limit=cfg.sitemap_limit
        )
        self.logger.debug("Sitemap added %d pages", merge_candidates(pages, found, cfg.max_pages))

        title, found = await discover_from_links(
            self.page_reader, root, timeout=cfg.timeout, include_subdomains=cfg.include_subdomains
        )
        if title:
            pages[root].title = title
        self.logger.debug("Links added %d pages", merge_candidates(pages, found, cfg.link_soft_cap))

        if len(pages) < cfg.max_pages:
            found = await discover_common_paths(
                self.session,
                origin,
                timeout=cfg.probe_timeout,
                concurrency=cfg.probe_concurrency,
                skip=set(pages),
            )
            self.logger.debug("Common paths added %d pages", merge_candidates(pages, found, cfg.max_pages))

        result = select_pages(pages.values(), cfg.max_pages)
        duration = time.monotonic() - start
        self.logger.info("Discovered %d pages (%d candidates) in %.2f s", len(result), len(pages), duration)
        return result


async def discover_pages(
    base_url: str,
    config: Optional[DiscoveryConfig] = None,
    *,
    session: Optional[ClientSession] = None,
    page_reader: Optional[PageReader] = None,
) -> List[DiscoveredPage]:
    """Run a single discovery for *base_url* and return the ranked pages."""
    async with PageDiscovery(config, session=session, page_reader=page_reader) as discovery:
        return await discovery.discover(base_url)
