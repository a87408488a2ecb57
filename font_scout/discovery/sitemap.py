# File: font_scout/discovery/sitemap.py
"""font_scout.discovery.sitemap: sitemap probing and ``<loc>`` extraction."""

from __future__ import annotations

import asyncio
from typing import Final, List, Optional, Sequence, Union

from aiohttp import ClientError, ClientSession, ClientTimeout
from lxml import etree

from font_scout.discovery.models import DiscoveredPage, PageSource
from font_scout.logger import logger
from font_scout.utils import normalize_url, url_origin

__all__: Sequence[str] = (
    "SITEMAP_PATHS",
    "SITEMAP_BASE_PRIORITY",
    "parse_sitemap",
    "same_origin_locs",
    "sitemap_candidates",
    "fetch_sitemap_urls",
    "discover_from_sitemap",
)

SITEMAP_PATHS: Final[tuple[str, ...]] = ("/sitemap.xml", "/sitemap_index.xml", "/sitemaps.xml")
SITEMAP_BASE_PRIORITY: Final[int] = 80


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Return the text of every ``<loc>`` element, in document order.

    Args:
        xml_content: body of a sitemap or sitemap index.

    Returns:
        List of URLs; an unparseable document yields an empty list.

    Example:
    ```python
    from font_scout.discovery.sitemap import parse_sitemap

    urls = parse_sitemap("<urlset><url><loc>https://a.com/x</loc></url></urlset>")
    ```
    """
    data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.debug("Sitemap is not XML: %s", exc)
        return []
    if root is None:
        return []
    return [loc.text.strip() for loc in root.iter("{*}loc") if loc.text and loc.text.strip()]


def _is_same_origin(url: str, origin: str) -> bool:
    try:
        return url_origin(normalize_url(url)) == origin
    except ValueError:
        return False


def same_origin_locs(locs: Sequence[str], origin: str, limit: int) -> List[str]:
    """Keep URLs whose scheme, host and port equal *origin* and cap them to *limit*."""
    return [u for u in locs if _is_same_origin(u, origin)][:limit]


def sitemap_candidates(urls: Sequence[str]) -> List[DiscoveredPage]:
    """Later sitemap entries decay: ``80 - index``."""
    return [
        DiscoveredPage(url=normalize_url(url), priority=SITEMAP_BASE_PRIORITY - index, source=PageSource.SITEMAP)
        for index, url in enumerate(urls)
    ]


async def fetch_sitemap_urls(
    session: ClientSession,
    origin: str,
    *,
    timeout: float,
    limit: int,
) -> Optional[List[str]]:
    """Try the well-known sitemap locations in order; stop at the first 2xx.

    Returns None when none of them answered successfully.
    """
    for path in SITEMAP_PATHS:
        url = f"{origin}{path}"
        try:
            async with session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if not 200 <= resp.status < 300:
                    logger.debug("Sitemap %s -> HTTP %s", url, resp.status)
                    continue
                body = await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Sitemap %s unreachable: %s", url, exc)
            continue
        urls = same_origin_locs(parse_sitemap(body), origin, limit)
        logger.info("Found %d URLs in sitemap %s", len(urls), url)
        return urls
    return None


async def discover_from_sitemap(
    session: ClientSession,
    origin: str,
    *,
    timeout: float,
    limit: int,
) -> List[DiscoveredPage]:
    """Sitemap source: ranked candidates, empty when no sitemap is reachable."""
    urls = await fetch_sitemap_urls(session, origin, timeout=timeout, limit=limit)
    if urls is None:
        logger.info("No sitemap found at %s", origin)
        return []
    return sitemap_candidates(urls)
