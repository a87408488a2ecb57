"""
In-page link discovery: read the base page, rank its same-site anchors.

Loading the page is delegated to a :class:`PageReader`. A browser automation
layer can plug in its own reader; :class:`HttpPageReader` fetches the HTML
with aiohttp and reads it with BeautifulSoup.
"""
from __future__ import annotations

from typing import Final, List, Optional, Protocol, Sequence, Tuple
from urllib.parse import urljoin

from aiohttp import ClientSession, ClientTimeout
from bs4 import BeautifulSoup
from bs4.element import Tag

from font_scout.discovery.models import DiscoveredPage, PageLink, PageSnapshot, PageSource
from font_scout.logger import logger
from font_scout.utils import is_same_site, normalize_url

__all__: Sequence[str] = (
    "PageReader",
    "HttpPageReader",
    "extract_page_snapshot",
    "link_priority",
    "link_candidates",
    "discover_from_links",
)

LINK_BASE_PRIORITY: Final[int] = 50
LINK_MIN_PRIORITY: Final[int] = 10
LINK_ORDER_PENALTY: Final[float] = 0.1

HIGH_PRIORITY_KEYWORDS: Final[tuple[str, ...]] = ("about", "contact", "service", "product", "home", "main")
MEDIUM_PRIORITY_KEYWORDS: Final[tuple[str, ...]] = ("blog", "news", "team", "portfolio", "gallery")
LOW_PRIORITY_KEYWORDS: Final[tuple[str, ...]] = ("login", "register", "admin", "api", "download", "pdf")


class PageReader(Protocol):
    """Loads a page and reports its title and anchors."""

    async def read(self, url: str, timeout: float) -> PageSnapshot:
        ...


def extract_page_snapshot(html: str, url: str) -> PageSnapshot:
    """
    Extract the title and every http(s)-resolvable anchor of an HTML page.

    Ignores mailto: and javascript: links; relative hrefs are resolved
    against *url*.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else None
    links: List[PageLink] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(("mailto:", "javascript:", "tel:")):
            continue
        links.append(PageLink(url=urljoin(url, raw), text=tag.get_text(" ", strip=True)))
    return PageSnapshot(url=url, title=title or None, links=links)


class HttpPageReader:
    """Plain HTTP page reader: no JavaScript, static anchors only."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def read(self, url: str, timeout: float) -> PageSnapshot:
        async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
            resp.raise_for_status()
            html = await resp.text(errors="replace")
            final_url = str(resp.url)
        return extract_page_snapshot(html, final_url)


def link_priority(url: str, text: str) -> int:
    """Score a link by the keywords in its URL or text; never below 10."""
    url_lower = url.lower()
    text_lower = text.lower()
    priority = LINK_BASE_PRIORITY
    for keywords, weight in (
        (HIGH_PRIORITY_KEYWORDS, 20),
        (MEDIUM_PRIORITY_KEYWORDS, 10),
        (LOW_PRIORITY_KEYWORDS, -20),
    ):
        for keyword in keywords:
            if keyword in url_lower or keyword in text_lower:
                priority += weight
    return max(priority, LINK_MIN_PRIORITY)


def link_candidates(
    links: Sequence[PageLink],
    base_url: str,
    include_subdomains: bool = False,
) -> List[DiscoveredPage]:
    """Rank same-site links; later links lose ``0.1`` per position to break ties."""
    same_site = [link for link in links if is_same_site(link.url, base_url, include_subdomains)]
    candidates: List[DiscoveredPage] = []
    for index, link in enumerate(same_site):
        url = normalize_url(link.url)
        candidates.append(
            DiscoveredPage(
                url=url,
                priority=link_priority(url, link.text) - index * LINK_ORDER_PENALTY,
                source=PageSource.INTERNAL_LINK,
                title=link.text or None,
            )
        )
    return candidates


async def discover_from_links(
    reader: PageReader,
    base_url: str,
    *,
    timeout: float,
    include_subdomains: bool = False,
) -> Tuple[Optional[str], List[DiscoveredPage]]:
    """Internal-link source: the page title and ranked candidates.

    Any failure of the reader (navigation error, timeout) yields ``(None, [])``.
    """
    try:
        snapshot = await reader.read(base_url, timeout)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Main page crawling failed for %s: %s", base_url, exc)
        return None, []
    candidates = link_candidates(snapshot.links, base_url, include_subdomains)
    logger.info("Found %d internal links on %s", len(candidates), base_url)
    return snapshot.title, candidates
