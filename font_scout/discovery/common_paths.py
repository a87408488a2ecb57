"""Probing of well-known site sections (about, contact, ...) with HEAD requests."""

import asyncio
import contextlib
from typing import Dict, List, Optional, Sequence, Set

import aiohttp

from font_scout.discovery.models import DiscoveredPage, PageSource
from font_scout.logger import logger
from font_scout.utils import normalize_url

COMMON_PATH_PRIORITIES: Dict[str, int] = {
    "/about": 70,
    "/about-us": 70,
    "/contact": 65,
    "/contact-us": 65,
    "/services": 60,
    "/products": 60,
    "/portfolio": 55,
    "/team": 50,
    "/blog": 45,
    "/news": 45,
    "/careers": 40,
    "/support": 40,
    "/help": 40,
    "/faq": 35,
    "/pricing": 35,
    "/features": 35,
}
DEFAULT_PATH_PRIORITY = 30


def common_path_priority(path: str) -> int:
    """Fixed priority of a well-known path, 30 for anything else."""
    return COMMON_PATH_PRIORITIES.get(path, DEFAULT_PATH_PRIORITY)


class PathProber:
    """Checks which candidate paths exist on a site."""

    def __init__(
        self,
        origin: str,
        paths: Sequence[str],
        timeout: float,
        concurrency: Optional[int] = None,
    ) -> None:
        self.origin: str = origin
        self.paths: List[str] = list(paths)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.semaphore = asyncio.Semaphore(concurrency) if concurrency else None

    async def probe(self, session: aiohttp.ClientSession, path: str) -> Optional[DiscoveredPage]:
        """HEAD the path; a final status of 200 means the page exists."""
        url = f"{self.origin}{path}"
        limiter = self.semaphore if self.semaphore is not None else contextlib.nullcontext()
        async with limiter:
            try:
                async with session.head(url, allow_redirects=True, timeout=self.timeout) as response:
                    if response.status != 200:
                        return None
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug("Common path %s unreachable: %s", url, e)
                return None
        return DiscoveredPage(
            url=normalize_url(url),
            priority=common_path_priority(path),
            source=PageSource.COMMON_PATH,
        )

    async def run(self, session: aiohttp.ClientSession) -> List[DiscoveredPage]:
        """Probe every path concurrently; results keep the order of ``paths``."""
        tasks = [asyncio.create_task(self.probe(session, path)) for path in self.paths]
        results = await asyncio.gather(*tasks)
        return [r for r in results if r is not None]


async def discover_common_paths(
    session: aiohttp.ClientSession,
    origin: str,
    *,
    timeout: float,
    concurrency: Optional[int] = None,
    skip: Optional[Set[str]] = None,
) -> List[DiscoveredPage]:
    """Common-path source: well-known paths that answer 200.

    URLs already in *skip* (normalized) are not probed.
    """
    skip = skip or set()
    paths = [p for p in COMMON_PATH_PRIORITIES if normalize_url(f"{origin}{p}") not in skip]
    found = await PathProber(origin, paths, timeout, concurrency).run(session)
    logger.info("Found %d common pages on %s", len(found), origin)
    return found
