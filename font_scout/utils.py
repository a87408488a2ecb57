# File: font_scout/utils.py
"""font_scout.utils: URL canonicalisation used as the deduplication key across FontScout."""

from __future__ import annotations

from typing import Collection, Final, FrozenSet, List, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from font_scout.logger import logger

__all__: Sequence[str] = (
    "TRACKING_PARAMS",
    "normalize_url",
    "url_origin",
    "is_same_site",
    "remove_duplicates",
)

TRACKING_PARAMS: Final[FrozenSet[str]] = frozenset(
    {
        "fbclid",
        "gclid",
        "ref",
        "source",
        "campaign",
        "sessionid",
        "sid",
        "_ga",
        "_gid",
        "timestamp",
    }
)
_TRACKING_PREFIX: Final[str] = "utm_"
_DEFAULT_PORTS: Final[dict[str, int]] = {"http": 80, "https": 443}


def _is_tracking_param(name: str) -> bool:
    return name in TRACKING_PARAMS or name.startswith(_TRACKING_PREFIX)


def normalize_url(url: str) -> str:
    """Canonicalise *url* for use as a deduplication key.

    Adds ``https://`` when no http(s) scheme is present, drops the fragment and
    tracking parameters, lower-cases scheme and host, removes the default port
    and strips the trailing slash. Re-normalising the result returns it
    unchanged. Input that cannot be parsed as a URL is returned as is.
    """
    candidate = url.strip()
    if not candidate.lower().startswith(("http://", "https://")):
        candidate = f"https://{candidate}"

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        logger.debug("Cannot parse URL for normalization: %s", url)
        return url
    if not hostname:
        logger.debug("URL has no host, left unchanged: %s", url)
        return url

    scheme = parts.scheme.lower()
    netloc = hostname if ":" not in hostname else f"[{hostname}]"
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    query = ""
    if parts.query:
        pairs = parse_qsl(parts.query, keep_blank_values=True)
        query = urlencode([(k, v) for k, v in pairs if not _is_tracking_param(k)])

    normalized = urlunsplit((scheme, netloc, parts.path or "/", query, ""))
    # one trailing slash may survive a run like "/x//"; strip them all
    normalized = normalized.rstrip("/")
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def url_origin(url: str) -> str:
    """Return ``scheme://host[:port]`` of an already normalized URL."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def is_same_site(url: str, base_url: str, include_subdomains: bool = False) -> bool:
    """Check that *url* is http(s) and lives on the host of *base_url*.

    With *include_subdomains* any host below the base host is accepted too.
    """
    try:
        target = urlsplit(url)
        base_host = urlsplit(base_url).hostname
    except ValueError:
        return False
    if target.scheme not in ("http", "https") or not target.hostname or not base_host:
        return False
    if target.hostname == base_host:
        return True
    return include_subdomains and target.hostname.endswith(f".{base_host}")


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Remove URLs whose normalized form was already seen, keeping order."""
    first_seen: dict[str, str] = {}
    for u in urls:
        first_seen.setdefault(normalize_url(u), u)
    unique = list(first_seen.values())
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
