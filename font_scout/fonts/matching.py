"""
Reconciling active CSS font families with the font files a page downloaded.

Three strategies run in order and the first hit wins:

1. ``font-face`` - pool the ``@font-face`` rules of the family and compare
   their ``src`` URLs with the downloaded URLs;
2. ``metadata`` - compare the family with names read from the binaries and
   with Google Fonts URL slugs, for pages whose stylesheets were unreadable;
3. ``direct-name`` - increasingly loose comparisons against every name the
   binary carries.

A family without a matching file is a normal outcome, not an error.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

from font_scout.fonts.css import extract_src_urls, strip_quotes
from font_scout.fonts.models import ActiveFont, DownloadedFontFile, FontFaceDeclaration

__all__: Sequence[str] = (
    "FontMatch",
    "clean_font_name",
    "urls_match",
    "google_fonts_paths_match",
    "service_paths_match",
    "google_font_slug",
    "readable_google_name",
    "declarations_for",
    "match_by_declarations",
    "match_by_metadata",
    "match_by_direct_name",
    "STRATEGIES",
    "resolve_font",
    "find_matching_font_file",
    "find_all_matching_font_files",
    "get_correct_font_family",
)

GSTATIC_HOST = "fonts.gstatic.com"
GOOGLE_FONTS_SOURCE = "Google Fonts"

_GOOGLE_PATH_RE = re.compile(r"^/s/([^/]+)/([^/]+)/")
_GOOGLE_SLUG_RE = re.compile(r"/s/([^/]+)/")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

Strategy = Callable[
    [str, Sequence[DownloadedFontFile], Sequence[FontFaceDeclaration]],
    Optional[DownloadedFontFile],
]
ActiveFontLike = Union[ActiveFont, str]


@dataclass(frozen=True, slots=True)
class FontMatch:
    """Outcome of the cascade: the file (if any), the display family and which strategy hit."""

    file: Optional[DownloadedFontFile]
    family: str
    strategy: Optional[str] = None


def clean_font_name(name: str) -> str:
    """Comparison form of a family name: lower-case, no quotes, trimmed."""
    return strip_quotes(name.lower())


def _compact(name: str) -> str:
    return _WHITESPACE_RE.sub("", name)


def _family_of(active: ActiveFontLike) -> str:
    return active if isinstance(active, str) else active.family


# --------------------------------------------------------------------------- #
# URL comparison                                                              #
# --------------------------------------------------------------------------- #


def google_fonts_paths_match(downloaded_path: str, css_path: str) -> bool:
    """``/s/<family>/<version>/...`` must agree on both family and version."""
    downloaded = _GOOGLE_PATH_RE.match(downloaded_path)
    css = _GOOGLE_PATH_RE.match(css_path)
    if not downloaded or not css:
        return False
    return downloaded.groups() == css.groups()


def service_paths_match(downloaded_path: str, css_path: str) -> bool:
    """At least two leading path segments in common."""
    common = 0
    for left, right in zip(
        [s for s in downloaded_path.split("/") if s],
        [s for s in css_path.split("/") if s],
    ):
        if left != right:
            break
        common += 1
    return common >= 2


def _file_name(url: str) -> str:
    return url.split("/")[-1].split("?")[0]


def urls_match(downloaded_url: str, css_url: str) -> bool:
    """Compare a downloaded font URL with a URL written in a ``src`` value.

    Order: exact; one ends with the other (relative CSS URLs); same host with
    the Google Fonts rule for ``fonts.gstatic.com`` and the shared-prefix rule
    elsewhere; bare file name equality.
    """
    if not downloaded_url or not css_url:
        return False
    if downloaded_url == css_url:
        return True
    if downloaded_url.endswith(css_url) or css_url.endswith(downloaded_url):
        return True

    try:
        downloaded = urlsplit(downloaded_url)
        css = urlsplit(css_url)
        same_host = bool(downloaded.hostname) and downloaded.hostname == css.hostname
    except ValueError:
        same_host = False

    if same_host:
        if downloaded.hostname == GSTATIC_HOST:
            return google_fonts_paths_match(downloaded.path, css.path)
        if service_paths_match(downloaded.path, css.path):
            return True

    downloaded_name = _file_name(downloaded_url)
    return bool(downloaded_name) and downloaded_name == _file_name(css_url)


# --------------------------------------------------------------------------- #
# Strategies                                                                  #
# --------------------------------------------------------------------------- #


def declarations_for(family: str, declarations: Sequence[FontFaceDeclaration]) -> List[FontFaceDeclaration]:
    """All rules of *family*; weights and styles of one family share its name."""
    return [d for d in declarations if clean_font_name(d.family) == family]


def match_by_declarations(
    family: str,
    fonts: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration],
) -> Optional[DownloadedFontFile]:
    css_urls = [url for d in declarations_for(family, declarations) for url in extract_src_urls(d.source)]
    if not css_urls:
        return None
    for font in fonts:
        if any(urls_match(font.url, css_url) for css_url in css_urls):
            return font
    return None


def google_font_slug(url: str) -> Optional[str]:
    """Family slug of a Google Fonts URL: ``/s/nanumgothic/v17/x.woff2`` → ``nanumgothic``."""
    found = _GOOGLE_SLUG_RE.search(url)
    return found.group(1) if found else None


def readable_google_name(slug: str) -> str:
    """Space before each inner capital and a capital first letter: ``openSans`` → ``Open Sans``."""
    readable = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", slug)
    return readable[:1].upper() + readable[1:]


def _google_slug_matches(family: str, url: str) -> bool:
    slug = google_font_slug(url)
    if slug is None:
        return False
    clean_slug = clean_font_name(slug)
    compact_family = _compact(family)
    return (
        clean_font_name(readable_google_name(slug)) == family
        or clean_slug == compact_family
        or clean_slug in compact_family
    )


def match_by_metadata(
    family: str,
    fonts: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration],
) -> Optional[DownloadedFontFile]:
    for font in fonts:
        if font.metadata and font.metadata.font_family and clean_font_name(font.metadata.font_family) == family:
            return font
    for font in fonts:
        if font.metadata and font.metadata.font_name and clean_font_name(font.metadata.font_name) == family:
            return font
    for font in fonts:
        if GSTATIC_HOST in font.url and _google_slug_matches(family, font.url):
            return font

    active_key = _NON_ALNUM_RE.sub("", family)
    for font in fonts:
        if font.source != GOOGLE_FONTS_SOURCE:
            continue
        name_key = _NON_ALNUM_RE.sub("", font.name.lower())
        if active_key and name_key and (active_key in name_key or name_key in active_key):
            return font
    return None


def _exact(active: str, candidate: str) -> bool:
    return active == candidate


def _compact_containment(active: str, candidate: str) -> bool:
    left, right = _compact(active), _compact(candidate)
    return bool(left and right) and (left in right or right in left)


def _word_containment(active: str, candidate: str) -> bool:
    active_words = active.split()
    candidate_words = candidate.split()
    return bool(active_words) and all(
        any(word in other or other in word for other in candidate_words) for word in active_words
    )


def _first_word(active: str, candidate: str) -> bool:
    active_words = active.split()
    candidate_words = candidate.split()
    if not active_words or not candidate_words:
        return False
    head, other = active_words[0], candidate_words[0]
    return len(head) > 3 and len(other) > 3 and head == other


_NAME_CHECKS: Tuple[Callable[[str, str], bool], ...] = (
    _exact,
    _compact_containment,
    _word_containment,
    _first_word,
)


def _metadata_names(font: DownloadedFontFile) -> List[str]:
    md = font.metadata
    if md is None:
        return []
    names = (md.font_name, md.font_family, md.unique_identifier)
    return [clean_font_name(n) for n in names if n]


def match_by_direct_name(
    family: str,
    fonts: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration],
) -> Optional[DownloadedFontFile]:
    candidates = [(font, _metadata_names(font)) for font in fonts]
    for check in _NAME_CHECKS:
        for font, names in candidates:
            if any(check(family, name) for name in names):
                return font
    return None


STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("font-face", match_by_declarations),
    ("metadata", match_by_metadata),
    ("direct-name", match_by_direct_name),
)


# --------------------------------------------------------------------------- #
# Public entry points                                                         #
# --------------------------------------------------------------------------- #


def _display_family(
    active_family: str,
    font: DownloadedFontFile,
    declarations: Sequence[FontFaceDeclaration],
) -> str:
    if font.metadata and font.metadata.font_family:
        return font.metadata.font_family
    if font.metadata and font.metadata.font_name:
        return font.metadata.font_name
    declared = declarations_for(clean_font_name(active_family), declarations)
    if declared:
        return strip_quotes(declared[0].family)
    return active_family


def resolve_font(
    active: ActiveFontLike,
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration] = (),
) -> FontMatch:
    """Run the cascade and report the file, display family and strategy."""
    active_family = _family_of(active)
    if not downloaded:
        return FontMatch(None, active_family)
    family = clean_font_name(active_family)
    for label, strategy in STRATEGIES:
        found = strategy(family, downloaded, declarations)
        if found is not None:
            return FontMatch(found, _display_family(active_family, found, declarations), label)
    return FontMatch(None, active_family)


def find_matching_font_file(
    active: ActiveFontLike,
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration] = (),
) -> Optional[DownloadedFontFile]:
    return resolve_font(active, downloaded, declarations).file


def get_correct_font_family(
    active: ActiveFontLike,
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration] = (),
) -> str:
    """Name to display for *active*: binary metadata first, CSS family, then the input unchanged."""
    return resolve_font(active, downloaded, declarations).family


def find_all_matching_font_files(
    active: ActiveFontLike,
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration] = (),
) -> List[DownloadedFontFile]:
    """Every file of the first strategy that matches at least one, e.g. all weights of a family."""
    if not downloaded:
        return []
    family = clean_font_name(_family_of(active))
    for _, strategy in STRATEGIES:
        matches = [font for font in downloaded if strategy(family, [font], declarations) is not None]
        if matches:
            return matches
    return []
