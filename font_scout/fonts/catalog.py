# File: font_scout/fonts/catalog.py
"""font_scout.fonts.catalog: Describing, annotating and grouping the font files a page downloaded."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence, Tuple

from font_scout.fonts.errors import FontMetadataError
from font_scout.fonts.matching import GOOGLE_FONTS_SOURCE, GSTATIC_HOST, google_font_slug, readable_google_name
from font_scout.fonts.metadata import extract_metadata, metadata_summary
from font_scout.fonts.models import DownloadedFontFile, FontFaceDeclaration
from font_scout.logger import logger

__all__: Sequence[str] = (
    "FONT_URL_RE",
    "is_font_url",
    "font_format_from_url",
    "classify_font_source",
    "describe_font_file",
    "annotate_font_file",
    "dedupe_font_files",
    "reconstruct_google_declarations",
)

FONT_URL_RE = re.compile(r"\.(woff2?|ttf|otf|eot)($|\?)", re.IGNORECASE)

# checked in order: ".woff2" must win over ".woff"
_FORMATS: Tuple[str, ...] = ("woff2", "woff", "ttf", "otf", "eot")

_SOURCES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("fonts.googleapis.com", "fonts.gstatic.com"), "Google Fonts"),
    (("use.typekit.net", "p.typekit.net"), "Adobe Fonts"),
    (("cloud.typography.com",), "Hoefler&Co"),
    (("fast.fonts.net",), "Monotype"),
    (("cdn",), "CDN"),
)

_WEIGHT_RE = re.compile(r"(\d{3})")


def is_font_url(url: str) -> bool:
    """True for URLs whose path ends in a web font extension."""
    return bool(FONT_URL_RE.search(url))


def font_format_from_url(url: str) -> str:
    lowered = url.lower()
    for fmt in _FORMATS:
        if f".{fmt}" in lowered:
            return fmt
    return "unknown"


def classify_font_source(url: str) -> str:
    """Name the service that served *url*, ``self-hosted`` when none is recognised."""
    for markers, label in _SOURCES:
        if any(marker in url for marker in markers):
            return label
    return "self-hosted"


def describe_font_file(url: str, data: bytes) -> DownloadedFontFile:
    """Describe a downloaded font from its URL and body, without metadata."""
    return DownloadedFontFile(
        name=url.split("/")[-1].split("?")[0],
        url=url,
        format=font_format_from_url(url),
        size=len(data),
        source=classify_font_source(url),
    )


def annotate_font_file(font: DownloadedFontFile, data: bytes) -> DownloadedFontFile:
    """Return a copy of *font* carrying the metadata read from *data*.

    A file whose metadata cannot be read keeps ``metadata=None``; one broken
    font never aborts the batch it belongs to.
    """
    try:
        metadata = extract_metadata(data, font.url)
    except FontMetadataError as exc:
        logger.warning("Could not extract metadata for %s (%s): %s", font.name, exc.kind, exc)
        return font.model_copy(update={"metadata": None})
    logger.info("Font %s (%s, %d bytes) from %s | %s", font.name, font.format, font.size, font.source,
                metadata_summary(metadata))
    return font.model_copy(update={"metadata": metadata})


def dedupe_font_files(fonts: Iterable[DownloadedFontFile]) -> List[DownloadedFontFile]:
    """Keep one file per name (the largest, likely the most complete), sorted by name."""
    unique: Dict[str, DownloadedFontFile] = {}
    for font in fonts:
        kept = unique.get(font.name)
        if kept is None or kept.size < font.size:
            unique[font.name] = font
    return sorted(unique.values(), key=lambda f: f.name)


def _google_family(font: DownloadedFontFile) -> str:
    if font.metadata and font.metadata.font_family:
        return font.metadata.font_family
    if font.metadata and font.metadata.font_name:
        return font.metadata.font_name
    slug = google_font_slug(font.url)
    return readable_google_name(slug) if slug else ""


def reconstruct_google_declarations(fonts: Iterable[DownloadedFontFile]) -> List[FontFaceDeclaration]:
    """Synthesize ``@font-face`` rules for Google Fonts files.

    Used when the Google stylesheet was blocked cross-origin, so the page
    exposes the binaries but not the rules that bound them to a family.
    """
    grouped: Dict[str, List[DownloadedFontFile]] = {}
    for font in fonts:
        if GSTATIC_HOST not in font.url and font.source != GOOGLE_FONTS_SOURCE:
            continue
        family = _google_family(font)
        if family:
            grouped.setdefault(family, []).append(font)

    declarations: List[FontFaceDeclaration] = []
    for family, members in grouped.items():
        for font in members:
            weight = _WEIGHT_RE.search(font.name)
            declarations.append(
                FontFaceDeclaration(
                    family=family,
                    source=f'url("{font.url}")',
                    weight=weight.group(1) if weight else "400",
                    style="italic" if "italic" in font.name.lower() else "normal",
                )
            )
    logger.debug("Reconstructed %d Google Fonts declarations", len(declarations))
    return declarations
