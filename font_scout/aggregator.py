# File: font_scout/aggregator.py
"""font_scout.aggregator: Reconciliation report of a page's active fonts and font files."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TypedDict

from font_scout.fonts.catalog import reconstruct_google_declarations
from font_scout.fonts.matching import find_all_matching_font_files, resolve_font
from font_scout.fonts.models import ActiveFont, DownloadedFontFile, FontFaceDeclaration
from font_scout.logger import logger


class FontUsage(TypedDict, total=False):
    """One active font family and the files that render it."""

    family: str
    css_family: str
    element_count: int
    strategy: Optional[str]
    file: Optional[Dict[str, Any]]
    files: List[Dict[str, Any]]


@dataclass(slots=True)
class FontReport:
    """Active fonts of a page, each with its matched files, plus the files nothing matched."""

    fonts: List[FontUsage] = field(default_factory=list)
    unmatched_files: List[Dict[str, Any]] = field(default_factory=list)

    def json(self, *, pretty: bool = False) -> str:
        """JSON form of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _usage(
    active: ActiveFont,
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration],
) -> FontUsage:
    match = resolve_font(active, downloaded, declarations)
    files = find_all_matching_font_files(active, downloaded, declarations)
    if match.file is None:
        logger.info("No font file found for %s", active.family)
    return {
        "family": match.family,
        "css_family": active.family,
        "element_count": active.element_count,
        "strategy": match.strategy,
        "file": match.file.to_dict() if match.file else None,
        "files": [f.to_dict() for f in files],
    }


def reconcile_fonts(
    active_fonts: Sequence[ActiveFont],
    downloaded: Sequence[DownloadedFontFile],
    declarations: Sequence[FontFaceDeclaration] = (),
) -> FontReport:
    """Match every active font against the downloaded files.

    When no ``@font-face`` rule is known, rules for Google Fonts files are
    reconstructed from their URLs so the declaration strategy still applies.
    """
    if not declarations:
        declarations = reconstruct_google_declarations(downloaded)
    fonts = [_usage(active, downloaded, declarations) for active in active_fonts]
    used = {f["url"] for usage in fonts for f in usage["files"]}
    unmatched = [f.to_dict() for f in downloaded if f.url not in used]
    logger.info("Reconciled %d active fonts with %d files (%d unmatched)", len(fonts), len(downloaded), len(unmatched))
    return FontReport(fonts=fonts, unmatched_files=unmatched)
