"""font_scout.fonts: metadata extraction and matching of a page's font files."""

from .errors import DecompressionError, FontFormatError, FontMetadataError, InvalidFontDataError
from .matching import (
    FontMatch,
    find_all_matching_font_files,
    find_matching_font_file,
    get_correct_font_family,
    resolve_font,
)
from .metadata import extract_metadata, metadata_summary
from .models import ActiveFont, DownloadedFontFile, EmbeddingPermissions, FontFaceDeclaration, FontMetadata

__all__ = [
    "ActiveFont",
    "DownloadedFontFile",
    "EmbeddingPermissions",
    "FontFaceDeclaration",
    "FontMetadata",
    "FontMatch",
    "FontMetadataError",
    "FontFormatError",
    "DecompressionError",
    "InvalidFontDataError",
    "extract_metadata",
    "metadata_summary",
    "resolve_font",
    "find_matching_font_file",
    "find_all_matching_font_files",
    "get_correct_font_family",
]
