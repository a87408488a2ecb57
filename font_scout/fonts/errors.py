"""Typed failures of the font metadata extractor."""

from __future__ import annotations

from typing import Dict


class FontMetadataError(Exception):
    """Base class: metadata could not be read from one font file."""

    kind = "FontMetadataError"

    def to_dict(self) -> Dict[str, str]:
        """Tagged failure as handed to callers: ``{kind, message}``."""
        return {"kind": self.kind, "message": str(self)}


class FontFormatError(FontMetadataError):
    """The buffer does not start with a known font signature."""

    kind = "FormatError"


class DecompressionError(FontMetadataError):
    """A WOFF2 container could not be unpacked to sfnt."""

    kind = "DecompressionError"


class InvalidFontDataError(FontMetadataError):
    """The sfnt tables are truncated or corrupt."""

    kind = "InvalidFontData"


__all__ = [
    "FontMetadataError",
    "FontFormatError",
    "DecompressionError",
    "InvalidFontDataError",
]
