# File: tests/conftest.py
from io import BytesIO
from typing import Callable, Dict, Optional

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from font_scout.fonts.models import DownloadedFontFile, FontMetadata


def _square_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font(
    names: Dict[str, str],
    *,
    fs_type: int = 0,
    created: Optional[int] = None,
    flavor: Optional[str] = None,
) -> bytes:
    """
    Build a minimal TrueType font in memory and return its bytes.
    *flavor* "woff2" compresses the result.
    """
    fb = FontBuilder(1000, isTTF=True)
    glyph_order = [".notdef", "A"]
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x41: "A"})
    fb.setupGlyf({name: _square_glyph() for name in glyph_order})
    glyf = fb.font["glyf"]
    fb.setupHorizontalMetrics({name: (600, glyf[name].xMin) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(names)
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200, fsType=fs_type)
    fb.setupPost()
    if created is not None:
        fb.font["head"].created = created
    if flavor:
        fb.font.flavor = flavor
    buf = BytesIO()
    fb.save(buf)
    return buf.getvalue()


@pytest.fixture()
def font_factory() -> Callable[..., bytes]:
    """
    Factory building font binaries with the given name strings.
    """
    return build_font


@pytest.fixture()
def roboto_bytes() -> bytes:
    """
    A font carrying the usual provenance names.
    """
    return build_font(
        {
            "copyright": "Copyright 2011 Google Inc.",
            "familyName": "Roboto",
            "styleName": "Regular",
            "uniqueFontIdentifier": "Google:Roboto:2011",
            "fullName": "Roboto Regular",
            "version": "Version 2.137",
            "psName": "Roboto-Regular",
            "manufacturer": "Google",
            "designer": "Christian Robertson",
            "licenseDescription": "Licensed under the Apache License, Version 2.0",
            "typographicFamily": "Roboto",
        },
        fs_type=0,
        created=2082844800,
    )


@pytest.fixture()
def inter_file() -> DownloadedFontFile:
    """
    A self-hosted file whose metadata names the family Inter.
    """
    return DownloadedFontFile(
        url="https://cdn.site.com/assets/fonts/inter-var.woff2",
        name="inter-var.woff2",
        format="woff2",
        size=1024,
        metadata=FontMetadata(font_family="Inter", font_name="Inter Regular"),
    )
