"""font_scout.fonts.css: ``@font-face`` parsing and ``src`` URL extraction."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

import tinycss2

from font_scout.fonts.models import FontFaceDeclaration

__all__: Sequence[str] = ("SRC_URL_RE", "strip_quotes", "extract_src_urls", "parse_font_face_rules")

SRC_URL_RE = re.compile(r"""url\(\s*['"]?([^'")\s]+)['"]?\s*\)""", re.IGNORECASE)
_QUOTES_RE = re.compile(r"""["']""")


def strip_quotes(value: str) -> str:
    """Remove every single/double quote and surrounding whitespace."""
    return _QUOTES_RE.sub("", value).strip()


def extract_src_urls(source: str) -> List[str]:
    """Return the ``url(...)`` targets of a ``src`` value in order of appearance."""
    return [url for url in SRC_URL_RE.findall(source or "") if url]


def _declaration_value(tokens) -> str:
    return tinycss2.serialize(tokens).strip()


def _font_face_from_block(content) -> Optional[FontFaceDeclaration]:
    fields: dict[str, str] = {}
    for decl in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if decl.type != "declaration":
            continue
        if decl.lower_name in ("font-family", "src", "font-weight", "font-style"):
            fields[decl.lower_name] = _declaration_value(decl.value)

    family = strip_quotes(fields.get("font-family", ""))
    source = fields.get("src", "")
    if not family or not source:
        return None
    return FontFaceDeclaration(
        family=family,
        source=source,
        weight=fields.get("font-weight") or None,
        style=fields.get("font-style") or None,
    )


def parse_font_face_rules(css_text: str) -> List[FontFaceDeclaration]:
    """Collect the top-level ``@font-face`` rules of a stylesheet.

    Rules without a family or a ``src`` are skipped, as are malformed rules;
    tinycss2 recovers from syntax errors instead of raising.
    """
    declarations: List[FontFaceDeclaration] = []
    rules = tinycss2.parse_stylesheet(css_text, skip_comments=True, skip_whitespace=True)
    for rule in rules:
        if rule.type != "at-rule" or rule.lower_at_keyword != "font-face" or rule.content is None:
            continue
        declaration = _font_face_from_block(rule.content)
        if declaration is not None:
            declarations.append(declaration)
    return declarations
