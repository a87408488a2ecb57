# File: tests/test_css.py
from font_scout.fonts.css import extract_src_urls, parse_font_face_rules, strip_quotes

CSS = """
/* brand fonts */
@font-face {
  font-family: "Brand Sans";
  src: url("/fonts/brand.woff2") format("woff2"), url('/fonts/brand.woff') format("woff");
  font-weight: 400;
  font-style: normal;
}
@font-face { font-family: Brand Sans; font-weight: 700; }
body { font-family: "Brand Sans", sans-serif; }
@media print { @font-face { font-family: Nested; src: url(/n.woff2); } }
@font-face { font-family: 'Icons'; src: url(icons.ttf); }
"""


def test_parse_font_face_rules():
    rules = parse_font_face_rules(CSS)
    assert [r.family for r in rules] == ["Brand Sans", "Icons"]
    brand = rules[0]
    assert brand.weight == "400"
    assert brand.style == "normal"
    assert extract_src_urls(brand.source) == ["/fonts/brand.woff2", "/fonts/brand.woff"]
    assert rules[1].weight is None


def test_parse_garbage_yields_nothing():
    assert parse_font_face_rules("@font-face { nonsense") == []
    assert parse_font_face_rules("") == []


def test_extract_src_urls():
    assert extract_src_urls("local('X'), URL( x.woff2 ) format('woff2')") == ["x.woff2"]
    assert extract_src_urls("") == []


def test_strip_quotes():
    assert strip_quotes(" 'Open Sans' ") == "Open Sans"
