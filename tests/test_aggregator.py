# File: tests/test_aggregator.py
import json

from font_scout.aggregator import reconcile_fonts
from font_scout.fonts.models import ActiveFont, DownloadedFontFile, FontFaceDeclaration, FontMetadata


def test_reconcile_reports_matches_and_unmatched(inter_file):
    stray = DownloadedFontFile(url="https://site.com/icons.woff2", name="icons.woff2")
    report = reconcile_fonts(
        [ActiveFont(family="Inter", element_count=40), ActiveFont(family="Georgia", element_count=2)],
        [inter_file, stray],
        [FontFaceDeclaration(family="Inter", source=f"url({inter_file.url})")],
    )
    inter, georgia = report.fonts
    assert inter["family"] == "Inter"
    assert inter["strategy"] == "font-face"
    assert inter["element_count"] == 40
    assert inter["file"]["url"] == inter_file.url
    assert [f["url"] for f in inter["files"]] == [inter_file.url]
    assert georgia["file"] is None
    assert georgia["strategy"] is None
    assert georgia["family"] == "Georgia"
    assert [f["url"] for f in report.unmatched_files] == [stray.url]


def test_reconcile_reconstructs_google_rules_when_css_missing():
    nanum = DownloadedFontFile(
        url="https://fonts.gstatic.com/s/nanumgothic/v17/x.woff2",
        name="x.woff2",
        source="Google Fonts",
        metadata=FontMetadata(font_family="Nanum Gothic"),
    )
    report = reconcile_fonts([ActiveFont(family='"Nanum Gothic"')], [nanum])
    usage = report.fonts[0]
    assert usage["family"] == "Nanum Gothic"
    assert usage["css_family"] == '"Nanum Gothic"'
    assert usage["strategy"] == "font-face"
    assert report.unmatched_files == []


def test_report_json_uses_camel_case_files(inter_file):
    report = reconcile_fonts([ActiveFont(family="Inter")], [inter_file])
    data = json.loads(report.json(pretty=True))
    assert data["fonts"][0]["file"]["metadata"]["fontFamily"] == "Inter"
