# File: tests/test_names.py
from font_scout.fonts.names import (
    LocalizedName,
    NameRecordEntry,
    PlainName,
    RecordName,
    classify_name_value,
    clean_name_text,
    lookup_name,
    name_table_from_mapping,
    name_table_from_records,
)


def test_clean_name_text():
    assert clean_name_text("R\0o\0b\0o\0t\0o") == "Roboto"
    assert clean_name_text("  Open \t\n Sans  ") == "Open Sans"
    assert clean_name_text(" \0 ") is None


def test_plain_name():
    assert PlainName("Inter  Display").resolve() == "Inter Display"


def test_localized_name_prefers_english():
    assert LocalizedName({"ja": "ゴシック", "en": "Gothic"}).resolve() == "Gothic"
    assert LocalizedName({"1033": "Win", "0": "Neutral"}).resolve() == "Win"
    assert LocalizedName({"ja": "ゴシック", "ko": 12}).resolve() == "ゴシック"
    assert LocalizedName({"x": 1}).resolve() is None
    assert LocalizedName({"en": " \0 ", "1033": "Windows"}).resolve() == "Windows"
    assert LocalizedName({"en": "", "ja": "ゴシック"}).resolve() == "ゴシック"


def test_record_name_prefers_windows_english():
    records = (
        NameRecordEntry(1, 1, 0, "Mac Name"),
        NameRecordEntry(1, 3, 1041, "Japanese"),
        NameRecordEntry(1, 3, 1033, "Windows Name"),
    )
    assert RecordName(records).resolve() == "Windows Name"


def test_record_name_falls_back_to_first():
    records = (NameRecordEntry(1, 1, 0, "Mac Name"), NameRecordEntry(1, 3, 1041, "Japanese"))
    assert RecordName(records).resolve() == "Mac Name"
    assert RecordName(()).resolve() is None


def test_classify_list_of_records():
    value = classify_name_value(
        4,
        [
            {"nameID": 1, "platformID": 3, "languageID": 1033, "text": "Family"},
            {"nameID": 4, "platformID": 3, "languageID": 1033, "text": "Full Name"},
        ],
    )
    assert isinstance(value, RecordName)
    assert value.resolve() == "Full Name"


def test_mapping_table_and_lookup_order():
    table = name_table_from_mapping({1: "", "4": {"en": "Roboto Bold"}, "fontFamily": "ignored"})
    assert set(table) == {1, 4}
    assert lookup_name(table, 1, 4) == "Roboto Bold"
    assert lookup_name(table, 8, 11) is None


def test_table_from_records_groups_by_id():
    table = name_table_from_records(
        [NameRecordEntry(8, 3, 1033, "Google"), NameRecordEntry(9, 3, 1033, "Someone")]
    )
    assert lookup_name(table, 8) == "Google"
    assert lookup_name(table, 9) == "Someone"
