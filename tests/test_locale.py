from datetime import datetime

from app.content.locale import estimate_read_time, format_date, normalize_lang, resolve_field, translate
from app.schemas.post import PostRecord


def test_resolve_field_prefers_requested_language():
    post = {"title_en": "Hello", "title_ne": "नमस्ते"}
    assert resolve_field(post, "ne", "title") == "नमस्ते"
    assert resolve_field(post, "en", "title") == "Hello"


def test_resolve_field_falls_back_to_english_for_empty_nepali():
    assert resolve_field({"title_en": "Hello", "title_ne": ""}, "ne", "title") == "Hello"
    assert resolve_field({"title_en": "Hello", "title_ne": None}, "ne", "title") == "Hello"


def test_resolve_field_missing_entity_or_value_is_empty():
    assert resolve_field(None, "en", "title") == ""
    assert resolve_field({}, "ne", "title") == ""


def test_resolve_field_reads_attributes():
    record = PostRecord(id="p1", excerpt_en="Short", excerpt_ne=None)
    assert resolve_field(record, "ne", "excerpt") == "Short"


def test_normalize_lang_and_translate():
    assert normalize_lang("ne") == "ne"
    assert normalize_lang("fr") == "en"
    assert normalize_lang(None) == "en"
    assert translate("en", "search_empty", query="visa") == 'No matches for "visa"'
    assert translate("ne", "home") == "गृहपृष्ठ"


def test_format_date_per_language():
    day = datetime(2026, 1, 5, 9, 30)
    assert format_date(day, "en") == "January 5, 2026"
    assert format_date(day, "ne") == "जनवरी ५, २०२६"
    assert format_date(None, "en") == ""


def test_estimate_read_time_ignores_markup_and_rounds_up():
    html = "<p>" + "word " * 401 + "</p>"
    assert estimate_read_time(html) == 3
    assert estimate_read_time("") == 1
