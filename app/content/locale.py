"""Language helpers: localized field lookup, UI strings, dates."""

import re
from datetime import datetime
from typing import Any, Mapping, Optional

SUPPORTED_LANGS = ("en", "ne")
DEFAULT_LANG = "en"

NEPALI_DIGITS = str.maketrans("0123456789", "०१२३४५६७८९")

NEPALI_MONTHS = (
    "जनवरी", "फेब्रुअरी", "मार्च", "अप्रिल", "मे", "जुन",
    "जुलाई", "अगस्ट", "सेप्टेम्बर", "अक्टोबर", "नोभेम्बर", "डिसेम्बर",
)

WORDS_PER_MINUTE = 200

_TAG_RE = re.compile(r"<[^>]*>")

UI_STRINGS = {
    "en": {
        "home": "Home",
        "news": "News",
        "related_posts": "Related Articles",
        "read_full": "Read Full →",
        "min_read": "min read",
        "error_title": "Error loading news",
        "error_hint": "Please try again later.",
        "search_prompt": "Please enter a search term",
        "search_empty_title": "No results found",
        "search_empty": 'No matches for "{query}"',
        "category_empty": "No articles found in {name}.",
        "category_tagline": "Latest news about {name}",
        "coming_soon": "Coming Soon",
    },
    "ne": {
        "home": "गृहपृष्ठ",
        "news": "समाचार",
        "related_posts": "सम्बन्धित लेखहरू",
        "read_full": "पुरा पढ्नुहोस् →",
        "min_read": "मिनेट पढाइ",
        "error_title": "त्रुटि भयो",
        "error_hint": "कृपया पछि फेरि प्रयास गर्नुहोस्।",
        "search_prompt": "कृपया केही खोज्नुहोस्",
        "search_empty_title": "कुनै नतिजा फेला परेन",
        "search_empty": '"{query}" को लागि कुनै मेल खाएन',
        "category_empty": "{name} मा कुनै समाचार भेटिएन।",
        "category_tagline": "{name} सम्बन्धी ताजा समाचार",
        "coming_soon": "चाँडै आउँदैछ",
    },
}


def normalize_lang(lang: Optional[str]) -> str:
    """Return a supported language tag, defaulting to English."""
    if lang in SUPPORTED_LANGS:
        return lang
    return DEFAULT_LANG


def _lookup(entity: Any, key: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(key)
    return getattr(entity, key, None)


def resolve_field(entity: Any, lang: str, field: str) -> str:
    """
    Pick the localized value of ``field`` for ``lang``.

    ``{field}_{lang}`` wins when present and non-empty, otherwise
    ``{field}_en``; an absent entity or missing English value yields "".
    Accepts mappings (raw rows) and attribute objects (records, ORM rows).
    """
    if entity is None:
        return ""
    value = _lookup(entity, f"{field}_{lang}")
    if not value:
        value = _lookup(entity, f"{field}_en")
    if not value:
        return ""
    return str(value)


def translate(lang: str, key: str, **params: Any) -> str:
    """Look up a UI string, falling back to English."""
    strings = UI_STRINGS.get(normalize_lang(lang), UI_STRINGS[DEFAULT_LANG])
    template = strings.get(key) or UI_STRINGS[DEFAULT_LANG].get(key, key)
    return template.format(**params) if params else template


def format_date(value: Optional[datetime], lang: str) -> str:
    """Long date, e.g. "January 5, 2026" or "जनवरी ५, २०२६"."""
    if value is None:
        return ""
    if normalize_lang(lang) == "ne":
        text = f"{NEPALI_MONTHS[value.month - 1]} {value.day}, {value.year}"
        return text.translate(NEPALI_DIGITS)
    return f"{value:%B} {value.day}, {value.year}"


def estimate_read_time(html: Optional[str]) -> int:
    """Minutes to read an HTML body at 200 words per minute (at least 1)."""
    text = _TAG_RE.sub("", html or "")
    words = len(text.split())
    return max(1, -(-words // WORDS_PER_MINUTE))
