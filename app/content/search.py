"""Search input sanitizing for the OR/ILIKE filter expression."""

import re
from typing import Optional

MAX_SEARCH_LENGTH = 100

# LIKE wildcards and the escape character itself
_WILDCARDS = re.compile(r"([%_\\])")
# Delimiters of the OR filter grammar; they cannot appear even escaped
_STRUCTURAL = re.compile(r"[,().]")


def sanitize_search(raw_query: Optional[str]) -> str:
    """
    Make user search text safe to interpolate into an ILIKE filter expression.

    Escapes ``%``, ``_`` and ``\\`` with a backslash, strips ``, ( ) .``,
    trims surrounding whitespace and truncates the escaped text to 100
    characters.
    """
    if not raw_query:
        return ""
    text = _WILDCARDS.sub(r"\\\1", str(raw_query))
    text = _STRUCTURAL.sub("", text)
    text = text.strip()[:MAX_SEARCH_LENGTH]
    # Truncation must not leave a dangling escape character
    trailing = len(text) - len(text.rstrip("\\"))
    if trailing % 2:
        text = text[:-1]
    return text
