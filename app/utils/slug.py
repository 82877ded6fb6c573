"""URL slug helpers."""

import re

SLUG_MAX_LENGTH = 200


def slugify(text: str) -> str:
    """
    Turn a title into a URL slug.

    Lowercases, truncates to 200 characters, replaces whitespace with
    dashes, drops non-word characters, then collapses and trims dashes.
    """
    slug = (text or "").lower()[:SLUG_MAX_LENGTH]
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")
