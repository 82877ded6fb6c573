"""Static category routing registry.

Maps URL path segments (after the language prefix) to category metadata.
Lookups are exact: ``nepal/unknown`` is not found even though ``nepal`` is.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from app.core.exceptions import CategoryNotFound
from app.content.locale import normalize_lang, translate

logger = logging.getLogger(__name__)

MEDIA_PAGE = "media"


@dataclass(frozen=True)
class CategoryInfo:
    """Registry entry for one category route."""
    path: str
    name_en: str
    name_ne: str
    parent_slug: Optional[str] = None
    page_type: Optional[str] = None

    @property
    def query_slug(self) -> str:
        """Most specific segment, used to filter posts by category slug."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_media(self) -> bool:
        return self.page_type == MEDIA_PAGE

    def display_name(self, lang: str) -> str:
        return self.name_ne if normalize_lang(lang) == "ne" else self.name_en


@dataclass(frozen=True)
class BreadcrumbItem:
    label: str
    href: Optional[str]


# (path, English, Nepali, parent slug, page type)
CATEGORY_ROUTES: Tuple[Tuple[str, str, str, Optional[str], Optional[str]], ...] = (
    # Main categories
    ("nepal", "Nepal", "नेपाल", None, None),
    ("world", "World", "विश्व", None, None),
    ("politics", "Politics", "राजनीति", None, None),
    ("economy", "Economy", "अर्थतन्त्र", None, None),
    ("business", "Business", "व्यवसाय", None, None),
    ("climate", "Climate", "जलवायु", None, None),
    ("science", "Science", "विज्ञान", None, None),
    ("opinion", "Opinion", "विचार", None, None),
    ("media", "Media", "मिडिया", None, MEDIA_PAGE),
    # Nepal subcategories
    ("nepal/politics", "Politics", "राजनीति", "nepal", None),
    ("nepal/economy", "Economy", "अर्थतन्त्र", "nepal", None),
    ("nepal/opinion", "Opinion", "विचार", "nepal", None),
    ("nepal/technology", "Technology", "प्रविधि", "nepal", None),
    ("nepal/lifestyle", "Lifestyle", "जीवनशैली", "nepal", None),
    # World subcategories
    ("world/asia", "Asia", "एशिया", "world", None),
    ("world/europe", "Europe", "युरोप", "world", None),
    ("world/americas", "Americas", "अमेरिका", "world", None),
    ("world/middle-east", "Middle East", "मध्यपूर्व", "world", None),
    ("world/africa", "Africa", "अफ्रिका", "world", None),
    ("world/global-institutions", "Global Institutions", "विश्व संस्था", "world", None),
    # Media subcategories
    ("media/watch", "Watch", "हेर्नुहोस्", "media", MEDIA_PAGE),
    ("media/listen", "Listen", "सुन्नुहोस्", "media", MEDIA_PAGE),
)


class CategoryRegistry:
    """Immutable lookup table built once at startup and injected into handlers."""

    def __init__(self, entries: Iterable[CategoryInfo]):
        table = {}
        for entry in entries:
            if entry.path in table:
                raise ValueError(f"Duplicate category route: {entry.path}")
            table[entry.path] = entry
        for entry in table.values():
            if entry.parent_slug and entry.parent_slug not in table:
                raise ValueError(f"Unknown parent '{entry.parent_slug}' for {entry.path}")
        self._entries: Mapping[str, CategoryInfo] = MappingProxyType(table)

    @classmethod
    def default(cls) -> "CategoryRegistry":
        return cls(
            CategoryInfo(path, name_en, name_ne, parent, page_type)
            for path, name_en, name_ne, parent, page_type in CATEGORY_ROUTES
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def get(self, path: str) -> Optional[CategoryInfo]:
        return self._entries.get(path)

    def resolve(self, segments: Sequence[str]) -> CategoryInfo:
        """
        Resolve path segments like ``["nepal", "politics"]``.

        Raises:
            CategoryNotFound: when the joined path has no exact entry
        """
        key = "/".join(segment for segment in segments if segment)
        info = self._entries.get(key)
        if info is None:
            logger.info(f"[CATEGORY] No registry entry for path '{key}'")
            raise CategoryNotFound(key)
        return info

    def parent_of(self, info: CategoryInfo) -> Optional[CategoryInfo]:
        if not info.parent_slug:
            return None
        return self._entries.get(info.parent_slug)

    def breadcrumb(self, info: CategoryInfo, lang: str) -> List[BreadcrumbItem]:
        """Home → Parent → Current for subcategories; empty for top level."""
        parent = self.parent_of(info)
        if parent is None:
            return []
        lang = normalize_lang(lang)
        return [
            BreadcrumbItem(label=translate(lang, "home"), href=f"/{lang}"),
            BreadcrumbItem(label=parent.display_name(lang), href=f"/{lang}/{parent.path}"),
            BreadcrumbItem(label=info.display_name(lang), href=None),
        ]

    def paths(self) -> List[str]:
        return list(self._entries.keys())
