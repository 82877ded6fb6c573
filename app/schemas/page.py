"""View models handed to the page templates."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class ContentSource(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


class ListingState(str, Enum):
    RESULTS = "results"
    EMPTY = "empty"
    ERROR = "error"
    PROMPT = "prompt"


class PageMeta(BaseModel):
    """SEO metadata: title, description and Open Graph images."""
    title: str
    description: str = ""
    images: List[str] = []


class BreadcrumbLink(BaseModel):
    label: str
    href: Optional[str] = None


class PostCard(BaseModel):
    """Localized teaser of a post."""
    id: str
    title: str
    slug: str
    excerpt: str
    url: str
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    published_label: str = ""
    category_name: str = ""
    category_slug: Optional[str] = None
    author_name: Optional[str] = None


class TickerView(BaseModel):
    source: ContentSource
    items: List[PostCard]


class HomePage(BaseModel):
    lang: str
    meta: PageMeta
    source: ContentSource
    featured: Optional[PostCard] = None
    recent: List[PostCard] = []
    nepal: List[PostCard] = []
    world: List[PostCard] = []
    ticker: Optional[TickerView] = None


class ListingPage(BaseModel):
    """Shared shape of news, category and search listings."""
    lang: str
    meta: PageMeta
    state: ListingState
    posts: List[PostCard] = []
    message: Optional[str] = None


class NewsListPage(ListingPage):
    pass


class CategoryPage(ListingPage):
    path: str
    name: str
    tagline: str
    breadcrumb: List[BreadcrumbLink] = []


class MediaLink(BaseModel):
    label: str
    href: str
    description: str


class MediaPage(BaseModel):
    lang: str
    path: str
    meta: PageMeta
    title: str
    subtitle: str
    coming_soon: bool
    coming_soon_message: Optional[str] = None
    links: List[MediaLink] = []


class SearchPage(ListingPage):
    query: str


class ArticlePage(BaseModel):
    lang: str
    meta: PageMeta
    id: str
    slug: str
    title: str
    excerpt: str
    content: str
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    published_label: str = ""
    read_time_minutes: int
    category_name: str = ""
    category_slug: Optional[str] = None
    author_name: Optional[str] = None
    breadcrumb: List[BreadcrumbLink] = []
    related_title: str
    related: List[PostCard] = []


class InfoPage(BaseModel):
    """Static about, contact and privacy pages."""
    lang: str
    path: str
    meta: PageMeta
    title: str
    subtitle: str = ""
