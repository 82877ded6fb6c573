"""View-model builders for the public bilingual pages.

Each builder issues its queries through a ``QueryRunner`` and turns rows into
localized pydantic view models. Listing failures become error states; only the
article page raises on a backend error.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from xml.etree import ElementTree

from app.config import settings
from app.content.categories import CategoryRegistry
from app.content.fallback import FallbackPolicy, with_fallback
from app.content.locale import (
    estimate_read_time,
    format_date,
    normalize_lang,
    resolve_field,
    translate,
)
from app.content.mock_data import MOCK_POSTS, MockPostSet
from app.content.queries import (
    LISTING_LIMIT,
    SECTION_TEASER_LIMIT,
    ListingFilters,
    build_homepage_query,
    build_listing_query,
    build_search_query,
    build_single_query,
    build_sitemap_query,
    build_ticker_query,
)
from app.content.related import QueryRunner, select_related
from app.content.search import sanitize_search
from app.core.exceptions import ArticleNotFound, BackendQueryError
from app.schemas.page import (
    ArticlePage,
    BreadcrumbLink,
    CategoryPage,
    HomePage,
    InfoPage,
    ListingState,
    MediaLink,
    MediaPage,
    NewsListPage,
    PageMeta,
    PostCard,
    SearchPage,
    TickerView,
)
from app.schemas.post import PostRecord
from app.schemas.query import QueryResult

logger = logging.getLogger(__name__)

HOME_META = {
    "en": ("Europe Information & Visa Blog - Home",
           "Reliable Europe news and visa information for Nepali students and workers."),
    "ne": ("युरोप जानकारी र भिसा ब्लग - गृहपृष्ठ",
           "नेपाली विद्यार्थी र कामदारहरूका लागि विश्वसनीय युरोप समाचार र भिसा जानकारी।"),
}

NEWS_META = {
    "en": ("All News", "Europe visa and information news."),
    "ne": ("सबै समाचार", "युरोप भिसा र जानकारी सम्बन्धी समाचार।"),
}

# path -> ((title_en, title_ne), (subtitle_en, subtitle_ne), (coming soon en, ne))
MEDIA_PAGES = {
    "media": (("Media", "मिडिया"), ("Video and audio content", "भिडियो र अडियो सामग्री"), None),
    "media/watch": (
        ("Watch", "हेर्नुहोस्"),
        ("Video news and content", "भिडियो समाचार र सामग्री"),
        ("Video content will be available soon.", "भिडियो सामग्री छिट्टै उपलब्ध हुनेछ।"),
    ),
    "media/listen": (
        ("Listen", "सुन्नुहोस्"),
        ("Audio news and podcasts", "अडियो समाचार र पोडकास्ट"),
        ("Audio content will be available soon.", "अडियो सामग्री छिट्टै उपलब्ध हुनेछ।"),
    ),
}

# Top-level aliases of the media subpages
MEDIA_PAGES["watch"] = MEDIA_PAGES["media/watch"]
MEDIA_PAGES["listen"] = MEDIA_PAGES["media/listen"]

STUDY_ABROAD_SLUG = "study-abroad"
# lang -> (name, meta description, tagline)
STUDY_ABROAD_META = {
    "en": ("Study Abroad", "Information about studying and scholarships in Europe.",
           "Study and course portal for Europe"),
    "ne": ("विदेश अध्ययन", "युरोपमा अध्ययन र छात्रवृत्ति सम्बन्धी जानकारी।",
           "युरोपमा अध्ययन र कोर्स पोर्टल"),
}

# path -> lang -> (title, meta description, subtitle)
INFO_PAGES = {
    "about": {
        "en": ("About Us", "About The International Press.",
               "Your Trusted Source for International News & Information"),
        "ne": ("हाम्रो बारेमा", "दि इन्टरनेसनल प्रेसको बारेमा।",
               "अन्तर्राष्ट्रिय समाचार र जानकारीको लागि तपाईंको विश्वसनीय स्रोत"),
    },
    "contact": {
        "en": ("Talk to Us", "Contact The International Press.",
               "Whether you have a story that could make headlines or just have a few questions, "
               "we'd love to hear from you."),
        "ne": ("हामीसँग कुरा गर्नुहोस्", "दि इन्टरनेसनल प्रेससँग सम्पर्क गर्नुहोस्।",
               "तपाईंसँग हेडलाइन बन्न सक्ने कथा छ वा केही प्रश्नहरू छन्, हामी तपाईंबाट सुन्न चाहन्छौं।"),
    },
    "privacy": {
        "en": ("Privacy Policy", "Privacy Policy of The International Press.",
               "Your Privacy Matters to Us"),
        "ne": ("गोपनीयता नीति", "दि इन्टरनेसनल प्रेसको गोपनीयता नीति।",
               "तपाईंको गोपनीयता हाम्रो लागि महत्त्वपूर्ण छ"),
    },
}

HOME_SECTIONS = ("nepal", "world")
RECENT_COUNT = 6
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _pick(pair, lang: str) -> str:
    return pair[1] if lang == "ne" else pair[0]


def _as_record(row: Any) -> PostRecord:
    return row if isinstance(row, PostRecord) else PostRecord.model_validate(row)


def build_post_card(row: Any, lang: str) -> PostCard:
    """Localize one post row (raw dict, record or ORM object) into a card."""
    record = _as_record(row)
    slug = resolve_field(record, lang, "slug")
    category = record.category
    return PostCard(
        id=record.id,
        title=resolve_field(record, lang, "title"),
        slug=slug,
        excerpt=resolve_field(record, lang, "excerpt"),
        url=f"/{lang}/news/{slug}",
        featured_image=record.featured_image,
        published_at=record.published_at,
        published_label=format_date(record.published_at, lang),
        category_name=resolve_field(category, lang, "name"),
        category_slug=category.slug if category else None,
        author_name=record.author.full_name if record.author else None,
    )


def _cards(rows: Optional[List[Any]], lang: str) -> List[PostCard]:
    return [build_post_card(row, lang) for row in (rows or [])]


def _listing_state(result: QueryResult, view: str) -> ListingState:
    if not result.ok:
        logger.error(f"[{view.upper()}] Query failed: {result.error.message}")
        return ListingState.ERROR
    return ListingState.RESULTS if result.data else ListingState.EMPTY


class PageService:
    """Builds page view models from live queries, the category registry and fallback posts."""

    def __init__(
        self,
        queries: QueryRunner,
        registry: CategoryRegistry,
        fallback_posts: MockPostSet = MOCK_POSTS,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.queries = queries
        self.registry = registry
        self.fallback_posts = fallback_posts
        self.clock = clock

    def _fallback_rows(self) -> List[Dict[str, Any]]:
        return self.fallback_posts.rows(now=self.clock())

    # ----- Home -----
    def ticker(self, lang: str) -> TickerView:
        lang = normalize_lang(lang)
        effective = with_fallback(
            self.queries.execute(build_ticker_query()),
            self._fallback_rows,
            policy=FallbackPolicy.ERROR_NULL_OR_EMPTY,
            view="ticker",
        )
        return TickerView(source=effective.source, items=_cards(effective.data, lang))

    def home(self, lang: str) -> HomePage:
        """
        Featured post, the next six as recent, and four-post teasers for the
        Nepal and World sections, all cut from the same ten newest posts.
        """
        lang = normalize_lang(lang)
        effective = with_fallback(
            self.queries.execute(build_homepage_query()),
            self._fallback_rows,
            policy=FallbackPolicy.ERROR_OR_NULL,
            view="home",
        )
        cards = _cards(effective.data, lang)

        sections = {
            slug: [card for card in cards if card.category_slug == slug][:SECTION_TEASER_LIMIT]
            for slug in HOME_SECTIONS
        }
        title, description = HOME_META[lang]
        return HomePage(
            lang=lang,
            meta=PageMeta(title=title, description=description),
            source=effective.source,
            featured=cards[0] if cards else None,
            recent=cards[1:1 + RECENT_COUNT],
            nepal=sections["nepal"],
            world=sections["world"],
            ticker=self.ticker(lang),
        )

    # ----- Listings -----
    def news_list(self, lang: str) -> NewsListPage:
        lang = normalize_lang(lang)
        result = self.queries.execute(build_listing_query(ListingFilters(limit=LISTING_LIMIT)))
        state = _listing_state(result, "news")
        title, description = NEWS_META[lang]
        return NewsListPage(
            lang=lang,
            meta=PageMeta(title=title, description=description),
            state=state,
            posts=_cards(result.data, lang) if state == ListingState.RESULTS else [],
            message=translate(lang, "error_title") if state == ListingState.ERROR else None,
        )

    def _category_listing(
        self,
        lang: str,
        *,
        path: str,
        name: str,
        query_slug: str,
        breadcrumb: List[BreadcrumbLink],
        meta: Optional[PageMeta] = None,
        tagline: Optional[str] = None,
    ) -> CategoryPage:
        result = self.queries.execute(
            build_listing_query(ListingFilters(category_slug=query_slug, limit=LISTING_LIMIT))
        )
        state = _listing_state(result, "category")
        message = None
        if state == ListingState.ERROR:
            message = translate(lang, "error_title")
        elif state == ListingState.EMPTY:
            message = translate(lang, "category_empty", name=name)

        if tagline is None:
            tagline = translate(lang, "category_tagline", name=name)
        if meta is None:
            suffix = "समाचार" if lang == "ne" else "News"
            meta = PageMeta(title=f"{name} - {suffix}", description=tagline)
        return CategoryPage(
            lang=lang,
            meta=meta,
            state=state,
            posts=_cards(result.data, lang) if state == ListingState.RESULTS else [],
            message=message,
            path=path,
            name=name,
            tagline=tagline,
            breadcrumb=breadcrumb,
        )

    def study_abroad(self, lang: str) -> CategoryPage:
        """Dedicated listing of the ``study-abroad`` category with its own copy."""
        lang = normalize_lang(lang)
        name, description, tagline = STUDY_ABROAD_META[lang]
        return self._category_listing(
            lang,
            path=STUDY_ABROAD_SLUG,
            name=name,
            query_slug=STUDY_ABROAD_SLUG,
            breadcrumb=[],
            meta=PageMeta(title=name, description=description),
            tagline=tagline,
        )

    def info_page(self, lang: str, path: str) -> InfoPage:
        """Static about, contact and privacy pages; no queries."""
        lang = normalize_lang(lang)
        title, description, subtitle = INFO_PAGES[path][lang]
        return InfoPage(
            lang=lang,
            path=path,
            meta=PageMeta(title=title, description=description),
            title=title,
            subtitle=subtitle,
        )

    def media_page(self, lang: str, path: str) -> MediaPage:
        """Media index, or a "coming soon" page for watch and listen."""
        lang = normalize_lang(lang)
        title, subtitle, coming_soon = MEDIA_PAGES.get(path, MEDIA_PAGES["media"])
        links = []
        if coming_soon is None:
            for child in ("media/watch", "media/listen"):
                child_title, child_subtitle, _ = MEDIA_PAGES[child]
                links.append(MediaLink(
                    label=_pick(child_title, lang),
                    href=f"/{lang}/{child}",
                    description=_pick(child_subtitle, lang),
                ))
        return MediaPage(
            lang=lang,
            path=path,
            meta=PageMeta(title=_pick(title, lang), description=_pick(subtitle, lang)),
            title=_pick(title, lang),
            subtitle=_pick(subtitle, lang),
            coming_soon=coming_soon is not None,
            coming_soon_message=_pick(coming_soon, lang) if coming_soon else None,
            links=links,
        )

    def category(self, lang: str, segments: List[str]):
        """
        Registry-routed category page.

        Raises:
            CategoryNotFound: unknown path
        """
        lang = normalize_lang(lang)
        info = self.registry.resolve(segments)
        if info.is_media:
            return self.media_page(lang, info.path)

        breadcrumb = [
            BreadcrumbLink(label=item.label, href=item.href)
            for item in self.registry.breadcrumb(info, lang)
        ]
        return self._category_listing(
            lang,
            path=info.path,
            name=info.display_name(lang),
            query_slug=info.query_slug,
            breadcrumb=breadcrumb,
        )

    def legacy_category(self, lang: str, slug: str) -> CategoryPage:
        """``/{lang}/category/{slug}``: filters on the slug directly, no registry check."""
        lang = normalize_lang(lang)
        info = self.registry.get(slug)
        name = info.display_name(lang) if info else slug
        return self._category_listing(lang, path=f"category/{slug}", name=name, query_slug=slug, breadcrumb=[])

    def search(self, lang: str, raw_query: Optional[str]) -> SearchPage:
        lang = normalize_lang(lang)
        query = (raw_query or "").strip()
        meta = PageMeta(title=f'"{query}"' if query else translate(lang, "search_prompt"))

        safe_query = sanitize_search(query)
        if not safe_query:
            return SearchPage(
                lang=lang,
                meta=meta,
                state=ListingState.PROMPT,
                query=query,
                message=translate(lang, "search_prompt"),
            )

        result = self.queries.execute(build_search_query(safe_query))
        state = _listing_state(result, "search")
        message = None
        if state == ListingState.ERROR:
            message = translate(lang, "error_title")
        elif state == ListingState.EMPTY:
            message = translate(lang, "search_empty", query=query)
        return SearchPage(
            lang=lang,
            meta=meta,
            state=state,
            query=query,
            posts=_cards(result.data, lang) if state == ListingState.RESULTS else [],
            message=message,
        )

    # ----- Article -----
    def article(self, lang: str, slug: str) -> ArticlePage:
        """
        Published post by either language's slug, plus related posts.

        Raises:
            BackendQueryError: the lookup failed
            ArticleNotFound: no published post has this slug
        """
        lang = normalize_lang(lang)
        result = self.queries.execute(build_single_query(slug))
        if not result.ok:
            logger.error(f"[ARTICLE] Fetch for '{slug}' failed: {result.error.message}")
            raise BackendQueryError(result.error, view="article")
        if result.data is None:
            raise ArticleNotFound(slug)

        post = _as_record(result.data)
        related = select_related(self.queries, post)

        title = resolve_field(post, lang, "title") or "Article"
        excerpt = resolve_field(post, lang, "excerpt")
        content = resolve_field(post, lang, "content")
        category = post.category

        breadcrumb = [BreadcrumbLink(label=translate(lang, "home"), href=f"/{lang}")]
        if category and category.slug:
            breadcrumb.append(BreadcrumbLink(
                label=resolve_field(category, lang, "name"),
                href=f"/{lang}/{category.slug}",
            ))

        return ArticlePage(
            lang=lang,
            meta=PageMeta(
                title=title,
                description=excerpt,
                images=[post.featured_image] if post.featured_image else [],
            ),
            id=post.id,
            slug=resolve_field(post, lang, "slug"),
            title=title,
            excerpt=excerpt,
            content=content,
            featured_image=post.featured_image,
            published_at=post.published_at,
            published_label=format_date(post.published_at, lang),
            read_time_minutes=estimate_read_time(content),
            category_name=resolve_field(category, lang, "name"),
            category_slug=category.slug if category else None,
            author_name=post.author.full_name if post.author else None,
            breadcrumb=breadcrumb,
            related_title=translate(lang, "related_posts"),
            related=_cards(related, lang),
        )

    # ----- Sitemap -----
    def sitemap_entries(self) -> List[Dict[str, Any]]:
        """Static routes in both languages followed by published post URLs."""
        base_url = settings.SITE_URL.rstrip("/")
        today = self.clock().date().isoformat()
        routes = ["", "/news"] + [f"/{path}" for path in self.registry.paths()]

        entries = []
        for route in routes:
            for lang in ("en", "ne"):
                entries.append({
                    "loc": f"{base_url}/{lang}{route}",
                    "lastmod": today,
                    "changefreq": "daily",
                    "priority": "1.0" if route == "" else "0.9",
                })

        result = self.queries.execute(build_sitemap_query())
        if not result.ok:
            logger.warning(f"[SITEMAP] Post query failed, listing static routes only: {result.error.message}")
        for row in result.data or []:
            lastmod = row.get("updated_at")
            lastmod = lastmod.date().isoformat() if lastmod else today
            for lang in ("en", "ne"):
                slug = row.get(f"slug_{lang}")
                if slug:
                    entries.append({
                        "loc": f"{base_url}/{lang}/news/{slug}",
                        "lastmod": lastmod,
                        "changefreq": "weekly",
                        "priority": "0.8",
                    })
        return entries

    def sitemap_xml(self) -> str:
        urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
        for entry in self.sitemap_entries():
            url = ElementTree.SubElement(urlset, "url")
            for key in ("loc", "lastmod", "changefreq", "priority"):
                ElementTree.SubElement(url, key).text = entry[key]
        body = ElementTree.tostring(urlset, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'
