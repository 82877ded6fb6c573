"""Public bilingual page endpoints.

Each route returns the view model a template layer renders. Unknown
language prefixes and unknown category paths are 404s.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import RedirectResponse

from app.api.deps import get_page_service
from app.content.locale import SUPPORTED_LANGS
from app.schemas.page import (
    ArticlePage,
    CategoryPage,
    HomePage,
    InfoPage,
    MediaPage,
    NewsListPage,
    SearchPage,
    TickerView,
)
from app.services.pages import PageService

router = APIRouter(tags=["Public pages"])


def _check_lang(lang: str) -> str:
    if lang not in SUPPORTED_LANGS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return lang


@router.get("/sitemap.xml", summary="XML sitemap", response_class=Response)
async def sitemap(pages: PageService = Depends(get_page_service)) -> Response:
    """Static routes in both languages plus every published article URL."""
    return Response(content=pages.sitemap_xml(), media_type="application/xml")


@router.get("/{lang}", response_model=HomePage, summary="Homepage")
async def home(lang: str, pages: PageService = Depends(get_page_service)) -> HomePage:
    """
    Featured story, recent stories, Nepal/World sections and the ticker.

    Falls back to the built-in posts when the live query fails.
    """
    return pages.home(_check_lang(lang))


@router.get("/{lang}/ticker", response_model=TickerView, summary="Breaking news ticker")
async def ticker(lang: str, pages: PageService = Depends(get_page_service)) -> TickerView:
    return pages.ticker(_check_lang(lang))


@router.get("/{lang}/news", response_model=NewsListPage, summary="Latest news")
async def news_list(lang: str, pages: PageService = Depends(get_page_service)) -> NewsListPage:
    return pages.news_list(_check_lang(lang))


@router.get("/{lang}/news/{slug}", response_model=ArticlePage, summary="Article detail")
async def article(lang: str, slug: str, pages: PageService = Depends(get_page_service)) -> ArticlePage:
    """
    Article by English or Nepali slug.

    Raises:
        HTTPException: 404 if no published article has this slug
    """
    return pages.article(_check_lang(lang), slug)


@router.get("/{lang}/search", response_model=SearchPage, summary="Search articles")
async def search(
    lang: str,
    q: Optional[str] = Query(None, description="Search text"),
    pages: PageService = Depends(get_page_service),
) -> SearchPage:
    return pages.search(_check_lang(lang), q)


@router.get("/{lang}/category/{category}", response_model=CategoryPage, summary="Category listing by slug")
async def legacy_category(
    lang: str,
    category: str,
    pages: PageService = Depends(get_page_service),
) -> CategoryPage:
    return pages.legacy_category(_check_lang(lang), category)


@router.get("/{lang}/study-abroad", response_model=CategoryPage, summary="Study abroad listing")
async def study_abroad(lang: str, pages: PageService = Depends(get_page_service)) -> CategoryPage:
    return pages.study_abroad(_check_lang(lang))


@router.get("/{lang}/watch", response_model=MediaPage, summary="Video page")
async def watch(lang: str, pages: PageService = Depends(get_page_service)) -> MediaPage:
    return pages.media_page(_check_lang(lang), "watch")


@router.get("/{lang}/listen", response_model=MediaPage, summary="Audio page")
async def listen(lang: str, pages: PageService = Depends(get_page_service)) -> MediaPage:
    return pages.media_page(_check_lang(lang), "listen")


@router.get("/{lang}/about", response_model=InfoPage, summary="About us")
async def about(lang: str, pages: PageService = Depends(get_page_service)) -> InfoPage:
    return pages.info_page(_check_lang(lang), "about")


@router.get("/{lang}/contact", response_model=InfoPage, summary="Contact")
async def contact(lang: str, pages: PageService = Depends(get_page_service)) -> InfoPage:
    return pages.info_page(_check_lang(lang), "contact")


@router.get("/{lang}/privacy", response_model=InfoPage, summary="Privacy policy")
async def privacy(lang: str, pages: PageService = Depends(get_page_service)) -> InfoPage:
    return pages.info_page(_check_lang(lang), "privacy")


@router.get("/{lang}/", include_in_schema=False)
async def home_trailing_slash(lang: str) -> RedirectResponse:
    return RedirectResponse(url=f"/{_check_lang(lang)}", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get(
    "/{lang}/{category_path:path}",
    response_model=Union[CategoryPage, MediaPage],
    summary="Category page",
)
async def category(
    lang: str,
    category_path: str,
    pages: PageService = Depends(get_page_service),
) -> Union[CategoryPage, MediaPage]:
    """
    Category or subcategory page resolved through the category registry.

    Raises:
        HTTPException: 404 if the path is not a registered category
    """
    return pages.category(_check_lang(lang), category_path.strip("/").split("/"))
