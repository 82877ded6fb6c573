"""Admin endpoints for creating, editing and deleting posts."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db, get_query_service
from app.content.queries import MAX_LISTING_LIMIT, ListingFilters, build_count_query, build_listing_query
from app.core.exceptions import BackendQueryError, BackendWriteError, PostValidationError
from app.crud import crud_post, crud_post_category
from app.models.post import Post
from app.schemas.auth import MessageResponse, SessionUser
from app.schemas.post import (
    POST_STATUSES,
    SLUG_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    PostCreate,
    PostListResponse,
    PostRecord,
    PostResponse,
    PostUpdate,
)
from app.services.query_service import QueryService
from app.utils.slug import slugify

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/posts",
    tags=["Admin - Posts"],
)


def validate_post_form(post_in: PostCreate, *, generate_slug: bool) -> PostCreate:
    """
    Check the English title and slug before anything reaches the datastore.

    On create an empty slug is generated from the title.

    Raises:
        PostValidationError: 422 with per-field messages
    """
    errors: Dict[str, str] = {}
    title = (post_in.title_en or "").strip()
    slug = (post_in.slug_en or "").strip()

    if not title:
        errors["title_en"] = "English title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title_en"] = f"Title must be {TITLE_MAX_LENGTH} characters or less"

    if not slug and generate_slug and title:
        slug = slugify(title)
    if not slug:
        errors["slug_en"] = "English slug is required"
    elif len(slug) > SLUG_MAX_LENGTH:
        errors["slug_en"] = f"Slug must be {SLUG_MAX_LENGTH} characters or less"

    if errors:
        raise PostValidationError(errors)
    return post_in.model_copy(update={"title_en": title, "slug_en": slug})


def _to_response(db: Session, post: Post) -> PostResponse:
    response = PostResponse.model_validate(post)
    response.category_ids = crud_post_category.get_category_ids(db, post_id=post.id)
    return response


def _save(db: Session, post_in: PostCreate, current_user: SessionUser, post_id: Optional[str] = None) -> Post:
    try:
        post = crud_post.save_post(
            db,
            post_in=post_in,
            author_id=current_user.id,
            author_email=current_user.email,
            post_id=post_id,
        )
    except IntegrityError as e:
        logger.warning(f"[POST] Save rejected by datastore: {e.orig}")
        raise BackendWriteError("A post with this slug already exists, or a category is invalid.")
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("", response_model=PostListResponse, summary="List posts")
async def list_posts(
    status_filter: Optional[str] = Query(None, alias="status", description="draft, published or archived"),
    skip: int = Query(0, ge=0, description="Number of posts to skip"),
    limit: int = Query(MAX_LISTING_LIMIT, ge=1, le=MAX_LISTING_LIMIT, description="Maximum number of posts to return"),
    queries: QueryService = Depends(get_query_service),
    current_user: SessionUser = Depends(get_current_user),
) -> PostListResponse:
    """
    Posts newest first, optionally filtered by status.

    Use `skip` and `limit` to page through the table; `has_more` tells
    whether another page exists.
    """
    if status_filter and status_filter not in POST_STATUSES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status filter")

    result = queries.execute(build_listing_query(ListingFilters(
        status=status_filter,
        include_drafts=True,
        limit=limit,
        offset=skip,
    )))
    if not result.ok:
        raise BackendQueryError(result.error, view="admin_posts")
    total = queries.execute(build_count_query(status_filter))

    posts = [PostRecord.model_validate(row) for row in result.data]
    total_count = total.count if total.ok else skip + len(posts)
    return PostListResponse(
        posts=posts,
        total=total_count,
        has_more=(skip + len(posts) < total_count),
    )


@router.get("/{post_id}", response_model=PostResponse, summary="Get post for editing")
async def get_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> PostResponse:
    post = crud_post.get(db, post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return _to_response(db, post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="Create post")
async def create_post(
    post_in: PostCreate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> PostResponse:
    """
    Create a post authored by the signed-in user.

    Args:
        post_in: Post form; the first of ``category_ids`` becomes the primary category

    Raises:
        PostValidationError: 422 if the English title or slug is invalid
        BackendWriteError: 400 if the slug is taken
    """
    post_in = validate_post_form(post_in, generate_slug=True)
    post = _save(db, post_in, current_user)
    return _to_response(db, post)


@router.put("/{post_id}", response_model=PostResponse, summary="Update post")
async def update_post(
    post_id: str,
    post_in: PostUpdate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> PostResponse:
    post_in = validate_post_form(post_in, generate_slug=False)
    post = _save(db, post_in, current_user, post_id=post_id)
    return _to_response(db, post)


@router.delete("/{post_id}", response_model=MessageResponse, summary="Delete post")
async def delete_post(
    post_id: str,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    post = crud_post.delete(db, id=post_id)
    if not post:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    logger.info(f"[POST] Post {post_id} deleted by {current_user.id}")
    return MessageResponse(message="Post deleted")
