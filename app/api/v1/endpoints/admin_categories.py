"""Admin endpoints for managing categories (the settings page)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.exceptions import BackendWriteError
from app.crud import crud_category
from app.schemas.auth import MessageResponse, SessionUser
from app.schemas.category import (
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/categories",
    tags=["Admin - Categories"],
)


@router.get("", response_model=CategoryListResponse, summary="List categories")
async def list_categories(
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> CategoryListResponse:
    categories = crud_category.get_all(db)
    return CategoryListResponse(
        categories=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories),
    )


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED, summary="Add category")
async def create_category(
    category_in: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> CategoryResponse:
    """
    Add a category. An empty slug is generated from the English name.

    Raises:
        BackendWriteError: 400 if the slug already exists
    """
    try:
        category = crud_category.create_category(db, category_in=category_in)
    except IntegrityError:
        raise BackendWriteError("A category with this slug already exists.")
    logger.info(f"[CATEGORY] Created '{category.slug}'")
    return CategoryResponse.model_validate(category)


@router.put("/{category_id}", response_model=CategoryResponse, summary="Update category")
async def update_category(
    category_id: str,
    category_in: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> CategoryResponse:
    category = crud_category.get(db, category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    try:
        category = crud_category.update_category(db, db_obj=category, category_in=category_in)
    except IntegrityError:
        raise BackendWriteError("A category with this slug already exists.")
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=MessageResponse, summary="Delete category")
async def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    """Posts that used it as their primary category keep existing without one."""
    category = crud_category.delete(db, id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    logger.info(f"[CATEGORY] Deleted '{category.slug}'")
    return MessageResponse(message="Category deleted")
