"""Category API router."""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_category_service, get_current_user
from ..models import (
    ApiResponse,
    CategoryCreate,
    CategoryData,
    CategoryListData,
    CategoryUpdate,
    UserPublic,
)
from ..services import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=ApiResponse[CategoryListData])
def list_categories(
    user: UserPublic = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    """Get all of the caller's categories."""
    return ApiResponse(data=CategoryListData(categories=categories.list_categories(user.id)))


@router.post("", response_model=ApiResponse[CategoryData], status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    user: UserPublic = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    """Create a new category."""
    category = categories.create_category(user.id, category_data)
    return ApiResponse(message="Category created successfully", data=CategoryData(category=category))


@router.get("/{category_id}", response_model=ApiResponse[CategoryData])
def get_category(
    category_id: str,
    user: UserPublic = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    return ApiResponse(data=CategoryData(category=categories.get_category(user.id, category_id)))


@router.put("/{category_id}", response_model=ApiResponse[CategoryData])
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    user: UserPublic = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    """Rename or recolor a category."""
    category = categories.update_category(user.id, category_id, category_data)
    return ApiResponse(message="Category updated successfully", data=CategoryData(category=category))


@router.delete("/{category_id}", response_model=ApiResponse[None])
def delete_category(
    category_id: str,
    user: UserPublic = Depends(get_current_user),
    categories: CategoryService = Depends(get_category_service),
):
    """Delete a category; its tasks lose their category."""
    categories.delete_category(user.id, category_id)
    return ApiResponse(message="Category deleted successfully")
