from typing import List, Optional

from fastapi import APIRouter, Query, status

from shopkeep.dependencies import CurrentUser, DbSession, page_size_or_default
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.category import (
    CategoryDetailedView,
    CategoryForDropdown,
    CategoryInsert,
    CategoryReadOnly,
    CategoryUpdate,
)
from shopkeep.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post("", response_model=CategoryReadOnly, status_code=status.HTTP_201_CREATED)
async def create_category(category_data: CategoryInsert, db: DbSession, current_user: CurrentUser):
    return await CategoryService(db).create_category(category_data, current_user)


@router.get("", response_model=Paginated[CategoryReadOnly])
async def list_categories(
    db: DbSession,
    current_user: CurrentUser,
    name: Optional[str] = Query(None, description="Match on part of the name"),
    is_active: Optional[bool] = Query(True, alias="isActive"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
):
    return await CategoryService(db).list_categories(
        name=name,
        is_active=is_active,
        page=page,
        page_size=page_size_or_default(page_size),
        sort_by=sort_by,
        sort_direction=sort_direction,
    )


# Declared before /{category_id} so "dropdown" is not parsed as an id
@router.get("/dropdown", response_model=List[CategoryForDropdown])
async def categories_for_dropdown(db: DbSession, current_user: CurrentUser):
    return await CategoryService(db).list_for_dropdown()


@router.get("/{category_id}", response_model=CategoryReadOnly)
async def get_category(category_id: int, db: DbSession, current_user: CurrentUser):
    return await CategoryService(db).get_category(category_id)


@router.get("/{category_id}/details", response_model=CategoryDetailedView)
async def get_category_details(category_id: int, db: DbSession, current_user: CurrentUser):
    return await CategoryService(db).get_category_details(category_id)


@router.put("/{category_id}", response_model=CategoryReadOnly)
async def update_category(
    category_id: int, category_data: CategoryUpdate, db: DbSession, current_user: CurrentUser
):
    return await CategoryService(db).update_category(category_id, category_data, current_user)


@router.delete("/{category_id}", response_model=CategoryReadOnly)
async def delete_category(category_id: int, db: DbSession, current_user: CurrentUser):
    return await CategoryService(db).delete_category(category_id, current_user)
