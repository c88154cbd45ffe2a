from typing import Optional

from fastapi import APIRouter, Query, status

from shopkeep.dependencies import CurrentUser, DbSession, page_size_or_default
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.product import ProductInsert, ProductReadOnly, ProductUpdate
from shopkeep.schemas.stock import StockUpdateRequest, StockUpdateResult
from shopkeep.services.product_service import ProductService
from shopkeep.services.stock_service import StockService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post("", response_model=ProductReadOnly, status_code=status.HTTP_201_CREATED)
async def create_product(product_data: ProductInsert, db: DbSession, current_user: CurrentUser):
    return await ProductService(db).create_product(product_data, current_user)


@router.get("", response_model=Paginated[ProductReadOnly])
async def list_products(
    db: DbSession,
    current_user: CurrentUser,
    search: Optional[str] = Query(None, description="Match on code or name"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    return await ProductService(db).list_products(
        search=search,
        category_id=category_id,
        page=page,
        page_size=page_size_or_default(page_size),
        include_inactive=include_inactive,
    )


# Declared before /{product_id} so "low-stock" is not parsed as an id
@router.get("/low-stock", response_model=Paginated[ProductReadOnly])
async def low_stock_products(
    db: DbSession,
    current_user: CurrentUser,
    name_or_code: Optional[str] = Query(None, alias="nameOrCode"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    min_stock: Optional[int] = Query(None, ge=0, alias="minStock"),
    max_stock: Optional[int] = Query(None, ge=0, alias="maxStock"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
):
    return await ProductService(db).list_low_stock_products(
        name_or_code=name_or_code,
        category_id=category_id,
        min_stock=min_stock,
        max_stock=max_stock,
        page=page,
        page_size=page_size_or_default(page_size),
        sort_by=sort_by,
        sort_direction=sort_direction,
    )


@router.get("/{product_id}", response_model=ProductReadOnly)
async def get_product(product_id: int, db: DbSession, current_user: CurrentUser):
    return await ProductService(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductReadOnly)
async def update_product(product_id: int, product_data: ProductUpdate, db: DbSession, current_user: CurrentUser):
    return await ProductService(db).update_product(product_id, product_data, current_user)


@router.delete("/{product_id}", response_model=ProductReadOnly)
async def delete_product(product_id: int, db: DbSession, current_user: CurrentUser):
    return await ProductService(db).delete_product(product_id, current_user)


@router.post("/{product_id}/stock", response_model=StockUpdateResult)
async def update_stock(
    product_id: int, request: StockUpdateRequest, db: DbSession, current_user: CurrentUser
):
    return await StockService(db).update_stock(product_id, request.operation, request.amount, current_user)
