from typing import Optional

from fastapi import APIRouter, Query, status

from shopkeep.dependencies import CurrentUser, DbSession, page_size_or_default
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.sale import SaleInsert, SaleReadOnly
from shopkeep.services.sale_service import SaleService

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post("", response_model=SaleReadOnly, status_code=status.HTTP_201_CREATED)
async def record_sale(sale_data: SaleInsert, db: DbSession, current_user: CurrentUser):
    return await SaleService(db).record_sale(sale_data, current_user)


@router.get("", response_model=Paginated[SaleReadOnly])
async def list_sales(
    db: DbSession,
    current_user: CurrentUser,
    location_id: Optional[int] = Query(None, alias="locationId"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
):
    return await SaleService(db).list_sales(
        location_id=location_id, page=page, page_size=page_size_or_default(page_size)
    )


@router.get("/{sale_id}", response_model=SaleReadOnly)
async def get_sale(sale_id: int, db: DbSession, current_user: CurrentUser):
    return await SaleService(db).get_sale(sale_id)


@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale(sale_id: int, db: DbSession, current_user: CurrentUser):
    await SaleService(db).delete_sale(sale_id, current_user)
