from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from shopkeep.models.sale import Sale
from shopkeep.models.sale_product import SaleProduct
from .base import BaseRepository


class SaleRepository(BaseRepository[Sale, int]):
    model = Sale

    async def get_with_products(self, sale_id: int, for_update: bool = False) -> Optional[Sale]:
        """Fetch a sale together with its product lines."""
        query = select(Sale).options(selectinload(Sale.sale_products)).where(Sale.id == sale_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def load_products(self, sales: List[Sale]) -> List[Sale]:
        """Populate ``sale_products`` on sales fetched without them."""
        if not sales:
            return sales
        query = (
            select(Sale)
            .options(selectinload(Sale.sale_products))
            .where(Sale.id.in_([sale.id for sale in sales]))
            .execution_options(populate_existing=True)
        )
        await self.db.execute(query)
        return sales


    async def delete_with_products(self, sale_id: int) -> bool:
        """
        Remove a sale and its lines.

        Returns:
            False if the sale row was already gone
        """
        await self.db.execute(delete(SaleProduct).where(SaleProduct.sale_id == sale_id))
        result = await self.db.execute(delete(Sale).where(Sale.id == sale_id))
        return result.rowcount == 1


class SaleProductRepository(BaseRepository[SaleProduct, int]):
    model = SaleProduct

    async def find_by_sale(self, sale_id: int) -> List[SaleProduct]:
        result = await self.db.execute(
            select(SaleProduct).where(SaleProduct.sale_id == sale_id).order_by(SaleProduct.id)
        )
        return list(result.scalars().all())
