from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import case, func, select

from shopkeep.models.product import Product
from .base import BaseRepository
from .specs import Spec

# Active products at or under their alert level
LOW_STOCK = Spec.eq("is_active", True) & Spec.compare_fields("stock", "le", "low_stock_alert")


class ProductRepository(BaseRepository[Product, int]):
    model = Product

    async def find_by_code(self, code: str) -> Optional[Product]:
        return await self.find_one(Spec.eq("code", code))

    async def exists_by_code(self, code: str) -> bool:
        return await self.exists(Spec.eq("code", code))

    async def get_many_for_update(self, product_ids: Iterable[int]) -> List[Product]:
        """
        Lock several products at once.

        Rows are locked in ascending id order so two sales touching the same
        products cannot deadlock each other.
        """
        query = (
            select(Product)
            .where(Product.id.in_(sorted(set(product_ids))))
            .order_by(Product.id)
            .with_for_update()
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_low_stock(self, *specs: Spec, page: int = 1, page_size: int = 20, order_by=None) -> Dict[str, Any]:
        """Page through low-stock products; ``specs`` narrow the report further."""
        return await self.list(
            LOW_STOCK, *specs,
            page=page,
            page_size=page_size,
            order_by=order_by if order_by is not None else self.ordering("stock"),
        )

    async def summarize_category(self, category_id: int) -> Dict[str, int]:
        """Counts over the active products of one category."""
        query = select(
            func.count(Product.id),
            func.coalesce(func.sum(Product.stock), 0),
            func.coalesce(func.sum(case((Product.stock <= Product.low_stock_alert, 1), else_=0)), 0),
        ).where(Product.category_id == category_id, Product.is_active.is_(True))
        product_count, total_stock, low_stock_count = (await self.db.execute(query)).one()
        return {
            "product_count": int(product_count),
            "total_stock": int(total_stock),
            "low_stock_count": int(low_stock_count),
        }
