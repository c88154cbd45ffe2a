"""
Products: catalogue CRUD plus the low-stock report.

Stock levels are not edited here; they change only through StockService
so that every change produces a StockUpdateResult.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.config import get_settings
from shopkeep.core.exceptions import EntityError
from shopkeep.core.utils import model_to_schema, models_to_schemas, resolve_sort
from shopkeep.models.product import Product
from shopkeep.models.user import User
from shopkeep.repositories.product_repository import ProductRepository
from shopkeep.repositories.specs import Spec
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.product import ProductInsert, ProductReadOnly, ProductUpdate
from shopkeep.services.category_service import CategoryService

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Product"

SORTABLE = {
    "stock": "stock",
    "code": "code",
    "name": "name",
    "lowStockAlert": "low_stock_alert",
    "low_stock_alert": "low_stock_alert",
    "retailPrice": "retail_price",
    "retail_price": "retail_price",
}


def _validate_amounts(retail_price: Optional[Decimal], wholesale_price: Optional[Decimal],
                      low_stock_alert: Optional[int], stock: Optional[int] = None) -> None:
    for label, value in (("Retail price", retail_price), ("Wholesale price", wholesale_price),
                         ("Low stock alert", low_stock_alert), ("Stock", stock)):
        if value is not None and value < 0:
            raise EntityError.invalid_argument(ERROR_PREFIX, f"{label} cannot be negative")


def _name_or_code(term: str) -> Spec:
    pattern = f"%{term.strip()}%"
    return Spec.ilike("code", pattern) | Spec.ilike("name", pattern)


class ProductService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.products = ProductRepository(db)
        self.category_service = CategoryService(db)

    async def get_active_product_or_raise(self, product_id: int, for_update: bool = False) -> Product:
        """Fetch an active product, optionally locking its row."""
        product = await self.products.get_by_id(product_id, for_update=for_update)
        if product is None or not product.is_active:
            raise EntityError.not_found(ERROR_PREFIX, f"Product with id {product_id} not found")
        return product

    async def create_product(self, product_data: ProductInsert, actor: User) -> ProductReadOnly:
        _validate_amounts(product_data.retail_price, product_data.wholesale_price,
                          product_data.low_stock_alert, product_data.stock)

        if await self.products.exists_by_code(product_data.code):
            raise EntityError.already_exists(
                ERROR_PREFIX, f"Product with code '{product_data.code}' already exists"
            )
        if product_data.category_id is not None:
            await self.category_service.get_active_category_or_raise(product_data.category_id)

        try:
            product = await self.products.create(Product(
                **product_data.model_dump(),
                created_by=actor.username,
                last_updated_by=actor.username,
                is_active=True,
            ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Product '{product.code}' created by '{actor.username}' (id={product.id})")
        return await model_to_schema(product, ProductReadOnly)

    async def get_product(self, product_id: int) -> ProductReadOnly:
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise EntityError.not_found(ERROR_PREFIX, f"Product with id {product_id} not found")
        return await model_to_schema(product, ProductReadOnly)

    async def list_products(
        self,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Paginated[ProductReadOnly]:
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE
        specs = []
        if not include_inactive:
            specs.append(Spec.eq("is_active", True))
        if search:
            specs.append(_name_or_code(search))
        if category_id is not None:
            specs.append(Spec.eq("category_id", category_id))

        result = await self.products.list(*specs, page=page, page_size=page_size, order_by=Product.code)
        items = await models_to_schemas(result["items"], ProductReadOnly)
        return Paginated[ProductReadOnly].from_page(result, items)

    async def update_product(self, product_id: int, product_data: ProductUpdate, actor: User) -> ProductReadOnly:
        """
        Update catalogue fields of an active product.

        Raises:
            EntityError: ProductNotFound, ProductAlreadyExists, ProductInvalidArgument,
                CategoryNotFound
        """
        product = await self.get_active_product_or_raise(product_id)
        update_data = product_data.model_dump(exclude_unset=True, exclude_none=True)
        _validate_amounts(update_data.get("retail_price"), update_data.get("wholesale_price"),
                          update_data.get("low_stock_alert"))

        new_code = update_data.get("code")
        if new_code and new_code != product.code:
            existing = await self.products.find_by_code(new_code)
            if existing is not None and existing.id != product.id:
                raise EntityError.already_exists(ERROR_PREFIX, f"Product with code '{new_code}' already exists")
        if update_data.get("category_id") is not None:
            await self.category_service.get_active_category_or_raise(update_data["category_id"])

        try:
            product = await self.products.update(product, {**update_data, "last_updated_by": actor.username})
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Product id={product.id} updated by '{actor.username}'")
        return await model_to_schema(product, ProductReadOnly)

    async def delete_product(self, product_id: int, actor: User) -> ProductReadOnly:
        """Soft delete; sale lines keep referencing the row."""
        if not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can delete products")

        product = await self.get_active_product_or_raise(product_id)
        try:
            product.soft_delete(actor.username)
            await self.db.flush()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Product id={product_id} soft-deleted by '{actor.username}'")
        return await model_to_schema(product, ProductReadOnly)

    async def list_low_stock_products(
        self,
        name_or_code: Optional[str] = None,
        category_id: Optional[int] = None,
        min_stock: Optional[int] = None,
        max_stock: Optional[int] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> Paginated[ProductReadOnly]:
        """
        Active products at or under their low-stock alert, most urgent first by default.

        Raises:
            EntityError: ProductInvalidArgument for an unknown sort key or min_stock > max_stock
        """
        field, descending = resolve_sort(ERROR_PREFIX, sort_by, sort_direction, SORTABLE, default="stock")
        if min_stock is not None and max_stock is not None and min_stock > max_stock:
            raise EntityError.invalid_argument(
                ERROR_PREFIX, f"minStock {min_stock} is greater than maxStock {max_stock}"
            )
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE

        specs = []
        if name_or_code:
            specs.append(_name_or_code(name_or_code))
        if category_id is not None:
            specs.append(Spec.eq("category_id", category_id))
        if min_stock is not None:
            specs.append(Spec.ge("stock", min_stock))
        if max_stock is not None:
            specs.append(Spec.le("stock", max_stock))

        result = await self.products.list_low_stock(
            *specs, page=page, page_size=page_size, order_by=self.products.ordering(field, descending)
        )
        items = await models_to_schemas(result["items"], ProductReadOnly)
        return Paginated[ProductReadOnly].from_page(result, items)
