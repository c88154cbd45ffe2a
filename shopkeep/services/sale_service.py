"""
Sales: recording, lookup and cancellation.

Recording a sale copies each product's name and prices into its
SaleProduct line and removes the sold units from stock, all in one
transaction. The total actually charged may be lower than the suggested
total; the resulting discount is spread evenly over every line's unit
price.

Cancelling a sale returns its units to stock and removes the sale together
with its lines.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.config import get_settings
from shopkeep.core.enums import StockOperation
from shopkeep.core.exceptions import EntityError
from shopkeep.core.utils import model_to_schema, models_to_schemas, utcnow
from shopkeep.models.product import Product
from shopkeep.models.sale import Sale
from shopkeep.models.sale_product import SaleProduct
from shopkeep.models.user import User
from shopkeep.repositories.location_repository import LocationRepository
from shopkeep.repositories.product_repository import ProductRepository
from shopkeep.repositories.sale_repository import SaleRepository
from shopkeep.repositories.specs import Spec
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.sale import SaleInsert, SaleReadOnly
from shopkeep.services.stock_service import StockService

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Sale"

CENTS = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def discount_ratio(suggested_total: Decimal, final_total: Decimal) -> Decimal:
    """Share of the suggested price actually charged (1 = no discount)."""
    if suggested_total == 0:
        return Decimal(1)
    return final_total / suggested_total


def discount_percentage(suggested_total: Decimal, final_total: Decimal) -> Decimal:
    return to_money((1 - discount_ratio(suggested_total, final_total)) * 100)


class SaleService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.sales = SaleRepository(db)
        self.locations = LocationRepository(db)
        self.products = ProductRepository(db)
        self.stock_service = StockService(db)

    def _validate_lines(self, sale_data: SaleInsert) -> None:
        product_ids = [line.product_id for line in sale_data.products]
        if len(product_ids) != len(set(product_ids)):
            raise EntityError.invalid_argument(ERROR_PREFIX, "Each product may appear only once in a sale")
        for line in sale_data.products:
            if line.quantity <= 0:
                raise EntityError.invalid_argument(
                    ERROR_PREFIX, f"Quantity for product {line.product_id} must be greater than zero"
                )
            # Stock is counted in whole units
            if line.quantity != line.quantity.to_integral_value():
                raise EntityError.invalid_argument(
                    ERROR_PREFIX, f"Quantity for product {line.product_id} must be a whole number"
                )

    async def _lock_products(self, product_ids: List[int]) -> Dict[int, Product]:
        products = {product.id: product for product in await self.products.get_many_for_update(product_ids)}
        for product_id in product_ids:
            product = products.get(product_id)
            if product is None or not product.is_active:
                raise EntityError.not_found("Product", f"Product with id {product_id} not found")
        return products

    async def _build_sale(self, sale_data: SaleInsert, products: Dict[int, Product], actor: User) -> Sale:
        unit_prices = {
            product_id: (product.wholesale_price if sale_data.is_wholesale else product.retail_price)
            for product_id, product in products.items()
        }
        suggested_total = to_money(sum(
            (unit_prices[line.product_id] * line.quantity for line in sale_data.products), Decimal(0)
        ))
        final_total = suggested_total if sale_data.final_price is None else to_money(sale_data.final_price)

        if final_total < 0:
            raise EntityError.invalid_argument(ERROR_PREFIX, "Final price cannot be negative")
        if final_total > suggested_total:
            raise EntityError.invalid_argument(
                ERROR_PREFIX, f"Final price {final_total} exceeds suggested total {suggested_total}"
            )

        ratio = discount_ratio(suggested_total, final_total)
        lines = []
        for line in sale_data.products:
            product = products[line.product_id]
            unit_price = unit_prices[line.product_id]
            lines.append(SaleProduct(
                product_id=product.id,
                quantity=line.quantity,
                product_description_snapshot=product.name,
                price_at_the_time=to_money(unit_price * ratio),
                wholesale_price_at_the_time=product.wholesale_price,
                suggested_price_at_the_time=unit_price,
            ))

        return Sale(
            location_id=sale_data.location_id,
            sale_date=sale_data.sale_date or utcnow(),
            payment_method=sale_data.payment_method,
            is_wholesale=sale_data.is_wholesale,
            suggested_total=suggested_total,
            final_total=final_total,
            discount_percentage=discount_percentage(suggested_total, final_total),
            created_by=actor.username,
            sale_products=lines,
        )

    async def record_sale(self, sale_data: SaleInsert, actor: User) -> SaleReadOnly:
        """
        Record a sale and take its units out of stock.

        Raises:
            EntityError: LocationNotFound, ProductNotFound, SaleInvalidArgument,
                StockInvalidArgument (not enough stock)
        """
        location = await self.locations.get_by_id(sale_data.location_id)
        if location is None or not location.is_active:
            raise EntityError.not_found("Location", f"Location with id {sale_data.location_id} not found")
        self._validate_lines(sale_data)

        try:
            products = await self._lock_products([line.product_id for line in sale_data.products])
            sale = await self._build_sale(sale_data, products, actor)
            for line in sale_data.products:
                await self.stock_service.apply_change(
                    products[line.product_id], StockOperation.REMOVE, int(line.quantity), actor
                )
            sale = await self.sales.create(sale)
            await self.db.commit()
        except EntityError as e:
            await self.db.rollback()
            logger.warning(f"Sale at location {sale_data.location_id} rejected: {e.code} - {e.message}")
            raise
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Sale id={sale.id} recorded at location {sale.location_id} by '{actor.username}': "
            f"{len(sale_data.products)} line(s), total {sale.final_total}"
        )
        return await model_to_schema(sale, SaleReadOnly)

    async def get_sale(self, sale_id: int) -> SaleReadOnly:
        sale = await self.sales.get_with_products(sale_id)
        if sale is None:
            raise EntityError.not_found(ERROR_PREFIX, f"Sale with id {sale_id} not found")
        return await model_to_schema(sale, SaleReadOnly)

    async def list_sales(
        self,
        location_id: Optional[int] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Paginated[SaleReadOnly]:
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE
        specs = () if location_id is None else (Spec.eq("location_id", location_id),)
        result = await self.sales.list(*specs, page=page, page_size=page_size, order_by=Sale.sale_date.desc())
        sales = await self.sales.load_products(result["items"])
        items = await models_to_schemas(sales, SaleReadOnly)
        return Paginated[SaleReadOnly].from_page(result, items)

    async def delete_sale(self, sale_id: int, actor: User) -> None:
        """
        Cancel a sale: remove it, then return its units to stock.

        The sale row is locked first, so concurrent cancellations of one sale
        serialize and only the first one returns stock.

        Raises:
            EntityError: SaleNotFound, SaleNotAuthorized
        """
        try:
            sale = await self.sales.get_with_products(sale_id, for_update=True)
            if sale is None:
                raise EntityError.not_found(ERROR_PREFIX, f"Sale with id {sale_id} not found")
            if not actor.is_admin and sale.created_by != actor.username:
                raise EntityError.not_authorized(
                    ERROR_PREFIX, "Only administrators or the seller can cancel a sale"
                )

            returned = [(line.product_id, int(line.quantity)) for line in sale.sale_products]
            if not await self.sales.delete_with_products(sale_id):
                raise EntityError.not_found(ERROR_PREFIX, f"Sale with id {sale_id} not found")

            products = {
                product.id: product
                for product in await self.products.get_many_for_update([pid for pid, _ in returned])
            }
            for product_id, quantity in returned:
                await self.stock_service.apply_change(products[product_id], StockOperation.ADD, quantity, actor)
            await self.db.commit()
        except EntityError as e:
            await self.db.rollback()
            logger.warning(f"Cancelling sale {sale_id} rejected: {e.code} - {e.message}")
            raise
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Sale id={sale_id} cancelled by '{actor.username}', stock returned")
