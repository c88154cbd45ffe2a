"""
Stock mutations and their reports.

Each call reads the product row with SELECT ... FOR UPDATE, applies one
ADD / REMOVE / SET and returns a StockUpdateResult built from the locked
values. Concurrent changes to the same product therefore serialize and
the reported previous/new levels are never torn.

Stock never goes below zero: a REMOVE larger than the current level is
rejected, not clamped.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.enums import StockOperation
from shopkeep.core.exceptions import EntityError
from shopkeep.core.utils import utcnow
from shopkeep.models.product import Product
from shopkeep.models.user import User
from shopkeep.schemas.stock import StockUpdateResult
from shopkeep.services.product_service import ProductService

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Stock"


def compute_new_stock(previous: int, operation: StockOperation, amount: int) -> int:
    """
    Resulting stock level for one operation.

    Raises:
        EntityError: StockInvalidArgument for a non-positive delta, a negative
            target, or a REMOVE below zero
    """
    if operation == StockOperation.SET:
        if amount < 0:
            raise EntityError.invalid_argument(ERROR_PREFIX, "Stock level cannot be set below zero")
        return amount

    if amount <= 0:
        raise EntityError.invalid_argument(
            ERROR_PREFIX, f"{operation.value} amount must be greater than zero, got {amount}"
        )
    if operation == StockOperation.ADD:
        return previous + amount

    new_stock = previous - amount
    if new_stock < 0:
        raise EntityError.invalid_argument(
            ERROR_PREFIX, f"Cannot remove {amount} units, only {previous} in stock"
        )
    return new_stock


class StockService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.product_service = ProductService(db)

    async def apply_change(
        self, product: Product, operation: StockOperation, amount: int, actor: User
    ) -> StockUpdateResult:
        """
        Apply a change to an already locked product without committing.

        Used directly by callers that own a larger transaction (sales).
        """
        previous = product.stock
        new_stock = compute_new_stock(previous, operation, amount)

        product.stock = new_stock
        product.last_updated_by = actor.username
        # Stamped even when the level is unchanged
        product.updated_at = utcnow()
        await self.db.flush()

        return StockUpdateResult(
            product_id=product.id,
            product_code=product.code,
            previous_stock=previous,
            new_stock=new_stock,
            change_amount=new_stock - previous,
            success=True,
            operation_type=operation,
            updated_at=product.updated_at,
        )

    async def update_stock(
        self, product_id: int, operation: StockOperation, amount: int, actor: User
    ) -> StockUpdateResult:
        """
        Lock, change and commit the stock of one product.

        Args:
            product_id: Product to change
            operation: ADD, REMOVE or SET
            amount: Delta for ADD/REMOVE, target level for SET
            actor: Acting user, recorded as last updater

        Raises:
            EntityError: ProductNotFound, StockInvalidArgument
        """
        try:
            product = await self.product_service.get_active_product_or_raise(product_id, for_update=True)
            result = await self.apply_change(product, operation, amount, actor)
            await self.db.commit()
        except EntityError as e:
            await self.db.rollback()
            logger.warning(f"Stock {operation.value} {amount} on product {product_id} rejected: {e.code}")
            raise
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Stock {operation.value} on product {result.product_code}: "
            f"{result.previous_stock} -> {result.new_stock} by '{actor.username}'"
        )
        return result
