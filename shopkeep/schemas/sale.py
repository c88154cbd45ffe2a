"""
Schemas for sales and their product lines.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, Field

from shopkeep.core.enums import PaymentMethod
from .base import BaseSchema, id_field


class SaleProductInsert(BaseSchema):
    product_id: int
    quantity: Decimal = Field(max_digits=8, decimal_places=3)


class SaleInsert(BaseSchema):
    location_id: int
    payment_method: PaymentMethod
    is_wholesale: bool = False
    # Total actually charged; defaults to the suggested total (no discount)
    final_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    sale_date: Optional[datetime] = None
    products: List[SaleProductInsert] = Field(min_length=1)


class SaleProductReadOnly(BaseSchema):
    sale_product_id: int = id_field("saleProductId", "sale_product_id")
    product_id: int
    quantity: Decimal
    product_description_snapshot: Optional[str] = None
    price_at_the_time: Optional[Decimal] = None
    wholesale_price_at_the_time: Optional[Decimal] = None
    suggested_price_at_the_time: Optional[Decimal] = None


class SaleReadOnly(BaseSchema):
    sale_id: int = id_field("saleId", "sale_id")
    location_id: int
    sale_date: datetime
    payment_method: PaymentMethod
    is_wholesale: bool
    suggested_total: Decimal
    final_total: Decimal
    discount_percentage: Decimal
    created_at: datetime
    created_by: Optional[str] = None
    products: List[SaleProductReadOnly] = Field(
        default_factory=list,
        validation_alias=AliasChoices("products", "sale_products"),
        serialization_alias="products",
    )
