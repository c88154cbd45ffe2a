"""
Schemas for product-related API endpoints.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from .base import BaseSchema, AuditedReadOnly, id_field


class ProductBase(BaseSchema):
    """Fields common to insert and read"""
    code: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    retail_price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    wholesale_price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    low_stock_alert: int = 0
    category_id: Optional[int] = None

    @field_validator('code', 'name', mode='before')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProductInsert(ProductBase):
    stock: int = 0


class ProductUpdate(BaseSchema):
    """All fields optional; stock is changed only through stock operations"""
    code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    retail_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    wholesale_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    low_stock_alert: Optional[int] = None
    category_id: Optional[int] = None


class ProductReadOnly(ProductBase, AuditedReadOnly):
    product_id: int = id_field("productId", "product_id")
    stock: int
