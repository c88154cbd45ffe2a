"""
Schemas for stock mutations.
"""

from datetime import datetime

from pydantic import ConfigDict, Field, model_validator

from shopkeep.core.enums import StockOperation
from .base import BaseSchema


class StockUpdateRequest(BaseSchema):
    """
    ``amount`` is the delta for ADD and REMOVE and the target level for SET.
    """
    operation: StockOperation
    amount: int = Field(ge=0)


class StockUpdateResult(BaseSchema):
    """Point-in-time report of a single stock mutation. Never modified."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    product_code: str
    previous_stock: int
    new_stock: int
    change_amount: int
    success: bool
    operation_type: StockOperation
    updated_at: datetime

    @model_validator(mode='after')
    def check_arithmetic(self):
        if self.new_stock - self.previous_stock != self.change_amount:
            raise ValueError(
                f'changeAmount {self.change_amount} does not match '
                f'{self.previous_stock} -> {self.new_stock}'
            )
        if self.new_stock < 0:
            raise ValueError('newStock cannot be negative')
        if self.operation_type == StockOperation.ADD and self.change_amount < 0:
            raise ValueError('ADD cannot decrease stock')
        if self.operation_type == StockOperation.REMOVE and self.change_amount > 0:
            raise ValueError('REMOVE cannot increase stock')
        return self
