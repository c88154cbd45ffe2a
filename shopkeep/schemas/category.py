"""
Schemas for product categories.
"""

from pydantic import Field, field_validator, model_validator

from .base import BaseSchema, AuditedReadOnly, id_field


class CategoryInsert(BaseSchema):
    name: str = Field(min_length=1, max_length=100)

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class CategoryUpdate(CategoryInsert):
    pass


class CategoryReadOnly(AuditedReadOnly):
    category_id: int = id_field("categoryId", "category_id")
    name: str

    @model_validator(mode='after')
    def check_soft_delete_state(self):
        if self.is_active == (self.deleted_at is not None):
            raise ValueError('deletedAt must be set if and only if isActive is false')
        return self


class CategoryForDropdown(BaseSchema):
    """Minimal shape for product form selects"""
    category_id: int = id_field("categoryId", "category_id")
    name: str


class CategoryDetailedView(CategoryReadOnly):
    """A category with figures over its active products"""
    product_count: int = 0
    total_stock: int = 0
    low_stock_count: int = 0
