"""
Product categories.

Category names are unique. Deleting is a soft delete and only allowed
for administrators; products keep their category_id, but an inactive
category cannot be assigned to products or renamed.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.config import get_settings
from shopkeep.core.exceptions import EntityError
from shopkeep.core.utils import model_to_schema, models_to_schemas, resolve_sort
from shopkeep.models.category import Category
from shopkeep.models.user import User
from shopkeep.repositories.category_repository import CategoryRepository
from shopkeep.repositories.product_repository import ProductRepository
from shopkeep.repositories.specs import Spec
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.category import (
    CategoryDetailedView,
    CategoryForDropdown,
    CategoryInsert,
    CategoryReadOnly,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Category"

SORTABLE = {
    "name": "name",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


class CategoryService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.categories = CategoryRepository(db)
        self.products = ProductRepository(db)

    async def _get_or_raise(self, category_id: int) -> Category:
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise EntityError.not_found(ERROR_PREFIX, f"Category with id {category_id} not found")
        return category

    async def get_active_category_or_raise(self, category_id: int) -> Category:
        category = await self._get_or_raise(category_id)
        if not category.is_active:
            raise EntityError.not_found(ERROR_PREFIX, f"Category with id {category_id} not found")
        return category

    async def create_category(self, category_data: CategoryInsert, actor: User) -> CategoryReadOnly:
        if await self.categories.exists_by_name(category_data.name):
            raise EntityError.already_exists(
                ERROR_PREFIX, f"Category with name '{category_data.name}' already exists"
            )

        try:
            category = await self.categories.create(Category(
                name=category_data.name,
                created_by=actor.username,
                last_updated_by=actor.username,
                is_active=True,
            ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Category '{category.name}' created by '{actor.username}' (id={category.id})")
        return await model_to_schema(category, CategoryReadOnly)

    async def update_category(
        self, category_id: int, category_data: CategoryUpdate, actor: User
    ) -> CategoryReadOnly:
        category = await self.get_active_category_or_raise(category_id)

        if category_data.name != category.name:
            existing = await self.categories.find_by_name(category_data.name)
            if existing is not None and existing.id != category.id:
                raise EntityError.already_exists(
                    ERROR_PREFIX, f"Category with name '{category_data.name}' already exists"
                )

        try:
            category = await self.categories.update(category, {
                "name": category_data.name,
                "last_updated_by": actor.username,
            })
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Category id={category.id} renamed to '{category.name}' by '{actor.username}'")
        return await model_to_schema(category, CategoryReadOnly)

    async def get_category(self, category_id: int) -> CategoryReadOnly:
        return await model_to_schema(await self._get_or_raise(category_id), CategoryReadOnly)

    async def get_category_details(self, category_id: int) -> CategoryDetailedView:
        category = await model_to_schema(await self._get_or_raise(category_id), CategoryReadOnly)
        summary = await self.products.summarize_category(category_id)
        return CategoryDetailedView(**category.model_dump(), **summary)

    async def list_categories(
        self,
        name: Optional[str] = None,
        is_active: Optional[bool] = True,
        page: int = 1,
        page_size: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_direction: Optional[str] = None,
    ) -> Paginated[CategoryReadOnly]:
        """
        Filtered page of categories.

        Args:
            name: Case-insensitive substring of the name
            is_active: Only active (True), only deleted (False) or all (None)
        """
        field, descending = resolve_sort(ERROR_PREFIX, sort_by, sort_direction, SORTABLE, default="name")
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE

        specs = []
        if is_active is not None:
            specs.append(Spec.eq("is_active", is_active))
        if name:
            specs.append(Spec.ilike("name", f"%{name.strip()}%"))

        result = await self.categories.list(
            *specs, page=page, page_size=page_size, order_by=self.categories.ordering(field, descending)
        )
        items = await models_to_schemas(result["items"], CategoryReadOnly)
        return Paginated[CategoryReadOnly].from_page(result, items)

    async def list_for_dropdown(self) -> List[CategoryForDropdown]:
        categories = await self.categories.find_all(Spec.eq("is_active", True), order_by=Category.name)
        return await models_to_schemas(categories, CategoryForDropdown)

    async def delete_category(self, category_id: int, actor: User) -> CategoryReadOnly:
        """Soft delete. Deleting an already inactive category is rejected."""
        if not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can delete categories")

        category = await self._get_or_raise(category_id)
        if not category.is_active:
            raise EntityError.invalid_argument(ERROR_PREFIX, f"Category with id {category_id} is already deleted")

        try:
            category.soft_delete(actor.username)
            await self.db.flush()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Category id={category_id} soft-deleted by '{actor.username}'")
        return await model_to_schema(category, CategoryReadOnly)
