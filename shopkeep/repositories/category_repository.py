from typing import Optional

from shopkeep.models.category import Category
from .base import BaseRepository
from .specs import Spec


class CategoryRepository(BaseRepository[Category, int]):
    model = Category

    async def find_by_name(self, name: str) -> Optional[Category]:
        return await self.find_one(Spec.eq("name", name))

    async def exists_by_name(self, name: str) -> bool:
        return await self.exists(Spec.eq("name", name))
