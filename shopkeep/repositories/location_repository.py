from typing import Optional

from shopkeep.models.location import Location
from .base import BaseRepository
from .specs import Spec


class LocationRepository(BaseRepository[Location, int]):
    model = Location

    async def find_by_name(self, name: str) -> Optional[Location]:
        return await self.find_one(Spec.eq("name", name))

    async def exists_by_name(self, name: str) -> bool:
        return await self.exists(Spec.eq("name", name))
