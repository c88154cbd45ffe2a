"""
Locations: named places where sales happen.

Names are unique across active and inactive locations. Deleting a location
is a soft delete (``is_active`` False plus ``deleted_at``) so sales that
reference it stay valid; only administrators may delete or restore.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shopkeep.core.config import get_settings
from shopkeep.core.exceptions import EntityError
from shopkeep.core.utils import model_to_schema, models_to_schemas
from shopkeep.models.location import Location
from shopkeep.models.user import User
from shopkeep.repositories.location_repository import LocationRepository
from shopkeep.repositories.specs import Spec
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.location import LocationInsert, LocationReadOnly, LocationUpdate

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Location"


class LocationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.locations = LocationRepository(db)

    async def _get_or_raise(self, location_id: int) -> Location:
        location = await self.locations.get_by_id(location_id)
        if location is None:
            raise EntityError.not_found(ERROR_PREFIX, f"Location with id {location_id} not found")
        return location

    async def create_location(self, location_data: LocationInsert, actor: User) -> LocationReadOnly:
        if await self.locations.exists_by_name(location_data.name):
            raise EntityError.already_exists(
                ERROR_PREFIX, f"Location with name '{location_data.name}' already exists"
            )

        try:
            location = await self.locations.create(Location(
                name=location_data.name,
                created_by=actor.username,
                last_updated_by=actor.username,
                is_active=True,
            ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Location '{location.name}' created by '{actor.username}' (id={location.id})")
        return await model_to_schema(location, LocationReadOnly)

    async def update_location(
        self, location_id: int, location_data: LocationUpdate, actor: User
    ) -> LocationReadOnly:
        location = await self._get_or_raise(location_id)
        if not location.is_active:
            raise EntityError.not_found(ERROR_PREFIX, f"Location with id {location_id} not found")

        if location_data.name != location.name:
            existing = await self.locations.find_by_name(location_data.name)
            if existing is not None and existing.id != location.id:
                raise EntityError.already_exists(
                    ERROR_PREFIX, f"Location with name '{location_data.name}' already exists"
                )

        try:
            location = await self.locations.update(location, {
                "name": location_data.name,
                "last_updated_by": actor.username,
            })
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Location id={location.id} updated by '{actor.username}'")
        return await model_to_schema(location, LocationReadOnly)

    async def get_location(self, location_id: int) -> LocationReadOnly:
        return await model_to_schema(await self._get_or_raise(location_id), LocationReadOnly)

    async def list_locations(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Paginated[LocationReadOnly]:
        page_size = page_size or get_settings().DEFAULT_PAGE_SIZE
        specs = () if include_inactive else (Spec.eq("is_active", True),)
        result = await self.locations.list(*specs, page=page, page_size=page_size, order_by=Location.name)
        items = await models_to_schemas(result["items"], LocationReadOnly)
        return Paginated[LocationReadOnly].from_page(result, items)

    async def delete_location(self, location_id: int, actor: User) -> LocationReadOnly:
        """Soft delete. Deleting an already inactive location is rejected."""
        if not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can delete locations")

        location = await self._get_or_raise(location_id)
        if not location.is_active:
            raise EntityError.invalid_argument(ERROR_PREFIX, f"Location with id {location_id} is already deleted")

        try:
            location.soft_delete(actor.username)
            await self.db.flush()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Location id={location_id} soft-deleted by '{actor.username}'")
        return await model_to_schema(location, LocationReadOnly)

    async def restore_location(self, location_id: int, actor: User) -> LocationReadOnly:
        if not actor.is_admin:
            raise EntityError.not_authorized(ERROR_PREFIX, "Only administrators can restore locations")

        location = await self._get_or_raise(location_id)
        if location.is_active:
            raise EntityError.invalid_argument(ERROR_PREFIX, f"Location with id {location_id} is not deleted")

        try:
            location.restore(actor.username)
            await self.db.flush()
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Location id={location_id} restored by '{actor.username}'")
        return await model_to_schema(location, LocationReadOnly)
