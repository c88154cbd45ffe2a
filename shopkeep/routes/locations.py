from typing import Optional

from fastapi import APIRouter, Query, status

from shopkeep.dependencies import CurrentUser, DbSession, page_size_or_default
from shopkeep.schemas.base import Paginated
from shopkeep.schemas.location import LocationInsert, LocationReadOnly, LocationUpdate
from shopkeep.services.location_service import LocationService

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.post("", response_model=LocationReadOnly, status_code=status.HTTP_201_CREATED)
async def create_location(location_data: LocationInsert, db: DbSession, current_user: CurrentUser):
    return await LocationService(db).create_location(location_data, current_user)


@router.get("", response_model=Paginated[LocationReadOnly])
async def list_locations(
    db: DbSession,
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    include_inactive: bool = Query(False, alias="includeInactive"),
):
    return await LocationService(db).list_locations(
        page=page, page_size=page_size_or_default(page_size), include_inactive=include_inactive
    )


@router.get("/{location_id}", response_model=LocationReadOnly)
async def get_location(location_id: int, db: DbSession, current_user: CurrentUser):
    return await LocationService(db).get_location(location_id)


@router.put("/{location_id}", response_model=LocationReadOnly)
async def update_location(
    location_id: int, location_data: LocationUpdate, db: DbSession, current_user: CurrentUser
):
    return await LocationService(db).update_location(location_id, location_data, current_user)


@router.delete("/{location_id}", response_model=LocationReadOnly)
async def delete_location(location_id: int, db: DbSession, current_user: CurrentUser):
    return await LocationService(db).delete_location(location_id, current_user)


@router.post("/{location_id}/restore", response_model=LocationReadOnly)
async def restore_location(location_id: int, db: DbSession, current_user: CurrentUser):
    return await LocationService(db).restore_location(location_id, current_user)
