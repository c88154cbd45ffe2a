# tests/integration/test_location_service.py
import pytest

from shopkeep.core.exceptions import EntityError, ErrorKind
from shopkeep.schemas.location import LocationInsert, LocationUpdate
from shopkeep.services.location_service import LocationService


async def test_create_location_records_audit_fields(db_session, clerk_user):
    location = await LocationService(db_session).create_location(LocationInsert(name="Harbour Kiosk"), clerk_user)

    assert location.name == "Harbour Kiosk"
    assert location.created_by == "clerk"
    assert location.last_updated_by == "clerk"
    assert location.is_active is True
    assert location.deleted_at is None


async def test_duplicate_location_name_is_rejected(db_session, clerk_user, shop_location):
    with pytest.raises(EntityError) as exc_info:
        await LocationService(db_session).create_location(LocationInsert(name="Main Street"), clerk_user)

    assert exc_info.value.code == "LocationAlreadyExists"


async def test_rename_onto_existing_name_is_rejected(db_session, admin_user, shop_location):
    service = LocationService(db_session)
    other = await service.create_location(LocationInsert(name="Airport"), admin_user)

    with pytest.raises(EntityError) as exc_info:
        await service.update_location(other.location_id, LocationUpdate(name="Main Street"), admin_user)

    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS


async def test_soft_delete_and_restore_keep_flags_in_step(db_session, admin_user, shop_location):
    service = LocationService(db_session)

    deleted = await service.delete_location(shop_location.id, admin_user)
    assert deleted.is_active is False
    assert deleted.deleted_at is not None
    assert deleted.last_updated_by == "admin"

    restored = await service.restore_location(shop_location.id, admin_user)
    assert restored.is_active is True
    assert restored.deleted_at is None


async def test_only_admin_may_delete_location(db_session, clerk_user, shop_location):
    with pytest.raises(EntityError) as exc_info:
        await LocationService(db_session).delete_location(shop_location.id, clerk_user)

    assert exc_info.value.code == "LocationNotAuthorized"


async def test_deleting_twice_is_invalid(db_session, admin_user, shop_location):
    service = LocationService(db_session)
    await service.delete_location(shop_location.id, admin_user)

    with pytest.raises(EntityError) as exc_info:
        await service.delete_location(shop_location.id, admin_user)

    assert exc_info.value.code == "LocationInvalidArgument"


async def test_list_hides_inactive_unless_asked(db_session, admin_user, shop_location):
    service = LocationService(db_session)
    await service.create_location(LocationInsert(name="Airport"), admin_user)
    await service.delete_location(shop_location.id, admin_user)

    active = await service.list_locations()
    everything = await service.list_locations(include_inactive=True)

    assert [loc.name for loc in active.data] == ["Airport"]
    assert [loc.name for loc in everything.data] == ["Airport", "Main Street"]


async def test_missing_location_is_not_found(db_session):
    with pytest.raises(EntityError) as exc_info:
        await LocationService(db_session).get_location(404)

    assert exc_info.value.code == "LocationNotFound"


async def test_deleted_location_cannot_be_renamed(db_session, admin_user, shop_location):
    service = LocationService(db_session)
    location_id = shop_location.id
    await service.delete_location(location_id, admin_user)

    with pytest.raises(EntityError) as exc_info:
        await service.update_location(location_id, LocationUpdate(name="Harbour Road"), admin_user)

    assert exc_info.value.code == "LocationNotFound"
    stored = await service.get_location(location_id)
    assert stored.name == "Main Street"
    assert stored.is_active is False
