from datetime import datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from shopkeep.schemas.location import LocationInsert, LocationReadOnly

NOW = datetime(2026, 10, 19, 9, 30, 0)


def location_data(**overrides):
    data = dict(
        location_id=3,
        name="Harbour Kiosk",
        created_at=NOW,
        updated_at=NOW,
        created_by="admin",
        last_updated_by="admin",
        is_active=True,
        deleted_at=None,
    )
    data.update(overrides)
    return data


def test_active_location_without_deleted_at_is_valid():
    location = LocationReadOnly(**location_data())
    assert location.is_active and location.deleted_at is None


def test_inactive_location_with_deleted_at_is_valid():
    location = LocationReadOnly(**location_data(is_active=False, deleted_at=NOW))
    assert not location.is_active


@pytest.mark.parametrize("is_active, deleted_at", [(True, NOW), (False, None)])
def test_soft_delete_fields_must_agree(is_active, deleted_at):
    with pytest.raises(ValidationError):
        LocationReadOnly(**location_data(is_active=is_active, deleted_at=deleted_at))


def test_reads_id_from_orm_attributes():
    row = SimpleNamespace(id=11, **{k: v for k, v in location_data().items() if k != "location_id"})

    location = LocationReadOnly.model_validate(row)

    assert location.location_id == 11
    assert location.model_dump(by_alias=True)["locationId"] == 11


def test_insert_strips_and_requires_name():
    assert LocationInsert(name="  Market Stall ").name == "Market Stall"
    with pytest.raises(ValidationError):
        LocationInsert(name="   ")
