# tests/integration/test_category_service.py
import pytest

from shopkeep.core.exceptions import EntityError, ErrorKind
from shopkeep.schemas.category import CategoryInsert, CategoryUpdate
from shopkeep.services.category_service import CategoryService


async def add_categories(service, actor, *names):
    return [await service.create_category(CategoryInsert(name=name), actor) for name in names]


async def test_create_category_records_audit_fields(db_session, clerk_user):
    category = await CategoryService(db_session).create_category(CategoryInsert(name="  Rings "), clerk_user)

    assert category.category_id is not None
    assert category.name == "Rings"
    assert category.created_by == "clerk"
    assert category.is_active is True
    assert category.deleted_at is None


async def test_duplicate_category_name_is_rejected(db_session, clerk_user):
    service = CategoryService(db_session)
    await service.create_category(CategoryInsert(name="Rings"), clerk_user)

    with pytest.raises(EntityError) as exc_info:
        await service.create_category(CategoryInsert(name="Rings"), clerk_user)

    assert exc_info.value.code == "CategoryAlreadyExists"


async def test_rename_onto_existing_name_is_rejected(db_session, admin_user):
    service = CategoryService(db_session)
    rings, earrings = await add_categories(service, admin_user, "Rings", "Earrings")

    with pytest.raises(EntityError) as exc_info:
        await service.update_category(earrings.category_id, CategoryUpdate(name="Rings"), admin_user)
    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS

    renamed = await service.update_category(earrings.category_id, CategoryUpdate(name="Ear cuffs"), admin_user)
    assert renamed.name == "Ear cuffs"


async def test_list_filters_by_name_and_active_flag(db_session, admin_user):
    service = CategoryService(db_session)
    rings, bracelets, earrings = await add_categories(service, admin_user, "Rings", "Bracelets", "Earrings")
    await service.delete_category(bracelets.category_id, admin_user)

    active = await service.list_categories()
    deleted = await service.list_categories(is_active=False)
    everything = await service.list_categories(is_active=None)
    matching = await service.list_categories(name="EAR")

    assert [c.name for c in active.data] == ["Earrings", "Rings"]
    assert [c.name for c in deleted.data] == ["Bracelets"]
    assert everything.total_elements == 3
    assert [c.name for c in matching.data] == ["Earrings"]


async def test_list_sorts_by_requested_field(db_session, admin_user):
    service = CategoryService(db_session)
    await add_categories(service, admin_user, "Bracelets", "Rings", "Earrings")

    page = await service.list_categories(sort_by="name", sort_direction="DESC")

    assert [c.name for c in page.data] == ["Rings", "Earrings", "Bracelets"]

    with pytest.raises(EntityError) as exc_info:
        await service.list_categories(sort_by="colour")
    assert exc_info.value.code == "CategoryInvalidArgument"


async def test_dropdown_lists_active_categories_by_name(db_session, admin_user):
    service = CategoryService(db_session)
    rings, bracelets = await add_categories(service, admin_user, "Rings", "Bracelets")
    await add_categories(service, admin_user, "Anklets")
    await service.delete_category(rings.category_id, admin_user)

    dropdown = await service.list_for_dropdown()

    assert [c.name for c in dropdown] == ["Anklets", "Bracelets"]
    assert dropdown[1].category_id == bracelets.category_id
    assert dropdown[1].model_dump(by_alias=True) == {"categoryId": bracelets.category_id, "name": "Bracelets"}


async def test_details_summarise_active_products(db_session, admin_user, make_product):
    service = CategoryService(db_session)
    (rings,) = await add_categories(service, admin_user, "Rings")
    for code, stock, alert in (("RING-001", 1, 2), ("RING-002", 10, 2), ("RING-003", 4, 5), ("RING-004", 7, 1)):
        product = await make_product(code, stock=stock, low_stock_alert=alert)
        product.category_id = rings.category_id
        if code == "RING-004":
            product.soft_delete("admin")
    await db_session.commit()

    details = await service.get_category_details(rings.category_id)

    assert details.name == "Rings"
    assert details.product_count == 3
    assert details.total_stock == 15
    assert details.low_stock_count == 2


async def test_details_of_empty_category(db_session, admin_user):
    service = CategoryService(db_session)
    (rings,) = await add_categories(service, admin_user, "Rings")

    details = await service.get_category_details(rings.category_id)

    assert (details.product_count, details.total_stock, details.low_stock_count) == (0, 0, 0)


async def test_delete_is_admin_only_and_soft(db_session, admin_user, clerk_user):
    service = CategoryService(db_session)
    (rings,) = await add_categories(service, admin_user, "Rings")

    with pytest.raises(EntityError) as exc_info:
        await service.delete_category(rings.category_id, clerk_user)
    assert exc_info.value.code == "CategoryNotAuthorized"

    deleted = await service.delete_category(rings.category_id, admin_user)
    assert deleted.is_active is False
    assert deleted.deleted_at is not None

    with pytest.raises(EntityError) as exc_info:
        await service.delete_category(rings.category_id, admin_user)
    assert exc_info.value.code == "CategoryInvalidArgument"

    with pytest.raises(EntityError) as exc_info:
        await service.update_category(rings.category_id, CategoryUpdate(name="Bands"), admin_user)
    assert exc_info.value.code == "CategoryNotFound"


async def test_missing_category_is_not_found(db_session):
    with pytest.raises(EntityError) as exc_info:
        await CategoryService(db_session).get_category_details(404)

    assert exc_info.value.code == "CategoryNotFound"
