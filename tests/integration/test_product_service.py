# tests/integration/test_product_service.py
from decimal import Decimal

import pytest

from shopkeep.core.exceptions import EntityError, ErrorKind
from shopkeep.models.category import Category
from shopkeep.schemas.product import ProductInsert, ProductUpdate
from shopkeep.services.product_service import ProductService


def guitar_strings(**overrides):
    data = dict(code="STR-010", name="Strings 10-46", retail_price=Decimal("9.99"),
                wholesale_price=Decimal("4.50"), stock=12, low_stock_alert=3)
    data.update(overrides)
    return ProductInsert(**data)


async def test_create_product_records_actor(db_session, admin_user):
    product = await ProductService(db_session).create_product(guitar_strings(), admin_user)

    assert product.product_id is not None
    assert product.stock == 12
    assert product.created_by == "admin"
    assert product.is_active is True


async def test_duplicate_code_is_rejected(db_session, admin_user):
    service = ProductService(db_session)
    await service.create_product(guitar_strings(), admin_user)

    with pytest.raises(EntityError) as exc_info:
        await service.create_product(guitar_strings(name="Other"), admin_user)

    assert exc_info.value.code == "ProductAlreadyExists"


async def test_negative_price_is_rejected(db_session, admin_user):
    with pytest.raises(EntityError) as exc_info:
        await ProductService(db_session).create_product(
            guitar_strings(retail_price=Decimal("-1.00")), admin_user
        )

    assert exc_info.value.code == "ProductInvalidArgument"


async def test_update_cannot_take_another_products_code(db_session, admin_user, make_product):
    await make_product("STR-009")
    other = await make_product("STR-011")

    with pytest.raises(EntityError) as exc_info:
        await ProductService(db_session).update_product(other.id, ProductUpdate(code="STR-009"), admin_user)

    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS


async def test_update_changes_only_given_fields(db_session, clerk_user, make_product):
    product = await make_product("STR-009", retail="9.00", name="Strings 9-42")

    updated = await ProductService(db_session).update_product(
        product.id, ProductUpdate(retail_price=Decimal("11.00")), clerk_user
    )

    assert updated.retail_price == Decimal("11.00")
    assert updated.name == "Strings 9-42"
    assert updated.last_updated_by == "clerk"


async def test_soft_deleted_product_leaves_default_listing(db_session, admin_user, make_product):
    kept = await make_product("STR-009")
    dropped = await make_product("STR-011")
    service = ProductService(db_session)

    deleted = await service.delete_product(dropped.id, admin_user)
    assert deleted.is_active is False
    assert deleted.deleted_at is not None

    active = await service.list_products()
    everything = await service.list_products(include_inactive=True)
    assert [p.product_id for p in active.data] == [kept.id]
    assert everything.total_elements == 2

    with pytest.raises(EntityError) as exc_info:
        await service.update_product(dropped.id, ProductUpdate(name="Back again"), admin_user)
    assert exc_info.value.code == "ProductNotFound"


async def test_clerk_cannot_delete_products(db_session, clerk_user, make_product):
    product = await make_product("STR-009")

    with pytest.raises(EntityError) as exc_info:
        await ProductService(db_session).delete_product(product.id, clerk_user)

    assert exc_info.value.code == "ProductNotAuthorized"


async def test_search_matches_code_or_name(db_session, make_product):
    await make_product("STR-009", name="Strings 9-42")
    await make_product("PICK-001", name="Celluloid picks")
    await make_product("CAPO-001", name="Trigger capo")

    page = await ProductService(db_session).list_products(search="pick")

    assert [p.code for p in page.data] == ["PICK-001"]


async def test_low_stock_report(db_session, make_product):
    await make_product("STR-009", stock=2, low_stock_alert=2)
    await make_product("PICK-001", stock=50, low_stock_alert=5)
    await make_product("CAPO-001", stock=0, low_stock_alert=1)

    low = await ProductService(db_session).list_low_stock_products()

    assert [p.code for p in low.data] == ["CAPO-001", "STR-009"]
    assert low.total_elements == 2


@pytest.fixture
async def jewellery(db_session, make_product):
    """Two categories of low-stock products plus one well stocked ring"""
    rings = Category(name="Rings", created_by="admin", last_updated_by="admin")
    earrings = Category(name="Earrings", created_by="admin", last_updated_by="admin")
    db_session.add_all([rings, earrings])
    await db_session.commit()

    specs = [
        ("RING-001", "Silver ring", 1, 5, rings),
        ("RING-002", "Gold ring", 4, 5, rings),
        ("RING-003", "Pearl ring", 30, 5, rings),
        ("EAR-001", "Silver hoops", 0, 3, earrings),
        ("EAR-002", "Gold studs", 3, 3, earrings),
    ]
    for code, name, stock, alert, category in specs:
        product = await make_product(code, stock=stock, low_stock_alert=alert, name=name)
        product.category_id = category.id
    await db_session.commit()
    return rings, earrings


async def test_low_stock_filters_by_category_and_stock_range(db_session, jewellery):
    rings, _ = jewellery
    service = ProductService(db_session)

    ring_page = await service.list_low_stock_products(category_id=rings.id)
    ranged = await service.list_low_stock_products(min_stock=1, max_stock=3)

    assert [p.code for p in ring_page.data] == ["RING-001", "RING-002"]
    assert all(p.category_id == rings.id for p in ring_page.data)
    assert [p.code for p in ranged.data] == ["RING-001", "EAR-002"]


async def test_low_stock_filters_by_name_or_code(db_session, jewellery):
    service = ProductService(db_session)

    by_name = await service.list_low_stock_products(name_or_code="silver")
    by_code = await service.list_low_stock_products(name_or_code="ear-")

    assert {p.code for p in by_name.data} == {"RING-001", "EAR-001"}
    assert {p.code for p in by_code.data} == {"EAR-001", "EAR-002"}


async def test_low_stock_is_paginated_and_sortable(db_session, jewellery):
    service = ProductService(db_session)

    first = await service.list_low_stock_products(page=1, page_size=3)
    second = await service.list_low_stock_products(page=2, page_size=3)
    by_code_desc = await service.list_low_stock_products(sort_by="code", sort_direction="desc")

    assert [p.code for p in first.data] == ["EAR-001", "RING-001", "EAR-002"]
    assert [p.code for p in second.data] == ["RING-002"]
    assert first.total_elements == 4 and first.total_pages == 2 and first.has_next
    assert [p.code for p in by_code_desc.data] == ["RING-002", "RING-001", "EAR-002", "EAR-001"]


@pytest.mark.parametrize("kwargs", [
    {"sort_by": "password"},
    {"sort_direction": "sideways"},
    {"min_stock": 5, "max_stock": 1},
])
async def test_low_stock_rejects_bad_filters(db_session, kwargs):
    with pytest.raises(EntityError) as exc_info:
        await ProductService(db_session).list_low_stock_products(**kwargs)

    assert exc_info.value.code == "ProductInvalidArgument"


async def test_product_category_must_be_active(db_session, admin_user, jewellery):
    rings, earrings = jewellery
    earrings.soft_delete("admin")
    await db_session.commit()
    service = ProductService(db_session)

    created = await service.create_product(guitar_strings(code="RING-010", category_id=rings.id), admin_user)
    assert created.category_id == rings.id

    with pytest.raises(EntityError) as exc_info:
        await service.create_product(guitar_strings(code="EAR-010", category_id=earrings.id), admin_user)
    assert exc_info.value.code == "CategoryNotFound"

    with pytest.raises(EntityError) as exc_info:
        await service.update_product(created.product_id, ProductUpdate(category_id=999), admin_user)
    assert exc_info.value.code == "CategoryNotFound"
