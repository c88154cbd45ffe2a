# tests/integration/test_repository_specs.py
from decimal import Decimal

import pytest

from shopkeep.repositories.product_repository import ProductRepository
from shopkeep.repositories.specs import Spec


@pytest.fixture
async def catalogue(make_product):
    return [
        await make_product("RING-001", stock=1, retail="12.00", name="Silver ring"),
        await make_product("RING-002", stock=8, retail="40.00", name="Gold ring"),
        await make_product("EAR-001", stock=0, retail="9.50", name="Pearl earrings"),
        await make_product("CHAIN-001", stock=15, retail="25.00", name="Silver chain"),
    ]


async def test_find_all_with_combined_specs(db_session, catalogue):
    products = ProductRepository(db_session)

    found = await products.find_all(Spec.ilike("code", "RING-%") & Spec.lt("retail_price", Decimal("20")))
    assert [p.code for p in found] == ["RING-001"]

    either = await products.find_all(Spec.ilike("name", "%silver%") | Spec.eq("stock", 0))
    assert {p.code for p in either} == {"RING-001", "EAR-001", "CHAIN-001"}

    negated = await products.find_all(~Spec.ilike("code", "RING-%"))
    assert {p.code for p in negated} == {"EAR-001", "CHAIN-001"}


async def test_count_exists_and_in(db_session, catalogue):
    products = ProductRepository(db_session)

    assert await products.count() == 4
    assert await products.count(Spec.in_("code", ["RING-001", "EAR-001", "NOPE"])) == 2
    assert await products.exists(Spec.eq("code", "CHAIN-001")) is True
    assert await products.exists(Spec.gt("stock", 100)) is False
    assert await products.count(Spec.is_null("deleted_at")) == 4


async def test_list_paginates(db_session, catalogue):
    page = await ProductRepository(db_session).list(page=2, page_size=3)

    assert page["total"] == 4
    assert page["total_pages"] == 2
    assert len(page["items"]) == 1
    assert page["has_prev"] and not page["has_next"]


async def test_low_stock_only_returns_active_products_under_alert(db_session, catalogue):
    catalogue[2].soft_delete("admin")
    await db_session.commit()

    page = await ProductRepository(db_session).list_low_stock()

    assert [p.code for p in page["items"]] == ["RING-001"]
    assert page["total"] == 1


async def test_compare_fields_matches_column_against_column(db_session, catalogue):
    products = ProductRepository(db_session)

    over_alert = await products.find_all(Spec.compare_fields("stock", "gt", "low_stock_alert"))

    assert {p.code for p in over_alert} == {"RING-002", "CHAIN-001"}


async def test_ordering_sorts_descending_with_id_tiebreak(db_session, catalogue):
    products = ProductRepository(db_session)

    by_price = await products.find_all(order_by=products.ordering("retail_price", descending=True))

    assert [p.code for p in by_price] == ["RING-002", "CHAIN-001", "RING-001", "EAR-001"]


async def test_unknown_field_is_reported(db_session, catalogue):
    with pytest.raises(AttributeError):
        await ProductRepository(db_session).find_all(Spec.eq("colour", "blue"))
