"""Tests for SQLite order store."""

from datetime import date
from decimal import Decimal

import pytest

from src.core.entities.order import OrderLineItem, OrderPatch, OrderStatus
from src.infrastructure.storage.sqlite.catalog_store import SQLiteProductStore
from src.infrastructure.storage.sqlite.order_store import SQLiteOrderStore


@pytest.fixture
async def product_ids(conn, sample_product):
    store = SQLiteProductStore(conn)
    first = await store.create_product(sample_product)
    second = await store.create_product(sample_product.model_copy(update={"id": None}))
    return first.id, second.id


class TestSQLiteOrderStore:
    async def test_create_and_get_with_items(self, conn, product_ids, sample_order):
        store = SQLiteOrderStore(conn)
        sample_order.items = [
            OrderLineItem(
                product_id=product_ids[0],
                quantity=100,
                unit_price=Decimal("12.50"),
            ),
            OrderLineItem(
                product_id=product_ids[1],
                quantity=2,
                unit_price=Decimal("3"),
                is_custom_size=True,
                length=Decimal("10.5"),
                width=Decimal("4"),
                height=Decimal("2"),
                custom_amount_per_unit=Decimal("0.75"),
            ),
        ]

        created = await store.create_order(sample_order)
        fetched = await store.get_order(created.id)

        assert fetched.status is OrderStatus.PENDING
        assert fetched.stock_restored is False
        assert fetched.delivery_date == date(2026, 4, 30)
        assert [i.product_id for i in fetched.items] == list(product_ids)
        custom = fetched.items[1]
        assert custom.is_custom_size is True
        assert custom.length == Decimal("10.5")
        assert custom.custom_amount_per_unit == Decimal("0.75")
        assert fetched.total_amount == Decimal("1256")

    async def test_get_missing(self, conn):
        assert await SQLiteOrderStore(conn).get_order(404) is None

    async def test_update_status_and_list(self, conn, product_ids, sample_order):
        store = SQLiteOrderStore(conn)
        sample_order.items[0].product_id = product_ids[0]
        order = await store.create_order(sample_order)

        await store.update_status(order.id, OrderStatus.IN_PROGRESS)

        assert (await store.get_order(order.id)).status is OrderStatus.IN_PROGRESS
        assert len(await store.list_orders(status=OrderStatus.IN_PROGRESS)) == 1
        assert await store.list_orders(status=OrderStatus.PENDING) == []
        assert len(await store.list_orders(customer_id=11)) == 1

    async def test_mark_stock_restored_once(self, conn, product_ids, sample_order):
        store = SQLiteOrderStore(conn)
        sample_order.items[0].product_id = product_ids[0]
        order = await store.create_order(sample_order)

        assert await store.mark_stock_restored(order.id) is True
        assert await store.mark_stock_restored(order.id) is False
        assert (await store.get_order(order.id)).stock_restored is True

    async def test_replace_items(self, conn, product_ids, sample_order):
        store = SQLiteOrderStore(conn)
        sample_order.items[0].product_id = product_ids[0]
        order = await store.create_order(sample_order)

        await store.replace_items(
            order.id,
            [OrderLineItem(product_id=product_ids[1], quantity=7, unit_price=Decimal("1"))],
        )

        items = (await store.get_order(order.id)).items
        assert [(i.product_id, i.quantity) for i in items] == [(product_ids[1], 7)]

    async def test_apply_patch(self, conn, product_ids, sample_order):
        store = SQLiteOrderStore(conn)
        sample_order.items[0].product_id = product_ids[0]
        order = await store.create_order(sample_order)

        await store.apply_patch(order.id, OrderPatch(delivery_date=date(2026, 7, 1)))

        fetched = await store.get_order(order.id)
        assert fetched.delivery_date == date(2026, 7, 1)
        assert fetched.items[0].quantity == 100
