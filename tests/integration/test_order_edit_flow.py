"""Integration tests: editing line items and details of placed orders."""

from datetime import date
from decimal import Decimal

import pytest

from src.application.dto.requests import (
    CreateOrderRequest,
    LineItemRequest,
    ReplaceOrderLineItemsRequest,
    UpdateOrderDetailsRequest,
    UpdateOrderStatusRequest,
)
from src.application.use_cases.create_order import CreateOrderUseCase
from src.application.use_cases.replace_order_line_items import (
    ReplaceOrderLineItemsUseCase,
)
from src.application.use_cases.update_order_details import UpdateOrderDetailsUseCase
from src.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from src.core.entities.ledger import TransactionType
from src.core.entities.order import OrderStatus
from src.core.exceptions import InsufficiencyError, InvalidStatusTransitionError


def _item(product_id: int, quantity: int, **kwargs) -> LineItemRequest:
    return LineItemRequest(
        product_id=product_id, quantity=quantity, unit_price=Decimal("4"), **kwargs
    )


@pytest.fixture
async def catalog(seed):
    tissue = await seed.material("Tissue Paper", stock=1000)
    box = await seed.product("Box", bom={tissue.id: 5})
    bag = await seed.product("Bag", bom={tissue.id: 2}, stock_quantity=10)
    return tissue, box, bag


@pytest.fixture
async def order(catalog, uow_factory):
    _, box, _ = catalog
    return await CreateOrderUseCase(uow_factory).execute(
        CreateOrderRequest(
            customer_id=1,
            delivery_date=date(2026, 12, 1),
            line_items=[_item(box.id, 100)],
        )
    )


class TestReplaceOrderLineItems:
    async def test_swap_products(self, seed, catalog, order, uow_factory):
        tissue, _, bag = catalog

        edited = await ReplaceOrderLineItemsUseCase(uow_factory).execute(
            ReplaceOrderLineItemsRequest(
                order_id=order.id,
                line_items=[_item(bag.id, 50)],
            )
        )

        assert [(i.product_id, i.quantity) for i in edited.items] == [(bag.id, 50)]
        # 500 restored, 100 consumed
        assert await seed.material_stock(tissue.id) == Decimal("900")
        rows = [tx for tx in await seed.ledger(tissue.id) if tx.reference_id == order.id]
        assert [(tx.type, tx.quantity) for tx in rows] == [
            (TransactionType.SUBTRACT, Decimal("500")),
            (TransactionType.ADD, Decimal("500")),
            (TransactionType.SUBTRACT, Decimal("100")),
        ]
        assert rows[1].reason.endswith("(order edited)")

    async def test_increase_uses_restored_stock(self, seed, catalog, order, uow_factory):
        tissue, box, _ = catalog

        # 500 left on hand; 180 boxes need 900, which fits once the 500 is back
        await ReplaceOrderLineItemsUseCase(uow_factory).execute(
            ReplaceOrderLineItemsRequest(order_id=order.id, line_items=[_item(box.id, 180)])
        )

        assert await seed.material_stock(tissue.id) == Decimal("100")

    async def test_insufficient_edit_leaves_order_untouched(
        self, seed, catalog, order, uow_factory
    ):
        tissue, box, _ = catalog

        with pytest.raises(InsufficiencyError):
            await ReplaceOrderLineItemsUseCase(uow_factory).execute(
                ReplaceOrderLineItemsRequest(
                    order_id=order.id, line_items=[_item(box.id, 300)]
                )
            )

        assert await seed.material_stock(tissue.id) == Decimal("500")
        async with uow_factory(read_only=True) as uow:
            unchanged = await uow.orders.get_order(order.id)
        assert [(i.product_id, i.quantity) for i in unchanged.items] == [(box.id, 100)]
        assert len(await seed.ledger(tissue.id)) == 2

    async def test_switch_to_finished_stock(self, seed, catalog, order, uow_factory):
        tissue, _, bag = catalog

        await ReplaceOrderLineItemsUseCase(uow_factory).execute(
            ReplaceOrderLineItemsRequest(
                order_id=order.id,
                line_items=[_item(bag.id, 10, order_from_stock=True)],
            )
        )

        assert await seed.material_stock(tissue.id) == Decimal("1000")
        assert await seed.product_stock(bag.id) == 0

    async def test_cancelled_order_is_locked(
        self, catalog, order, uow_factory, compensation_settings
    ):
        _, box, _ = catalog
        await UpdateOrderStatusUseCase(uow_factory, compensation_settings).execute(
            UpdateOrderStatusRequest(order_id=order.id, status=OrderStatus.CANCELLED)
        )

        with pytest.raises(InvalidStatusTransitionError):
            await ReplaceOrderLineItemsUseCase(uow_factory).execute(
                ReplaceOrderLineItemsRequest(order_id=order.id, line_items=[_item(box.id, 1)])
            )

    async def test_cancel_after_edit_restores_new_items(
        self, seed, catalog, order, uow_factory, compensation_settings
    ):
        tissue, _, bag = catalog
        await ReplaceOrderLineItemsUseCase(uow_factory).execute(
            ReplaceOrderLineItemsRequest(order_id=order.id, line_items=[_item(bag.id, 50)])
        )

        await UpdateOrderStatusUseCase(uow_factory, compensation_settings).execute(
            UpdateOrderStatusRequest(order_id=order.id, status=OrderStatus.CANCELLED)
        )

        assert await seed.material_stock(tissue.id) == Decimal("1000")


class TestUpdateOrderDetails:
    async def test_delivery_date_changes_without_stock_effects(
        self, seed, catalog, order, uow_factory
    ):
        tissue, _, _ = catalog

        updated = await UpdateOrderDetailsUseCase(uow_factory).execute(
            UpdateOrderDetailsRequest(order_id=order.id, delivery_date=date(2027, 1, 15))
        )

        assert updated.delivery_date == date(2027, 1, 15)
        assert await seed.material_stock(tissue.id) == Decimal("500")
        assert len(await seed.ledger(tissue.id)) == 2

    async def test_cancelled_order_details_are_locked(
        self, order, uow_factory, compensation_settings
    ):
        await UpdateOrderStatusUseCase(uow_factory, compensation_settings).execute(
            UpdateOrderStatusRequest(order_id=order.id, status=OrderStatus.CANCELLED)
        )

        with pytest.raises(InvalidStatusTransitionError):
            await UpdateOrderDetailsUseCase(uow_factory).execute(
                UpdateOrderDetailsRequest(order_id=order.id, delivery_date=date(2027, 1, 15))
            )

        async with uow_factory(read_only=True) as uow:
            unchanged = await uow.orders.get_order(order.id)
        assert unchanged.delivery_date == date(2026, 12, 1)
