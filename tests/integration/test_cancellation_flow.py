"""Integration tests: cancellation, stock restoration and reconciliation."""

from datetime import date
from decimal import Decimal

import pytest

from src.application.dto.requests import (
    CreateOrderRequest,
    LineItemRequest,
    ReconcileCompensationsRequest,
    UpdateOrderStatusRequest,
)
from src.application.use_cases.create_order import CreateOrderUseCase
from src.application.use_cases.reconcile_compensations import (
    ReconcileCompensationsUseCase,
)
from src.application.use_cases.update_order_status import UpdateOrderStatusUseCase
from src.core.entities.compensation import CompensationStatus
from src.core.entities.ledger import TransactionType
from src.core.entities.order import OrderStatus
from src.core.exceptions import InvalidStatusTransitionError
from src.infrastructure.storage.sqlite.catalog_store import SQLiteRawMaterialStore


@pytest.fixture
def update_status(uow_factory, compensation_settings) -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(uow_factory, compensation_settings)


@pytest.fixture
async def placed(seed, uow_factory):
    """Tissue Paper at 1000, and an order for 100 Boxes (5 sheets each)."""
    tissue = await seed.material("Tissue Paper", stock=1000)
    box = await seed.product("Box", bom={tissue.id: 5})
    bag = await seed.product("Bag", stock_quantity=20)
    order = await CreateOrderUseCase(uow_factory).execute(
        CreateOrderRequest(
            customer_id=1,
            delivery_date=date(2026, 12, 1),
            line_items=[
                LineItemRequest(product_id=box.id, quantity=100, unit_price=Decimal("3")),
                LineItemRequest(
                    product_id=bag.id,
                    quantity=5,
                    unit_price=Decimal("1"),
                    order_from_stock=True,
                ),
            ],
        )
    )
    return tissue, bag, order


def _cancel(order_id: int) -> UpdateOrderStatusRequest:
    return UpdateOrderStatusRequest(order_id=order_id, status=OrderStatus.CANCELLED)


class TestCancellation:
    async def test_cancel_restores_stock(self, seed, placed, update_status):
        tissue, bag, order = placed
        assert await seed.material_stock(tissue.id) == Decimal("500")
        assert await seed.product_stock(bag.id) == 15

        result = await update_status.execute(_cancel(order.id))

        assert result.changed is True
        assert result.order.status is OrderStatus.CANCELLED
        assert result.order.stock_restored is True
        assert result.compensation.status is CompensationStatus.RESOLVED
        assert await seed.material_stock(tissue.id) == Decimal("1000")
        assert await seed.product_stock(bag.id) == 20

        rows = [tx for tx in await seed.ledger(tissue.id) if tx.reference_id == order.id]
        assert [(tx.type, tx.quantity) for tx in rows] == [
            (TransactionType.SUBTRACT, Decimal("500")),
            (TransactionType.ADD, Decimal("500")),
        ]
        assert rows[1].reason == f"Order #{order.id} - Material restoration (order cancelled)"

    async def test_cancel_twice_restores_once(self, seed, placed, update_status):
        tissue, bag, order = placed

        await update_status.execute(_cancel(order.id))
        second = await update_status.execute(_cancel(order.id))

        assert second.changed is False
        assert await seed.material_stock(tissue.id) == Decimal("1000")
        assert await seed.product_stock(bag.id) == 20
        assert len(await seed.ledger(tissue.id)) == 3

    async def test_cancelled_order_cannot_move(self, placed, update_status):
        _, _, order = placed
        await update_status.execute(_cancel(order.id))

        with pytest.raises(InvalidStatusTransitionError):
            await update_status.execute(
                UpdateOrderStatusRequest(order_id=order.id, status=OrderStatus.IN_PROGRESS)
            )

    async def test_forward_moves_do_not_touch_stock(self, seed, placed, update_status):
        tissue, _, order = placed

        for status in (OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED):
            await update_status.execute(
                UpdateOrderStatusRequest(order_id=order.id, status=status)
            )

        assert await seed.material_stock(tissue.id) == Decimal("500")
        # a completed order can still be cancelled
        await update_status.execute(_cancel(order.id))
        assert await seed.material_stock(tissue.id) == Decimal("1000")

    async def test_delivered_order_cannot_be_cancelled(self, placed, update_status):
        _, _, order = placed
        await update_status.execute(
            UpdateOrderStatusRequest(order_id=order.id, status=OrderStatus.DELIVERED)
        )
        with pytest.raises(InvalidStatusTransitionError):
            await update_status.execute(_cancel(order.id))


class TestFailedRestoration:
    @pytest.fixture
    def broken_stock_writes(self, monkeypatch):
        """Every guarded material write loses its race."""

        async def always_stale(self, material_id, expected, new):
            return False

        monkeypatch.setattr(SQLiteRawMaterialStore, "change_current_stock", always_stale)

    async def test_cancellation_stands_and_record_stays_pending(
        self, seed, placed, update_status, broken_stock_writes
    ):
        tissue, bag, order = placed

        result = await update_status.execute(_cancel(order.id))

        assert result.order.status is OrderStatus.CANCELLED
        assert result.order.stock_restored is False
        record = result.compensation
        assert record.status is CompensationStatus.PENDING
        assert record.attempts == 3
        assert "Concurrent stock update" in record.last_error
        assert record.planned_deltas[0].material_id == tissue.id
        assert record.planned_deltas[0].delta == Decimal("500")
        # each attempt rolled back as a whole
        assert await seed.material_stock(tissue.id) == Decimal("500")
        assert await seed.product_stock(bag.id) == 15

    async def test_reconcile_after_fix(
        self, seed, placed, update_status, uow_factory, compensation_settings, monkeypatch
    ):
        tissue, bag, order = placed
        original = SQLiteRawMaterialStore.change_current_stock

        async def always_stale(self, material_id, expected, new):
            return False

        monkeypatch.setattr(SQLiteRawMaterialStore, "change_current_stock", always_stale)
        await update_status.execute(_cancel(order.id))
        monkeypatch.setattr(SQLiteRawMaterialStore, "change_current_stock", original)

        result = await ReconcileCompensationsUseCase(
            uow_factory, compensation_settings
        ).execute(ReconcileCompensationsRequest())

        assert result.resolved == [order.id]
        assert await seed.material_stock(tissue.id) == Decimal("1000")
        assert await seed.product_stock(bag.id) == 20
        async with uow_factory(read_only=True) as uow:
            record = await uow.compensations.get_by_order(order.id)
            restored = await uow.orders.get_order(order.id)
        assert record.status is CompensationStatus.RESOLVED
        assert restored.stock_restored is True

    async def test_reconcile_gives_up_at_ceiling(
        self, placed, update_status, uow_factory, compensation_settings, broken_stock_writes
    ):
        _, _, order = placed
        await update_status.execute(_cancel(order.id))
        use_case = ReconcileCompensationsUseCase(uow_factory, compensation_settings)

        # 3 attempts from the cancellation, 3 more reach the ceiling of 6
        result = await use_case.execute(ReconcileCompensationsRequest())

        assert result.failed == [order.id]
        async with uow_factory(read_only=True) as uow:
            record = await uow.compensations.get_by_order(order.id)
        assert record.status is CompensationStatus.FAILED
        assert record.attempts == 6

        again = await use_case.execute(ReconcileCompensationsRequest())
        assert again.examined == 0

    async def test_reconcile_is_noop_without_pending(self, uow_factory, compensation_settings):
        result = await ReconcileCompensationsUseCase(
            uow_factory, compensation_settings
        ).execute(ReconcileCompensationsRequest())
        assert result.examined == 0

