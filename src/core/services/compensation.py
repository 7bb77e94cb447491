"""
Compensation (stock restoration) service.

Reverses the stock consumption of an order's line items: finished goods
go back to the product, raw materials go back through the ledger as ADD
rows. Per-unit amounts are recomputed exactly as the requirement
calculator does, including the line item's own custom override.
"""

from decimal import Decimal

from src.config import get_logger
from src.core.entities.compensation import PlannedDelta
from src.core.entities.ledger import ReferenceType, TransactionType
from src.core.entities.order import Order, OrderLineItem
from src.core.exceptions import ConcurrentStockUpdateError, ProductNotFoundError
from src.core.interfaces.unit_of_work import IUnitOfWork
from src.core.services.requirement_calculator import effective_amount_per_unit
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


class CompensationService:
    """Restores stock consumed by orders."""

    def __init__(self, uow: IUnitOfWork) -> None:
        self._uow = uow
        self._ledger = StockLedger(uow.materials, uow.ledger)

    async def plan(self, items: list[OrderLineItem]) -> list[PlannedDelta]:
        """
        Stock increases that restoring ``items`` would apply.

        Material deltas come first, merged per material and ordered by ID,
        followed by product deltas ordered by ID.
        """
        material_deltas: dict[int, Decimal] = {}
        product_deltas: dict[int, Decimal] = {}

        for item in items:
            if item.order_from_stock:
                product_deltas[item.product_id] = product_deltas.get(
                    item.product_id, Decimal("0")
                ) + Decimal(item.quantity)
                continue

            lines = await self._uow.bom.get_lines(item.product_id)
            for line in lines:
                per_unit = effective_amount_per_unit(
                    len(lines), line.amount_per_unit, item.custom_amount_per_unit
                )
                if per_unit <= 0:
                    continue
                material_deltas[line.material_id] = (
                    material_deltas.get(line.material_id, Decimal("0"))
                    + per_unit * item.quantity
                )

        planned = [
            PlannedDelta(material_id=material_id, delta=delta)
            for material_id, delta in sorted(material_deltas.items())
        ]
        planned.extend(
            PlannedDelta(product_id=product_id, delta=delta)
            for product_id, delta in sorted(product_deltas.items())
        )
        return planned

    async def restore_items(
        self,
        order_id: int,
        items: list[OrderLineItem],
        actor: str,
        cause: str,
    ) -> list[PlannedDelta]:
        """Apply the restoration of ``items`` and return what was applied."""
        planned = await self.plan(items)

        for delta in planned:
            if delta.material_id is not None:
                await self._ledger.append(
                    material_id=delta.material_id,
                    transaction_type=TransactionType.ADD,
                    quantity=delta.delta,
                    reason=f"Order #{order_id} - Material restoration ({cause})",
                    reference_type=ReferenceType.ORDER,
                    reference_id=order_id,
                    created_by=actor,
                )
                continue

            product_id = delta.product_id
            product = await self._uow.products.get_product(product_id)  # type: ignore[arg-type]
            if product is None:
                raise ProductNotFoundError(product_id)  # type: ignore[arg-type]
            new_quantity = product.stock_quantity + int(delta.delta)
            updated = await self._uow.products.change_stock_quantity(
                product_id, product.stock_quantity, new_quantity  # type: ignore[arg-type]
            )
            if not updated:
                raise ConcurrentStockUpdateError("product", product_id)  # type: ignore[arg-type]
            logger.info(
                "product_stock_restored",
                order_id=order_id,
                product_id=product_id,
                quantity=int(delta.delta),
                new_quantity=new_quantity,
            )

        return planned

    async def restore_order(self, order: Order, actor: str) -> list[PlannedDelta]:
        """
        Restore a cancelled order's stock exactly once.

        The order's ``stock_restored`` flag is set in the same transaction;
        if it was already set nothing is applied and an empty list is
        returned.
        """
        first_time = await self._uow.orders.mark_stock_restored(order.id)  # type: ignore[arg-type]
        if not first_time:
            logger.info("order_stock_already_restored", order_id=order.id)
            return []

        applied = await self.restore_items(
            order.id, order.items, actor, "order cancelled"  # type: ignore[arg-type]
        )
        logger.info(
            "order_stock_restored",
            order_id=order.id,
            deltas=[d.model_dump() for d in applied],
        )
        return applied
