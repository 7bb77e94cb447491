"""
Order fulfillment service.

Validates line items, aggregates what an order consumes, runs the
sufficiency gate and applies the consumption. All reads and writes go
through the injected unit of work, so the gate and the mutations see the
same locked snapshot and commit (or roll back) together.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from src.config import get_logger
from src.core.entities.ledger import ReferenceType, StockTransaction, TransactionType
from src.core.entities.order import Order, OrderLineItem
from src.core.entities.requirement import MaterialRequirement, Shortfall, ShortfallKind
from src.core.exceptions import (
    ConcurrentStockUpdateError,
    InsufficiencyError,
    ProductNotFoundError,
    ValidationError,
)
from src.core.interfaces.unit_of_work import IUnitOfWork
from src.core.services.requirement_calculator import (
    RequirementCalculator,
    aggregate_requirements,
)
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


@dataclass
class ProductDemand:
    """Finished-goods quantity an order takes from a product's stock."""

    product_id: int
    product_name: str
    requested: int
    available: int

    @property
    def sufficient(self) -> bool:
        return self.available >= self.requested


@dataclass
class FulfillmentPlan:
    """Everything an order consumes, aggregated and ordered by ID."""

    material_requirements: list[MaterialRequirement] = field(default_factory=list)
    product_demands: list[ProductDemand] = field(default_factory=list)

    @property
    def shortfalls(self) -> list[Shortfall]:
        shortfalls = [
            Shortfall(
                kind=ShortfallKind.MATERIAL,
                entity_id=req.material_id,
                name=req.material_name,
                required=req.total_required,
                available=req.current_stock,
                unit=req.unit,
            )
            for req in self.material_requirements
            if not req.sufficient
        ]
        shortfalls.extend(
            Shortfall(
                kind=ShortfallKind.PRODUCT,
                entity_id=demand.product_id,
                name=demand.product_name,
                required=Decimal(demand.requested),
                available=Decimal(demand.available),
            )
            for demand in self.product_demands
            if not demand.sufficient
        )
        return shortfalls


def validate_line_items(items: list[OrderLineItem]) -> None:
    """
    Structural checks that need no storage access.

    Raises:
        ValidationError: on an empty list, a repeated product, or a
            custom-size item missing its dimensions or per-unit amount.
    """
    if not items:
        raise ValidationError("line_items", "at least one line item is required")

    seen: set[int] = set()
    for item in items:
        if item.product_id in seen:
            raise ValidationError(
                "line_items", "a product may appear only once per order", item.product_id
            )
        seen.add(item.product_id)

        if item.is_custom_size:
            dims = (item.length, item.width, item.height)
            if any(d is None or d <= 0 for d in dims):
                raise ValidationError(
                    "dimensions",
                    "length, width and height are required for custom size items",
                    item.product_id,
                )
            if item.custom_amount_per_unit is None:
                raise ValidationError(
                    "custom_amount_per_unit",
                    "required for custom size items and must be greater than 0",
                    item.product_id,
                )


class FulfillmentService:
    """Plans, gates and applies the stock consumption of orders."""

    def __init__(self, uow: IUnitOfWork) -> None:
        self._uow = uow
        self._calculator = RequirementCalculator(uow.bom)
        self._ledger = StockLedger(uow.materials, uow.ledger)

    async def plan(self, items: list[OrderLineItem]) -> FulfillmentPlan:
        """
        Aggregate what ``items`` consume against the current snapshot.

        Requirements of line items sharing a material are merged before
        sufficiency is judged.

        Raises:
            ProductNotFoundError: if a line item references an unknown product.
        """
        product_ids = sorted({item.product_id for item in items})
        products = await self._uow.products.get_products(product_ids)
        for product_id in product_ids:
            if product_id not in products:
                raise ProductNotFoundError(product_id)

        requirements: list[MaterialRequirement] = []
        stock_requested: dict[int, int] = {}

        for item in items:
            if item.order_from_stock:
                stock_requested[item.product_id] = (
                    stock_requested.get(item.product_id, 0) + item.quantity
                )
                continue
            requirements.extend(
                await self._calculator.for_product(
                    item.product_id, item.quantity, item.custom_amount_per_unit
                )
            )

        demands = [
            ProductDemand(
                product_id=product_id,
                product_name=products[product_id].name,
                requested=requested,
                available=products[product_id].stock_quantity,
            )
            for product_id, requested in sorted(stock_requested.items())
        ]

        return FulfillmentPlan(
            material_requirements=aggregate_requirements(requirements),
            product_demands=demands,
        )

    async def gate(self, items: list[OrderLineItem]) -> FulfillmentPlan:
        """
        Plan and enforce sufficiency.

        Raises:
            InsufficiencyError: listing every material and product shortfall.
        """
        plan = await self.plan(items)
        shortfalls = plan.shortfalls
        if shortfalls:
            logger.warning(
                "sufficiency_gate_failed",
                shortfalls=[s.describe() for s in shortfalls],
            )
            raise InsufficiencyError(shortfalls)
        return plan

    async def consume(
        self,
        order_id: int,
        plan: FulfillmentPlan,
        actor: str,
    ) -> list[StockTransaction]:
        """Apply a gated plan: subtract materials via the ledger, then product stock."""
        transactions = []
        for req in plan.material_requirements:
            if req.total_required <= 0:
                continue
            transactions.append(
                await self._ledger.append(
                    material_id=req.material_id,
                    transaction_type=TransactionType.SUBTRACT,
                    quantity=req.total_required,
                    reason=f"Order #{order_id} - Material consumption",
                    reference_type=ReferenceType.ORDER,
                    reference_id=order_id,
                    created_by=actor,
                )
            )

        for demand in plan.product_demands:
            updated = await self._uow.products.change_stock_quantity(
                demand.product_id,
                demand.available,
                demand.available - demand.requested,
            )
            if not updated:
                raise ConcurrentStockUpdateError("product", demand.product_id)
            logger.info(
                "product_stock_consumed",
                order_id=order_id,
                product_id=demand.product_id,
                quantity=demand.requested,
                remaining=demand.available - demand.requested,
            )

        return transactions

    async def place_order(self, order: Order, actor: str) -> Order:
        """Validate, gate, persist the order and consume its stock."""
        validate_line_items(order.items)
        plan = await self.gate(order.items)

        order = await self._uow.orders.create_order(order)
        await self.consume(order.id, plan, actor)  # type: ignore[arg-type]

        logger.info(
            "order_placed",
            order_id=order.id,
            customer_id=order.customer_id,
            items=len(order.items),
            materials=len(plan.material_requirements),
            stock_products=len(plan.product_demands),
        )
        return order
