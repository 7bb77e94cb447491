"""Create Order Use Case: gated, atomic consumption of materials and stock."""

from src.application.dto.requests import CreateOrderRequest, LineItemRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.order import Order, OrderLineItem
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.fulfillment import FulfillmentService, validate_line_items

logger = get_logger(__name__)


def to_line_items(requests: list[LineItemRequest]) -> list[OrderLineItem]:
    """Build line item entities from request DTOs."""
    return [OrderLineItem(**item.model_dump()) for item in requests]


class CreateOrderUseCase:
    """
    Place an order.

    Line items are validated before any transaction opens. The
    sufficiency gate, the order insert and every stock mutation then run
    in one unit of work: either all of them commit or none do.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: CreateOrderRequest) -> Order:
        """Execute create order use case."""
        actor = resolve_actor(request.actor)
        items = to_line_items(request.line_items)

        logger.info(
            "create_order_started",
            customer_id=request.customer_id,
            items=len(items),
            actor=actor,
        )

        validate_line_items(items)

        order = Order(
            customer_id=request.customer_id,
            delivery_date=request.delivery_date,
            items=items,
        )
        async with run_in_unit_of_work(self._get_uow_factory(), "create_order") as uow:
            order = await FulfillmentService(uow).place_order(order, actor)

        logger.info(
            "create_order_complete",
            order_id=order.id,
            total_amount=order.total_amount,
        )
        return order

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to response DTO."""
        return OrderResponse.model_validate(order)
