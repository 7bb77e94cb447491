"""Replace Order Line Items Use Case: edit an open order's products."""

from src.application.dto.requests import ReplaceOrderLineItemsRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.create_order import to_line_items
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.order import Order
from src.core.exceptions import InvalidStatusTransitionError, OrderNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.compensation import CompensationService
from src.core.services.fulfillment import FulfillmentService, validate_line_items

logger = get_logger(__name__)


class ReplaceOrderLineItemsUseCase:
    """
    Replace every line item of an order.

    One unit of work restores the stock of the current items, swaps the
    items and gates and consumes the new ones against the restored
    stock. If the new items do not fit, the restoration rolls back with
    everything else and the order is left exactly as it was.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: ReplaceOrderLineItemsRequest) -> Order:
        """Execute replace order line items use case."""
        actor = resolve_actor(request.actor)
        items = to_line_items(request.line_items)
        validate_line_items(items)

        logger.info(
            "replace_order_items_started",
            order_id=request.order_id,
            items=len(items),
            actor=actor,
        )

        async with run_in_unit_of_work(
            self._get_uow_factory(), "replace_order_line_items"
        ) as uow:
            order = await uow.orders.get_order(request.order_id)
            if order is None:
                raise OrderNotFoundError(request.order_id)
            if order.status.is_terminal:
                raise InvalidStatusTransitionError(
                    request.order_id,
                    order.status.value,
                    order.status.value,
                    message=(
                        f"Order #{request.order_id} is {order.status.value} "
                        "and its line items can no longer be changed"
                    ),
                )

            await CompensationService(uow).restore_items(
                request.order_id, order.items, actor, "order edited"
            )
            await uow.orders.replace_items(request.order_id, items)

            fulfillment = FulfillmentService(uow)
            plan = await fulfillment.gate(items)
            await fulfillment.consume(request.order_id, plan, actor)

            order = await uow.orders.get_order(request.order_id)

        logger.info(
            "replace_order_items_complete",
            order_id=request.order_id,
            total_amount=order.total_amount,  # type: ignore[union-attr]
        )
        return order  # type: ignore[return-value]

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to response DTO."""
        return OrderResponse.model_validate(order)
