"""Update Order Details Use Case: partial edit of non-stock order fields."""

from src.application.dto.requests import UpdateOrderDetailsRequest
from src.application.dto.responses import OrderResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.core.entities.order import Order, OrderPatch
from src.core.exceptions import InvalidStatusTransitionError, OrderNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory


class UpdateOrderDetailsUseCase:
    """
    Apply an OrderPatch to an open order.

    Prices and quantities are not part of the patch. Delivered and
    cancelled orders are locked.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: UpdateOrderDetailsRequest) -> Order:
        """Execute update order details use case."""
        patch = OrderPatch(delivery_date=request.delivery_date)

        async with run_in_unit_of_work(
            self._get_uow_factory(), "update_order_details"
        ) as uow:
            order = await uow.orders.get_order(request.order_id)
            if order is None:
                raise OrderNotFoundError(request.order_id)
            if patch.is_empty:
                return order
            if order.status.is_terminal:
                raise InvalidStatusTransitionError(
                    request.order_id,
                    order.status.value,
                    order.status.value,
                    message=(
                        f"Order #{request.order_id} is {order.status.value} "
                        "and its details can no longer be changed"
                    ),
                )

            await uow.orders.apply_patch(request.order_id, patch)
            order = await uow.orders.get_order(request.order_id)

        return order  # type: ignore[return-value]

    def to_response(self, order: Order) -> OrderResponse:
        """Convert result to response DTO."""
        return OrderResponse.model_validate(order)
