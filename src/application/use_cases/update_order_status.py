"""Update Order Status Use Case: lifecycle moves, with cancellation compensation."""

from dataclasses import dataclass

from src.application.dto.requests import UpdateOrderStatusRequest
from src.application.dto.responses import (
    CompensationResponse,
    OrderResponse,
    UpdateOrderStatusResponse,
)
from src.application.use_cases.restore_order_stock import OrderStockRestorer
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import CompensationSettings, get_logger
from src.core.entities.compensation import CompensationRecord
from src.core.entities.order import Order, OrderStatus
from src.core.exceptions import (
    CompensationFailure,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from src.core.interfaces.unit_of_work import UnitOfWorkFactory

logger = get_logger(__name__)


@dataclass
class UpdateOrderStatusResult:
    """Result of a status update."""

    order: Order
    previous_status: OrderStatus
    changed: bool
    compensation: CompensationRecord | None = None


class UpdateOrderStatusUseCase:
    """
    Move an order through its lifecycle.

    Cancellation is two-phase. Phase 1 commits the new status together
    with a pending compensation record. Phase 2 restores the stock in its
    own transaction, with retries. A restoration that keeps failing does
    not undo the cancellation; it leaves the record pending for
    ReconcileCompensations.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory | None = None,
        compensation_settings: CompensationSettings | None = None,
    ):
        self._uow_factory = uow_factory
        self._compensation_settings = compensation_settings

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: UpdateOrderStatusRequest) -> UpdateOrderStatusResult:
        """Execute update order status use case."""
        actor = resolve_actor(request.actor)
        target = request.status
        factory = self._get_uow_factory()

        # Phase 1: status change (and compensation marker) commit together
        async with run_in_unit_of_work(factory, "update_order_status") as uow:
            order = await uow.orders.get_order(request.order_id)
            if order is None:
                raise OrderNotFoundError(request.order_id)

            previous = order.status
            if previous is target:
                logger.info(
                    "order_status_unchanged",
                    order_id=order.id,
                    status=target.value,
                )
                compensation = None
                if target is OrderStatus.CANCELLED:
                    compensation = await uow.compensations.get_by_order(request.order_id)
                return UpdateOrderStatusResult(
                    order=order,
                    previous_status=previous,
                    changed=False,
                    compensation=compensation,
                )

            if not previous.can_transition_to(target):
                raise InvalidStatusTransitionError(
                    request.order_id, previous.value, target.value
                )

            await uow.orders.update_status(request.order_id, target)
            if target is OrderStatus.CANCELLED:
                await uow.compensations.create_pending(request.order_id)

        logger.info(
            "order_status_changed",
            order_id=request.order_id,
            previous_status=previous.value,
            status=target.value,
            actor=actor,
        )

        # Phase 2: restoration, outside the status transaction
        if target is OrderStatus.CANCELLED:
            restorer = OrderStockRestorer(factory, self._compensation_settings)
            try:
                await restorer.restore(request.order_id, actor)
            except CompensationFailure:
                # Already logged and recorded; the cancellation stands
                pass

        async with run_in_unit_of_work(
            factory, "load_order", read_only=True
        ) as uow:
            order = await uow.orders.get_order(request.order_id)
            compensation = None
            if target is OrderStatus.CANCELLED:
                compensation = await uow.compensations.get_by_order(request.order_id)

        return UpdateOrderStatusResult(
            order=order,  # type: ignore[arg-type]
            previous_status=previous,
            changed=True,
            compensation=compensation,
        )

    def to_response(self, result: UpdateOrderStatusResult) -> UpdateOrderStatusResponse:
        """Convert result to response DTO."""
        return UpdateOrderStatusResponse(
            order=OrderResponse.model_validate(result.order),
            previous_status=result.previous_status,
            changed=result.changed,
            compensation=(
                CompensationResponse.model_validate(result.compensation)
                if result.compensation
                else None
            ),
        )
