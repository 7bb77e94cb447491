"""
Cancelled-order stock restoration with retries.

Runs after the cancellation itself has committed. Each attempt is its
own unit of work that restores the stock, flags the order as restored
and resolves its compensation record. If every attempt fails, the
record stays pending with the failure details for reconciliation.
"""

from dataclasses import dataclass, field
from typing import Any

from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.application.use_cases.transaction import run_in_unit_of_work
from src.config import CompensationSettings, get_logger, get_settings
from src.core.entities.compensation import PlannedDelta
from src.core.exceptions import (
    CompensationFailure,
    FulfillmentError,
    OrderNotFoundError,
    StorageError,
)
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.compensation import CompensationService

logger = get_logger(__name__)


@dataclass
class RestorationProgress:
    """What the latest restoration attempt planned, and how many ran."""

    attempts: int = 0
    planned: list[PlannedDelta] = field(default_factory=list)


class OrderStockRestorer:
    """Restores a cancelled order's stock, retrying storage failures."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        settings: CompensationSettings | None = None,
    ):
        self._uow_factory = uow_factory
        self._settings = settings

    def _get_settings(self) -> CompensationSettings:
        if self._settings is None:
            self._settings = get_settings().compensation
        return self._settings

    def _get_retry_decorator(self) -> Any:
        """Get tenacity retry decorator with current settings."""
        settings = self._get_settings()
        return retry(
            stop=stop_after_attempt(settings.max_retries),
            wait=wait_exponential(
                multiplier=settings.retry_delay,
                min=settings.retry_delay,
                max=settings.retry_delay * (settings.retry_multiplier**3),
                exp_base=settings.retry_multiplier,
            ),
            retry=retry_if_exception_type(StorageError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        """Log retry attempts."""
        logger.warning(
            "compensation_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    async def restore(self, order_id: int, actor: str) -> list[PlannedDelta]:
        """
        Restore the order's stock and resolve its compensation record.

        Returns the deltas applied (empty if the stock had already been
        restored).

        Raises:
            CompensationFailure: after the final attempt failed; the
                failure has been logged and recorded.
        """
        progress = RestorationProgress()
        try:
            return await self._get_retry_decorator()(self._restore_once)(
                order_id, actor, progress
            )
        except FulfillmentError as e:
            failure = CompensationFailure(
                order_id,
                e.message,
                [d.model_dump(mode="json") for d in progress.planned],
            )
            logger.error(
                "compensation_failed",
                order_id=order_id,
                material_ids=[d.material_id for d in progress.planned if d.material_id],
                product_ids=[d.product_id for d in progress.planned if d.product_id],
                deltas=failure.details["deltas"],
                attempts=progress.attempts,
                error=e.message,
                error_code=e.code,
            )
            await self._record_failure(order_id, e.message, progress)
            raise failure from e

    async def _restore_once(
        self,
        order_id: int,
        actor: str,
        progress: RestorationProgress,
    ) -> list[PlannedDelta]:
        progress.attempts += 1
        async with run_in_unit_of_work(self._uow_factory, "restore_order_stock") as uow:
            order = await uow.orders.get_order(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            service = CompensationService(uow)
            progress.planned = await service.plan(order.items)
            applied = await service.restore_order(order, actor)
            await uow.compensations.mark_resolved(order_id)

        logger.info(
            "compensation_resolved",
            order_id=order_id,
            attempts=progress.attempts,
            applied=len(applied),
        )
        return applied

    async def _record_failure(
        self,
        order_id: int,
        error: str,
        progress: RestorationProgress,
    ) -> None:
        try:
            async with run_in_unit_of_work(
                self._uow_factory, "record_compensation_failure"
            ) as uow:
                await uow.compensations.record_failure(
                    order_id, error, progress.planned, progress.attempts
                )
        except FulfillmentError as e:
            # The pending record from the cancellation still exists
            logger.error(
                "compensation_failure_not_recorded",
                order_id=order_id,
                error=e.message,
            )
