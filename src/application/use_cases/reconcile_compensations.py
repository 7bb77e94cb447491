"""Reconcile Compensations Use Case: retry stock restorations left pending."""

from dataclasses import dataclass, field

from src.application.dto.requests import ReconcileCompensationsRequest
from src.application.dto.responses import ReconcileCompensationsResponse
from src.application.use_cases.restore_order_stock import OrderStockRestorer
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import CompensationSettings, get_logger, get_settings
from src.core.exceptions import CompensationFailure
from src.core.interfaces.unit_of_work import UnitOfWorkFactory

logger = get_logger(__name__)


@dataclass
class ReconcileResult:
    """Order IDs by outcome of a reconciliation pass."""

    examined: int = 0
    resolved: list[int] = field(default_factory=list)
    still_pending: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)


class ReconcileCompensationsUseCase:
    """
    Retry every pending compensation record.

    Records whose accumulated attempts reach the configured ceiling are
    marked failed and left for manual reconciliation.
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

    def _get_settings(self) -> CompensationSettings:
        if self._compensation_settings is None:
            self._compensation_settings = get_settings().compensation
        return self._compensation_settings

    async def execute(self, request: ReconcileCompensationsRequest) -> ReconcileResult:
        """Execute reconcile compensations use case."""
        actor = resolve_actor(request.actor)
        factory = self._get_uow_factory()
        settings = self._get_settings()
        restorer = OrderStockRestorer(factory, settings)

        async with run_in_unit_of_work(
            factory, "list_pending_compensations", read_only=True
        ) as uow:
            pending = await uow.compensations.list_pending(limit=request.limit)

        result = ReconcileResult(examined=len(pending))
        for record in pending:
            try:
                await restorer.restore(record.order_id, actor)
            except CompensationFailure as failure:
                async with run_in_unit_of_work(factory, "fail_compensation") as uow:
                    current = await uow.compensations.get_by_order(record.order_id)
                    attempts = current.attempts if current else record.attempts
                    if attempts >= settings.max_reconcile_attempts:
                        await uow.compensations.mark_failed(
                            record.order_id, failure.message
                        )
                        result.failed.append(record.order_id)
                    else:
                        result.still_pending.append(record.order_id)
                continue
            result.resolved.append(record.order_id)

        logger.info(
            "compensations_reconciled",
            examined=result.examined,
            resolved=result.resolved,
            still_pending=result.still_pending,
            failed=result.failed,
        )
        return result

    def to_response(self, result: ReconcileResult) -> ReconcileCompensationsResponse:
        """Convert result to response DTO."""
        return ReconcileCompensationsResponse(
            examined=result.examined,
            resolved=result.resolved,
            still_pending=result.still_pending,
            failed=result.failed,
        )
