"""Adjust Raw Material Stock Use Case: stocktake correction (ADJUSTMENT row)."""

from src.application.dto.requests import AdjustRawMaterialStockRequest
from src.application.dto.responses import StockChangeResponse
from src.application.use_cases.add_raw_material_stock import (
    StockChangeResult,
    stock_change_response,
)
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.ledger import ReferenceType, TransactionType
from src.core.exceptions import MaterialNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


class AdjustRawMaterialStockUseCase:
    """Set a raw material's stock to a counted value through the ledger."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: AdjustRawMaterialStockRequest) -> StockChangeResult:
        """Execute adjust raw material stock use case."""
        actor = resolve_actor(request.actor)

        async with run_in_unit_of_work(
            self._get_uow_factory(), "adjust_raw_material_stock"
        ) as uow:
            material = await uow.materials.get_material(request.material_id)
            if material is None:
                raise MaterialNotFoundError(request.material_id)

            if material.current_stock == request.target_stock:
                logger.info(
                    "adjust_raw_material_stock_noop",
                    material_id=request.material_id,
                    stock=material.current_stock,
                )
                return StockChangeResult(material=material)

            transaction = await StockLedger(uow.materials, uow.ledger).append(
                material_id=request.material_id,
                transaction_type=TransactionType.ADJUSTMENT,
                quantity=None,
                reason=request.reason or "Stock count adjustment",
                reference_type=ReferenceType.MANUAL,
                reference_id=None,
                created_by=actor,
                target_stock=request.target_stock,
            )
            material = await uow.materials.get_material(request.material_id)

        logger.info(
            "adjust_raw_material_stock_complete",
            material_id=request.material_id,
            previous_stock=transaction.previous_stock,
            new_stock=transaction.new_stock,
        )
        return StockChangeResult(material=material, transaction=transaction)  # type: ignore[arg-type]

    def to_response(self, result: StockChangeResult) -> StockChangeResponse:
        """Convert result to response DTO."""
        return stock_change_response(result)
