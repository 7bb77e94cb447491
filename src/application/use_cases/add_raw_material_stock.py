"""Add Raw Material Stock Use Case: receive material (ADD ledger row)."""

from dataclasses import dataclass

from src.application.dto.requests import AddRawMaterialStockRequest
from src.application.dto.responses import (
    RawMaterialResponse,
    StockChangeResponse,
    StockTransactionResponse,
)
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.catalog import RawMaterial
from src.core.entities.ledger import ReferenceType, StockTransaction, TransactionType
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


@dataclass
class StockChangeResult:
    """A material after a stock change and the ledger row behind it."""

    material: RawMaterial
    transaction: StockTransaction | None = None


def stock_change_response(result: StockChangeResult) -> StockChangeResponse:
    return StockChangeResponse(
        material=RawMaterialResponse.model_validate(result.material),
        transaction=(
            StockTransactionResponse.model_validate(result.transaction)
            if result.transaction
            else None
        ),
    )


class AddRawMaterialStockUseCase:
    """Add received quantity to a raw material's stock."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: AddRawMaterialStockRequest) -> StockChangeResult:
        """Execute add raw material stock use case."""
        actor = resolve_actor(request.created_by)

        async with run_in_unit_of_work(
            self._get_uow_factory(), "add_raw_material_stock"
        ) as uow:
            transaction = await StockLedger(uow.materials, uow.ledger).append(
                material_id=request.material_id,
                transaction_type=TransactionType.ADD,
                quantity=request.quantity,
                reason=request.reason or "Stock received",
                reference_type=ReferenceType.MANUAL,
                reference_id=None,
                created_by=actor,
            )
            material = await uow.materials.get_material(request.material_id)

        logger.info(
            "add_raw_material_stock_complete",
            material_id=request.material_id,
            quantity=request.quantity,
            new_stock=transaction.new_stock,
        )
        return StockChangeResult(material=material, transaction=transaction)  # type: ignore[arg-type]

    def to_response(self, result: StockChangeResult) -> StockChangeResponse:
        """Convert result to response DTO."""
        return stock_change_response(result)
