"""Create Raw Material Use Case: register a material with its opening stock."""

from src.application.dto.requests import CreateRawMaterialRequest
from src.application.dto.responses import RawMaterialResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.catalog import RawMaterial
from src.core.entities.ledger import ReferenceType, TransactionType
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


class CreateRawMaterialUseCase:
    """
    Create a raw material.

    The material row starts at zero; a positive opening stock is then
    booked as an ADD ledger row, so the ledger alone reproduces the
    stock from the very first unit.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: CreateRawMaterialRequest) -> RawMaterial:
        """Execute create raw material use case."""
        actor = resolve_actor(request.actor)

        async with run_in_unit_of_work(
            self._get_uow_factory(), "create_raw_material"
        ) as uow:
            material = await uow.materials.create_material(
                RawMaterial(
                    name=request.name,
                    description=request.description,
                    category=request.category,
                    unit=request.unit,
                    min_stock=request.min_stock,
                )
            )

            if request.current_stock > 0:
                await StockLedger(uow.materials, uow.ledger).append(
                    material_id=material.id,  # type: ignore[arg-type]
                    transaction_type=TransactionType.ADD,
                    quantity=request.current_stock,
                    reason="Initial stock setup",
                    reference_type=ReferenceType.SYSTEM,
                    reference_id=None,
                    created_by=actor,
                )
                material = await uow.materials.get_material(material.id)  # type: ignore[arg-type, assignment]

        logger.info(
            "create_raw_material_complete",
            material_id=material.id,  # type: ignore[union-attr]
            opening_stock=request.current_stock,
        )
        return material  # type: ignore[return-value]

    def to_response(self, material: RawMaterial) -> RawMaterialResponse:
        """Convert result to response DTO."""
        return RawMaterialResponse.model_validate(material)
