"""List Low Stock Use Case: materials at or below their reorder threshold."""

from src.application.dto.responses import RawMaterialListResponse, RawMaterialResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.core.entities.catalog import RawMaterial
from src.core.interfaces.unit_of_work import UnitOfWorkFactory


class ListLowStockUseCase:
    """List Low Stock and Out of Stock materials, lowest stock first."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self) -> list[RawMaterial]:
        """Execute list low stock use case."""
        async with run_in_unit_of_work(
            self._get_uow_factory(), "list_low_stock", read_only=True
        ) as uow:
            return await uow.materials.list_low_stock()

    def to_response(self, materials: list[RawMaterial]) -> RawMaterialListResponse:
        """Convert result to response DTO."""
        return RawMaterialListResponse(
            items=[RawMaterialResponse.model_validate(m) for m in materials],
            total=len(materials),
        )
