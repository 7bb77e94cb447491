"""List Raw Materials Use Case: page through the material catalog."""

from src.application.dto.requests import ListRawMaterialsRequest
from src.application.dto.responses import RawMaterialListResponse, RawMaterialResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.core.entities.catalog import RawMaterial
from src.core.interfaces.unit_of_work import UnitOfWorkFactory


class ListRawMaterialsUseCase:
    """List raw materials ordered by name, optionally within one category."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: ListRawMaterialsRequest) -> list[RawMaterial]:
        """Execute list raw materials use case."""
        async with run_in_unit_of_work(
            self._get_uow_factory(), "list_raw_materials", read_only=True
        ) as uow:
            return await uow.materials.list_materials(
                limit=request.limit,
                offset=request.offset,
                category=request.category,
            )

    def to_response(self, materials: list[RawMaterial]) -> RawMaterialListResponse:
        """Convert result to response DTO."""
        return RawMaterialListResponse(
            items=[RawMaterialResponse.model_validate(m) for m in materials],
            total=len(materials),
        )
