"""Update Raw Material Use Case: partial edit of descriptive fields."""

from src.application.dto.requests import UpdateRawMaterialRequest
from src.application.dto.responses import RawMaterialResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.core.entities.catalog import RawMaterial, RawMaterialPatch
from src.core.exceptions import MaterialNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory


class UpdateRawMaterialUseCase:
    """Apply a RawMaterialPatch. Stock is changed only through the ledger."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: UpdateRawMaterialRequest) -> RawMaterial:
        """Execute update raw material use case."""
        patch = RawMaterialPatch(**request.model_dump(exclude={"material_id"}))

        async with run_in_unit_of_work(
            self._get_uow_factory(), "update_raw_material"
        ) as uow:
            if patch.is_empty:
                material = await uow.materials.get_material(request.material_id)
            else:
                material = await uow.materials.update_material(request.material_id, patch)
            if material is None:
                raise MaterialNotFoundError(request.material_id)

        return material

    def to_response(self, material: RawMaterial) -> RawMaterialResponse:
        """Convert result to response DTO."""
        return RawMaterialResponse.model_validate(material)
