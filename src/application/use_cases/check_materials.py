"""Check Materials Use Case: read-only raw material requirement preview."""

from dataclasses import dataclass, field

from src.application.dto.requests import CheckMaterialsRequest
from src.application.dto.responses import (
    CheckMaterialsResponse,
    MaterialRequirementResponse,
)
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.requirement import MaterialRequirement
from src.core.exceptions import ProductNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.requirement_calculator import RequirementCalculator

logger = get_logger(__name__)


@dataclass
class CheckMaterialsResult:
    """Requirements of a product quantity."""

    product_id: int
    quantity: int
    requirements: list[MaterialRequirement] = field(default_factory=list)

    @property
    def insufficient(self) -> list[MaterialRequirement]:
        return [req for req in self.requirements if not req.sufficient]


class CheckMaterialsUseCase:
    """Compute what a product quantity would consume, without writing anything."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: CheckMaterialsRequest) -> CheckMaterialsResult:
        """Execute check materials use case."""
        async with run_in_unit_of_work(
            self._get_uow_factory(), "check_materials", read_only=True
        ) as uow:
            product = await uow.products.get_product(request.product_id)
            if product is None:
                raise ProductNotFoundError(request.product_id)

            requirements = await RequirementCalculator(uow.bom).for_product(
                request.product_id,
                request.quantity,
                request.custom_amount_per_unit,
            )

        result = CheckMaterialsResult(
            product_id=request.product_id,
            quantity=request.quantity,
            requirements=requirements,
        )
        logger.info(
            "materials_checked",
            product_id=request.product_id,
            quantity=request.quantity,
            materials=len(requirements),
            insufficient=[req.material_id for req in result.insufficient],
        )
        return result

    def to_response(self, result: CheckMaterialsResult) -> CheckMaterialsResponse:
        """Convert result to response DTO."""
        insufficient = result.insufficient
        return CheckMaterialsResponse(
            product_id=result.product_id,
            quantity=result.quantity,
            requirements=[
                MaterialRequirementResponse.model_validate(req)
                for req in result.requirements
            ],
            insufficient=[
                MaterialRequirementResponse.model_validate(req) for req in insufficient
            ],
            has_insufficient=bool(insufficient),
        )
