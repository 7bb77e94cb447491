"""Produce Product Stock Use Case: turn raw materials into finished goods."""

from dataclasses import dataclass, field

from src.application.dto.requests import ProduceProductStockRequest
from src.application.dto.responses import (
    ProduceProductStockResponse,
    ProductResponse,
    StockTransactionResponse,
)
from src.application.use_cases.transaction import (
    default_uow_factory,
    resolve_actor,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.catalog import Product
from src.core.entities.ledger import ReferenceType, StockTransaction, TransactionType
from src.core.entities.requirement import Shortfall, ShortfallKind
from src.core.exceptions import (
    ConcurrentStockUpdateError,
    InsufficiencyError,
    ProductNotFoundError,
)
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.requirement_calculator import RequirementCalculator
from src.core.services.stock_ledger import StockLedger

logger = get_logger(__name__)


@dataclass
class ProduceProductStockResult:
    """Product after production and the consumption rows it caused."""

    product: Product
    produced: int
    transactions: list[StockTransaction] = field(default_factory=list)


class ProduceProductStockUseCase:
    """
    Manufacture finished goods.

    Requirements come from the bill of materials (no per-unit override).
    Every material is gated before anything is written; the SUBTRACT rows
    and the product stock increase commit together.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: ProduceProductStockRequest) -> ProduceProductStockResult:
        """Execute produce product stock use case."""
        actor = resolve_actor(request.actor)

        async with run_in_unit_of_work(
            self._get_uow_factory(), "produce_product_stock"
        ) as uow:
            product = await uow.products.get_product(request.product_id)
            if product is None:
                raise ProductNotFoundError(request.product_id)

            requirements = await RequirementCalculator(uow.bom).for_product(
                request.product_id, request.quantity
            )
            shortfalls = [
                Shortfall(
                    kind=ShortfallKind.MATERIAL,
                    entity_id=req.material_id,
                    name=req.material_name,
                    required=req.total_required,
                    available=req.current_stock,
                    unit=req.unit,
                )
                for req in requirements
                if not req.sufficient
            ]
            if shortfalls:
                logger.warning(
                    "production_gate_failed",
                    product_id=request.product_id,
                    shortfalls=[s.describe() for s in shortfalls],
                )
                raise InsufficiencyError(shortfalls)

            ledger = StockLedger(uow.materials, uow.ledger)
            transactions = [
                await ledger.append(
                    material_id=req.material_id,
                    transaction_type=TransactionType.SUBTRACT,
                    quantity=req.total_required,
                    reason=(
                        f"Product #{request.product_id} - Production of "
                        f"{request.quantity} units"
                    ),
                    reference_type=ReferenceType.PRODUCTION,
                    reference_id=request.product_id,
                    created_by=actor,
                )
                for req in requirements
            ]

            new_quantity = product.stock_quantity + request.quantity
            updated = await uow.products.change_stock_quantity(
                request.product_id, product.stock_quantity, new_quantity
            )
            if not updated:
                raise ConcurrentStockUpdateError("product", request.product_id)
            product.stock_quantity = new_quantity

        logger.info(
            "product_stock_produced",
            product_id=request.product_id,
            quantity=request.quantity,
            stock_quantity=new_quantity,
            materials=[tx.material_id for tx in transactions],
        )
        return ProduceProductStockResult(
            product=product,
            produced=request.quantity,
            transactions=transactions,
        )

    def to_response(self, result: ProduceProductStockResult) -> ProduceProductStockResponse:
        """Convert result to response DTO."""
        return ProduceProductStockResponse(
            product=ProductResponse.model_validate(result.product),
            produced=result.produced,
            transactions=[
                StockTransactionResponse.model_validate(tx) for tx in result.transactions
            ],
        )
