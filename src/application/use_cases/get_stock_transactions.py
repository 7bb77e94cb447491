"""Get Stock Transactions Use Case: paginated ledger query."""

from dataclasses import dataclass

from src.application.dto.requests import GetStockTransactionsRequest
from src.application.dto.responses import (
    StockTransactionListResponse,
    StockTransactionResponse,
)
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.core.entities.ledger import StockTransaction
from src.core.exceptions import MaterialNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory


@dataclass
class StockTransactionPage:
    """One page of ledger rows, newest first."""

    items: list[StockTransaction]
    total: int
    limit: int
    offset: int


class GetStockTransactionsUseCase:
    """List ledger rows for one material or across all materials."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, request: GetStockTransactionsRequest) -> StockTransactionPage:
        """Execute get stock transactions use case."""
        async with run_in_unit_of_work(
            self._get_uow_factory(), "get_stock_transactions", read_only=True
        ) as uow:
            if request.material_id is not None:
                material = await uow.materials.get_material(request.material_id)
                if material is None:
                    raise MaterialNotFoundError(request.material_id)

            items = await uow.ledger.list_transactions(
                material_id=request.material_id,
                transaction_type=request.transaction_type,
                limit=request.limit,
                offset=request.offset,
            )
            total = await uow.ledger.count_transactions(
                material_id=request.material_id,
                transaction_type=request.transaction_type,
            )

        return StockTransactionPage(
            items=items,
            total=total,
            limit=request.limit,
            offset=request.offset,
        )

    def to_response(self, page: StockTransactionPage) -> StockTransactionListResponse:
        """Convert result to response DTO."""
        return StockTransactionListResponse(
            items=[StockTransactionResponse.model_validate(tx) for tx in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )
