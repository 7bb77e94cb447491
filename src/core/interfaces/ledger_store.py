"""Abstract interface for stock ledger storage."""

from abc import ABC, abstractmethod

from src.core.entities.ledger import StockTransaction, TransactionType


class IStockLedgerStore(ABC):
    """Interface for the append-only stock transaction log."""

    @abstractmethod
    async def add_transaction(self, transaction: StockTransaction) -> StockTransaction:
        """Append a stock transaction."""

    @abstractmethod
    async def list_transactions(
        self,
        material_id: int | None = None,
        transaction_type: TransactionType | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[StockTransaction]:
        """List transactions, newest first, with optional filters."""

    @abstractmethod
    async def count_transactions(
        self,
        material_id: int | None = None,
        transaction_type: TransactionType | None = None,
    ) -> int:
        """Count transactions matching the filters."""

    @abstractmethod
    async def get_chain(self, material_id: int) -> list[StockTransaction]:
        """All transactions of a material in the order they were appended."""
