"""SQLite implementation of the append-only stock ledger."""

import aiosqlite

from src.config import get_logger
from src.core.entities.ledger import ReferenceType, StockTransaction, TransactionType
from src.core.interfaces.ledger_store import IStockLedgerStore
from src.infrastructure.storage.sqlite.columns import (
    datetime_from_db,
    decimal_from_db,
    decimal_to_db,
)

logger = get_logger(__name__)


class SQLiteStockLedgerStore(IStockLedgerStore):
    """Stock transaction storage bound to a unit of work's connection.

    Rows are only ever inserted; nothing here updates or deletes them.
    """

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def add_transaction(self, transaction: StockTransaction) -> StockTransaction:
        cursor = await self._conn.execute(
            """
            INSERT INTO stock_transactions (
                material_id, type, quantity, previous_stock, new_stock,
                reason, reference_type, reference_id, created_by, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                transaction.material_id,
                transaction.type.value,
                decimal_to_db(transaction.quantity),
                decimal_to_db(transaction.previous_stock),
                decimal_to_db(transaction.new_stock),
                transaction.reason,
                transaction.reference_type.value,
                transaction.reference_id,
                transaction.created_by,
                transaction.created_at.isoformat(),
            ),
        )
        transaction.id = cursor.lastrowid
        return transaction

    async def list_transactions(
        self,
        material_id: int | None = None,
        transaction_type: TransactionType | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[StockTransaction]:
        """Newest first; ``id`` breaks ties between rows of the same instant."""
        type_value = transaction_type.value if transaction_type else None
        cursor = await self._conn.execute(
            """
            SELECT * FROM stock_transactions
            WHERE (? IS NULL OR material_id = ?)
              AND (? IS NULL OR type = ?)
            ORDER BY id DESC
            LIMIT ? OFFSET ?
            """,
            (material_id, material_id, type_value, type_value, limit, offset),
        )
        rows = await cursor.fetchall()
        return [self._row_to_transaction(row) for row in rows]

    async def count_transactions(
        self,
        material_id: int | None = None,
        transaction_type: TransactionType | None = None,
    ) -> int:
        type_value = transaction_type.value if transaction_type else None
        cursor = await self._conn.execute(
            """
            SELECT COUNT(*) FROM stock_transactions
            WHERE (? IS NULL OR material_id = ?)
              AND (? IS NULL OR type = ?)
            """,
            (material_id, material_id, type_value, type_value),
        )
        row = await cursor.fetchone()
        return row[0]

    async def get_chain(self, material_id: int) -> list[StockTransaction]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM stock_transactions
            WHERE material_id = ?
            ORDER BY id
            """,
            (material_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_transaction(row) for row in rows]

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> StockTransaction:
        """Convert a database row to a StockTransaction entity."""
        # Not re-validated: ledger verification must be able to load broken rows
        return StockTransaction.model_construct(
            id=row["id"],
            material_id=row["material_id"],
            type=TransactionType(row["type"]),
            quantity=decimal_from_db(row["quantity"]),
            previous_stock=decimal_from_db(row["previous_stock"]),
            new_stock=decimal_from_db(row["new_stock"]),
            reason=row["reason"],
            reference_type=ReferenceType(row["reference_type"]),
            reference_id=row["reference_id"],
            created_by=row["created_by"],
            created_at=datetime_from_db(row["created_at"]),
        )
