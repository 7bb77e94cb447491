"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.catalog_store import (
    SQLiteBillOfMaterialsStore,
    SQLiteProductStore,
    SQLiteRawMaterialStore,
)
from src.infrastructure.storage.sqlite.compensation_store import SQLiteCompensationStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)
from src.infrastructure.storage.sqlite.ledger_store import SQLiteStockLedgerStore
from src.infrastructure.storage.sqlite.order_store import SQLiteOrderStore
from src.infrastructure.storage.sqlite.unit_of_work import (
    SQLiteUnitOfWork,
    get_unit_of_work,
)

__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    # Unit of work
    "SQLiteUnitOfWork",
    "get_unit_of_work",
    # Store classes
    "SQLiteProductStore",
    "SQLiteRawMaterialStore",
    "SQLiteBillOfMaterialsStore",
    "SQLiteOrderStore",
    "SQLiteStockLedgerStore",
    "SQLiteCompensationStore",
]
