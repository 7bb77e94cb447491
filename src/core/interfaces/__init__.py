"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.catalog_store import (
    IBillOfMaterialsStore,
    IProductStore,
    IRawMaterialStore,
)
from src.core.interfaces.compensation_store import ICompensationStore
from src.core.interfaces.ledger_store import IStockLedgerStore
from src.core.interfaces.order_store import IOrderStore
from src.core.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory

__all__ = [
    # Catalog
    "IProductStore",
    "IRawMaterialStore",
    "IBillOfMaterialsStore",
    # Orders
    "IOrderStore",
    # Ledger
    "IStockLedgerStore",
    # Compensation
    "ICompensationStore",
    # Transactions
    "IUnitOfWork",
    "UnitOfWorkFactory",
]
