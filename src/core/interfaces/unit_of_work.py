"""
Abstract unit of work.

A unit of work bundles the stores that take part in one database
transaction. Everything done through its stores between entering and
leaving the context commits together or not at all.

Usage:
    async with uow_factory() as uow:
        order = await uow.orders.get_order(order_id)
        ...
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType

from src.core.interfaces.catalog_store import (
    IBillOfMaterialsStore,
    IProductStore,
    IRawMaterialStore,
)
from src.core.interfaces.compensation_store import ICompensationStore
from src.core.interfaces.ledger_store import IStockLedgerStore
from src.core.interfaces.order_store import IOrderStore


class IUnitOfWork(ABC):
    """Transactional scope over all engine stores."""

    products: IProductStore
    materials: IRawMaterialStore
    bom: IBillOfMaterialsStore
    orders: IOrderStore
    ledger: IStockLedgerStore
    compensations: ICompensationStore

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        """Begin the transaction and take the write lock."""

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Commit on success, roll back on any exception."""


# Factory producing a fresh unit of work per operation
UnitOfWorkFactory = Callable[..., IUnitOfWork]
