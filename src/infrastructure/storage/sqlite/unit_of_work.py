"""
SQLite unit of work.

Holds one pooled connection for the duration of an ``async with`` block
and binds every store to it. Writable units start with ``BEGIN IMMEDIATE``,
which takes SQLite's write lock before the first read, so a
read-check-write sequence cannot interleave with another writer.
"""

import asyncio
from contextlib import AsyncExitStack
from types import TracebackType

import aiosqlite

from src.config import get_logger, get_settings
from src.core.exceptions import TransactionTimeoutError
from src.core.interfaces.unit_of_work import IUnitOfWork
from src.infrastructure.storage.sqlite.catalog_store import (
    SQLiteBillOfMaterialsStore,
    SQLiteProductStore,
    SQLiteRawMaterialStore,
)
from src.infrastructure.storage.sqlite.compensation_store import SQLiteCompensationStore
from src.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from src.infrastructure.storage.sqlite.ledger_store import SQLiteStockLedgerStore
from src.infrastructure.storage.sqlite.order_store import SQLiteOrderStore

logger = get_logger(__name__)


class SQLiteUnitOfWork(IUnitOfWork):
    """
    One SQLite transaction spanning all engine stores.

    Commits when the block exits normally; rolls back on any exception,
    cancellation included. With ``timeout`` set, a block that runs longer
    is cancelled, rolled back and reported as TransactionTimeoutError.
    """

    def __init__(
        self,
        pool: ConnectionPool | None = None,
        read_only: bool = False,
        timeout: float | None = None,
    ):
        self._pool = pool
        self.read_only = read_only
        self.timeout = timeout
        self._conn: aiosqlite.Connection | None = None
        self._stack: AsyncExitStack | None = None
        self._deadline: asyncio.Timeout | None = None

    async def __aenter__(self) -> "SQLiteUnitOfWork":
        self._stack = AsyncExitStack()
        if self.timeout:
            self._deadline = asyncio.timeout(self.timeout)
            await self._deadline.__aenter__()

        conn = None
        try:
            pool = self._pool or await get_pool()
            conn = await self._stack.enter_async_context(pool.acquire())
            if not self.read_only:
                await conn.execute("BEGIN IMMEDIATE")
        except BaseException as e:
            timed_out = await self._exit_deadline(type(e), e, e.__traceback__)
            if conn is not None:
                await conn.rollback()
            await self._stack.aclose()
            if timed_out is not None:
                raise TransactionTimeoutError(self.timeout) from timed_out  # type: ignore[arg-type]
            raise

        self._conn = conn
        self.products = SQLiteProductStore(conn)
        self.materials = SQLiteRawMaterialStore(conn)
        self.bom = SQLiteBillOfMaterialsStore(conn)
        self.orders = SQLiteOrderStore(conn)
        self.ledger = SQLiteStockLedgerStore(conn)
        self.compensations = SQLiteCompensationStore(conn)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        timed_out = await self._exit_deadline(exc_type, exc, tb)
        conn = self._conn
        assert conn is not None and self._stack is not None

        try:
            if exc_type is None and timed_out is None and not self.read_only:
                try:
                    await conn.commit()
                except BaseException:
                    await conn.rollback()
                    raise
            else:
                await conn.rollback()
                if not self.read_only:
                    logger.debug(
                        "transaction_rolled_back",
                        error_type=exc_type.__name__ if exc_type else "TimeoutError",
                    )
        finally:
            self._conn = None
            await self._stack.aclose()

        if timed_out is not None:
            logger.error("transaction_timeout", timeout=self.timeout)
            raise TransactionTimeoutError(self.timeout) from timed_out  # type: ignore[arg-type]

    async def _exit_deadline(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> TimeoutError | None:
        """Leave the timeout scope; returns the TimeoutError if it fired."""
        if self._deadline is None:
            return None
        deadline, self._deadline = self._deadline, None
        try:
            await deadline.__aexit__(exc_type, exc, tb)
        except TimeoutError as e:
            return e
        return None


def get_unit_of_work(read_only: bool = False) -> SQLiteUnitOfWork:
    """Fresh unit of work on the global pool with the configured timeout."""
    return SQLiteUnitOfWork(
        read_only=read_only,
        timeout=get_settings().storage.transaction_timeout,
    )
