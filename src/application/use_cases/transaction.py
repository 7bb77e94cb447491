"""Unit-of-work helpers shared by the use cases."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.config import get_logger, get_settings
from src.core.exceptions import FulfillmentError, TransactionFailure
from src.core.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory

logger = get_logger(__name__)


def default_uow_factory() -> UnitOfWorkFactory:
    """The shared factory from the service layer, imported lazily."""
    from src.application.services import get_uow_factory

    return get_uow_factory()


def resolve_actor(actor: str | None) -> str:
    """Caller-supplied actor, or the configured system actor."""
    return actor or get_settings().ledger.system_actor


@asynccontextmanager
async def run_in_unit_of_work(
    factory: UnitOfWorkFactory,
    operation: str,
    read_only: bool = False,
) -> AsyncIterator[IUnitOfWork]:
    """
    Run a block inside one unit of work.

    Domain errors pass through unchanged. Anything else (driver errors,
    constraint violations) has already rolled the transaction back; it is
    logged in full and replaced by a generic TransactionFailure.
    """
    try:
        async with factory(read_only=read_only) as uow:
            yield uow
    except FulfillmentError:
        raise
    except Exception as e:
        logger.error(
            "transaction_failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise TransactionFailure(operation) from e
