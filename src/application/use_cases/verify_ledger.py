"""Verify Ledger Use Case: replay a material's ledger against its stock."""

from src.application.dto.responses import LedgerVerificationResponse
from src.application.use_cases.transaction import (
    default_uow_factory,
    run_in_unit_of_work,
)
from src.config import get_logger
from src.core.entities.ledger import LedgerVerification
from src.core.exceptions import MaterialNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.services.stock_ledger import verify_ledger

logger = get_logger(__name__)


class VerifyLedgerUseCase:
    """Check that a material's ledger chain balances and matches current_stock."""

    def __init__(self, uow_factory: UnitOfWorkFactory | None = None):
        self._uow_factory = uow_factory

    def _get_uow_factory(self) -> UnitOfWorkFactory:
        if self._uow_factory is None:
            self._uow_factory = default_uow_factory()
        return self._uow_factory

    async def execute(self, material_id: int) -> LedgerVerification:
        """Execute verify ledger use case."""
        async with run_in_unit_of_work(
            self._get_uow_factory(), "verify_ledger", read_only=True
        ) as uow:
            material = await uow.materials.get_material(material_id)
            if material is None:
                raise MaterialNotFoundError(material_id)
            chain = await uow.ledger.get_chain(material_id)

        verification = verify_ledger(material, chain)
        if verification.consistent:
            logger.info(
                "ledger_verified",
                material_id=material_id,
                transactions=verification.transaction_count,
            )
        else:
            logger.warning(
                "ledger_inconsistent",
                material_id=material_id,
                issues=[issue.model_dump() for issue in verification.issues],
            )
        return verification

    def to_response(self, verification: LedgerVerification) -> LedgerVerificationResponse:
        """Convert result to response DTO."""
        return LedgerVerificationResponse.model_validate(verification)
