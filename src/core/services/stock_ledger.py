"""
Stock ledger service.

Every change to a raw material's ``current_stock`` goes through
``StockLedger.append``, which updates the cached stock and appends the
matching ledger row inside the caller's transaction. The ledger records
what happened; sufficiency is the caller's job.
"""

from decimal import Decimal

from src.config import get_logger
from src.core.entities.catalog import RawMaterial
from src.core.entities.ledger import (
    LedgerIssue,
    LedgerVerification,
    ReferenceType,
    StockTransaction,
    TransactionType,
)
from src.core.exceptions import (
    ConcurrentStockUpdateError,
    MaterialNotFoundError,
    NegativeStockError,
    ValidationError,
)
from src.core.interfaces.catalog_store import IRawMaterialStore
from src.core.interfaces.ledger_store import IStockLedgerStore

logger = get_logger(__name__)


class StockLedger:
    """Applies and records raw-material stock mutations."""

    def __init__(
        self,
        material_store: IRawMaterialStore,
        ledger_store: IStockLedgerStore,
    ) -> None:
        self._material_store = material_store
        self._ledger_store = ledger_store

    async def append(
        self,
        material_id: int,
        transaction_type: TransactionType,
        quantity: Decimal | None,
        reason: str | None,
        reference_type: ReferenceType,
        reference_id: int | None,
        created_by: str,
        target_stock: Decimal | None = None,
    ) -> StockTransaction:
        """
        Apply one stock mutation and append its ledger row.

        Args:
            material_id: Material to change.
            transaction_type: ADD, SUBTRACT or ADJUSTMENT.
            quantity: Positive magnitude for ADD/SUBTRACT; signed delta for
                ADJUSTMENT when ``target_stock`` is not given.
            reason: Human-readable reason.
            reference_type: What caused the change.
            reference_id: ID of the causing entity (e.g. order ID).
            created_by: Actor responsible for the change.
            target_stock: Explicit resulting stock for ADJUSTMENT.

        Returns:
            The persisted ledger row.
        """
        material = await self._material_store.get_material(material_id)
        if material is None:
            raise MaterialNotFoundError(material_id)

        previous = material.current_stock
        delta = self._delta(transaction_type, quantity, target_stock, previous)
        new_stock = previous + delta

        if new_stock < 0:
            raise NegativeStockError(material_id, previous, delta)

        updated = await self._material_store.change_current_stock(
            material_id, previous, new_stock
        )
        if not updated:
            raise ConcurrentStockUpdateError("raw_material", material_id)

        transaction = await self._ledger_store.add_transaction(
            StockTransaction(
                material_id=material_id,
                type=transaction_type,
                quantity=abs(delta),
                previous_stock=previous,
                new_stock=new_stock,
                reason=reason,
                reference_type=reference_type,
                reference_id=reference_id,
                created_by=created_by,
            )
        )

        logger.info(
            "stock_transaction_appended",
            transaction_id=transaction.id,
            material_id=material_id,
            type=transaction_type.value,
            quantity=transaction.quantity,
            previous_stock=previous,
            new_stock=new_stock,
            reference_type=reference_type.value,
            reference_id=reference_id,
            created_by=created_by,
        )
        return transaction

    @staticmethod
    def _delta(
        transaction_type: TransactionType,
        quantity: Decimal | None,
        target_stock: Decimal | None,
        previous: Decimal,
    ) -> Decimal:
        if transaction_type is TransactionType.ADJUSTMENT:
            if target_stock is not None:
                if target_stock < 0:
                    raise ValidationError(
                        "target_stock", "must not be negative", target_stock
                    )
                delta = target_stock - previous
            elif quantity is not None:
                delta = quantity
            else:
                raise ValidationError(
                    "quantity", "adjustment needs a delta or a target stock"
                )
            if delta == 0:
                raise ValidationError("quantity", "adjustment must change stock", delta)
            return delta

        if quantity is None or quantity <= 0:
            raise ValidationError("quantity", "must be greater than 0", quantity)
        if transaction_type is TransactionType.ADD:
            return quantity
        return -quantity


def verify_ledger(
    material: RawMaterial,
    chain: list[StockTransaction],
) -> LedgerVerification:
    """
    Replay a material's ledger and compare it with the cached stock.

    ``chain`` must be in append order. Reports rows whose numbers do not
    balance, rows whose previous_stock does not continue the prior row,
    negative stock, and drift between the ledger total and current_stock.
    """
    issues: list[LedgerIssue] = []
    running = Decimal("0")

    for tx in chain:
        if tx.previous_stock != running:
            issues.append(
                LedgerIssue(
                    check="chain_break",
                    transaction_id=tx.id,
                    message=f"previous_stock {tx.previous_stock} != running total {running}",
                )
            )
        if tx.previous_stock + tx.signed_quantity != tx.new_stock:
            issues.append(
                LedgerIssue(
                    check="unbalanced_row",
                    transaction_id=tx.id,
                    message=(
                        f"{tx.previous_stock} {tx.type.value} {tx.quantity} "
                        f"!= {tx.new_stock}"
                    ),
                )
            )
        running += tx.signed_quantity
        if running < 0:
            issues.append(
                LedgerIssue(
                    check="negative_stock",
                    transaction_id=tx.id,
                    message=f"stock fell to {running}",
                )
            )

    if running != material.current_stock:
        issues.append(
            LedgerIssue(
                check="stock_drift",
                message=f"ledger total {running} != current_stock {material.current_stock}",
            )
        )

    return LedgerVerification(
        material_id=material.id,  # type: ignore[arg-type]
        transaction_count=len(chain),
        ledger_stock=running,
        current_stock=material.current_stock,
        issues=issues,
    )
