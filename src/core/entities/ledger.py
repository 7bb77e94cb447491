"""Stock ledger domain entities."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class TransactionType(str, Enum):
    """Types of stock transactions."""

    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    ADJUSTMENT = "ADJUSTMENT"


class ReferenceType(str, Enum):
    """What caused a stock transaction."""

    ORDER = "ORDER"
    MANUAL = "MANUAL"
    SYSTEM = "SYSTEM"
    PRODUCTION = "PRODUCTION"
    RECONCILIATION = "RECONCILIATION"


class StockTransaction(BaseModel):
    """Append-only record of a single raw-material stock change."""

    id: int | None = None
    material_id: int  # FK → raw_materials.id
    type: TransactionType
    quantity: Decimal = Field(gt=0)  # always positive
    previous_stock: Decimal
    new_stock: Decimal
    reason: str | None = None
    reference_type: ReferenceType = ReferenceType.SYSTEM
    reference_id: int | None = None
    created_by: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def signed_quantity(self) -> Decimal:
        """Signed stock change this row represents."""
        if self.type is TransactionType.ADD:
            return self.quantity
        if self.type is TransactionType.SUBTRACT:
            return -self.quantity
        return self.new_stock - self.previous_stock

    @model_validator(mode="after")
    def check_balance(self) -> "StockTransaction":
        """previous_stock + signed change must equal new_stock."""
        if self.type is TransactionType.ADJUSTMENT:
            balanced = abs(self.new_stock - self.previous_stock) == self.quantity
        else:
            balanced = self.previous_stock + self.signed_quantity == self.new_stock
        if not balanced:
            raise ValueError(
                f"{self.type.value} of {self.quantity} does not move stock "
                f"from {self.previous_stock} to {self.new_stock}"
            )
        return self


class LedgerIssue(BaseModel):
    """A single inconsistency found while verifying a material's ledger."""

    check: str
    transaction_id: int | None = None
    message: str


class LedgerVerification(BaseModel):
    """Result of replaying a material's ledger against its cached stock."""

    material_id: int
    transaction_count: int
    ledger_stock: Decimal
    current_stock: Decimal
    issues: list[LedgerIssue] = Field(default_factory=list)

    @property
    def consistent(self) -> bool:
        return not self.issues
