"""Response DTOs for the engine's use cases.

Pydantic v2 models built from domain entities via ``model_validate``.
These are the ONLY contracts between use cases and callers.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.catalog import MaterialStatus
from src.core.entities.compensation import CompensationStatus
from src.core.entities.ledger import ReferenceType, TransactionType
from src.core.entities.order import OrderStatus
from src.core.entities.requirement import ShortfallKind

# --- Materials check ---


class MaterialRequirementResponse(BaseModel):
    """Requirement of one raw material."""

    model_config = ConfigDict(from_attributes=True)

    material_id: int
    material_name: str
    current_stock: Decimal
    unit: str
    amount_per_unit: Decimal
    total_required: Decimal
    sufficient: bool


class CheckMaterialsResponse(BaseModel):
    """Materials a product quantity would consume."""

    product_id: int
    quantity: int
    requirements: list[MaterialRequirementResponse] = Field(default_factory=list)
    insufficient: list[MaterialRequirementResponse] = Field(default_factory=list)
    has_insufficient: bool = False


class ShortfallResponse(BaseModel):
    """One material or product an operation could not cover."""

    model_config = ConfigDict(from_attributes=True)

    kind: ShortfallKind
    entity_id: int
    name: str
    required: Decimal
    available: Decimal
    shortfall: Decimal
    unit: str | None = None


# --- Catalog ---


class ProductResponse(BaseModel):
    """Product response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    base_price: Decimal
    stock_quantity: int
    created_at: datetime
    updated_at: datetime


class RawMaterialResponse(BaseModel):
    """Raw material response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category: str
    unit: str
    current_stock: Decimal
    min_stock: Decimal
    status: MaterialStatus
    created_at: datetime
    updated_at: datetime


class RawMaterialListResponse(BaseModel):
    """List of raw materials."""

    items: list[RawMaterialResponse]
    total: int


# --- Ledger ---


class StockTransactionResponse(BaseModel):
    """Stock ledger row response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    material_id: int
    type: TransactionType
    quantity: Decimal
    previous_stock: Decimal
    new_stock: Decimal
    reason: str | None = None
    reference_type: ReferenceType
    reference_id: int | None = None
    created_by: str
    created_at: datetime


class StockChangeResponse(BaseModel):
    """Raw material after a stock change, with the ledger row it produced."""

    material: RawMaterialResponse
    transaction: StockTransactionResponse | None = None  # None for a no-op


class StockTransactionListResponse(BaseModel):
    """Paginated ledger query result."""

    items: list[StockTransactionResponse]
    total: int
    limit: int
    offset: int


class LedgerIssueResponse(BaseModel):
    """One inconsistency found in a material's ledger."""

    model_config = ConfigDict(from_attributes=True)

    check: str
    transaction_id: int | None = None
    message: str


class LedgerVerificationResponse(BaseModel):
    """Result of replaying a material's ledger."""

    model_config = ConfigDict(from_attributes=True)

    material_id: int
    transaction_count: int
    ledger_stock: Decimal
    current_stock: Decimal
    consistent: bool
    issues: list[LedgerIssueResponse] = Field(default_factory=list)


# --- Products ---


class ProduceProductStockResponse(BaseModel):
    """Product after production, with the material consumption rows."""

    product: ProductResponse
    produced: int
    transactions: list[StockTransactionResponse] = Field(default_factory=list)


# --- Orders ---


class OrderLineItemResponse(BaseModel):
    """Line item in order response."""

    model_config = ConfigDict(from_attributes=True)

    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    custom_amount_per_unit: Decimal | None = None
    is_custom_size: bool = False
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    order_from_stock: bool = False


class OrderResponse(BaseModel):
    """Order response DTO."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    delivery_date: date
    status: OrderStatus
    stock_restored: bool
    items: list[OrderLineItemResponse] = Field(default_factory=list)
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime


class PlannedDeltaResponse(BaseModel):
    """A stock change a restoration applied or attempted."""

    model_config = ConfigDict(from_attributes=True)

    material_id: int | None = None
    product_id: int | None = None
    delta: Decimal


class CompensationResponse(BaseModel):
    """State of a cancelled order's stock restoration."""

    model_config = ConfigDict(from_attributes=True)

    order_id: int
    status: CompensationStatus
    attempts: int
    last_error: str | None = None
    planned_deltas: list[PlannedDeltaResponse] = Field(default_factory=list)
    resolved_at: datetime | None = None


class UpdateOrderStatusResponse(BaseModel):
    """Order after a status change."""

    order: OrderResponse
    previous_status: OrderStatus
    changed: bool
    compensation: CompensationResponse | None = None


class ReconcileCompensationsResponse(BaseModel):
    """Outcome of a reconciliation pass."""

    examined: int
    resolved: list[int] = Field(default_factory=list)  # order IDs
    still_pending: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)
