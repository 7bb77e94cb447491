"""Request DTOs for the engine's use cases.

Pydantic v2 models validating caller input.
These are the ONLY contracts between callers and use cases.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.ledger import TransactionType
from src.core.entities.order import OrderStatus

# --- Materials check ---


class CheckMaterialsRequest(BaseModel):
    """Request to preview the raw materials a product quantity consumes."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Units to produce")
    custom_amount_per_unit: Decimal | None = Field(
        default=None,
        gt=0,
        description="Per-unit override, honoured for single-material products only",
    )


# --- Orders ---


class LineItemRequest(BaseModel):
    """One product within an order request."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Units ordered")
    unit_price: Decimal = Field(..., gt=0, description="Agreed price per unit")
    custom_amount_per_unit: Decimal | None = Field(
        default=None,
        gt=0,
        description="Material per unit for custom-size items",
    )
    is_custom_size: bool = Field(default=False, description="Made to custom dimensions")
    length: Decimal | None = Field(default=None, description="Custom length")
    width: Decimal | None = Field(default=None, description="Custom width")
    height: Decimal | None = Field(default=None, description="Custom height")
    order_from_stock: bool = Field(
        default=False,
        description="Take finished goods from stock instead of consuming materials",
    )


class CreateOrderRequest(BaseModel):
    """Request to place an order and consume its stock."""

    customer_id: int = Field(..., description="Customer ID")
    delivery_date: date = Field(..., description="Promised delivery date")
    line_items: list[LineItemRequest] = Field(
        default_factory=list, description="Products ordered"
    )
    actor: str | None = Field(
        default=None, description="Recorded on ledger rows (defaults to system actor)"
    )


class UpdateOrderStatusRequest(BaseModel):
    """Request to move an order through its lifecycle."""

    order_id: int = Field(..., description="Order ID")
    status: OrderStatus = Field(..., description="Target status")
    actor: str | None = Field(default=None, description="Recorded on ledger rows")


class ReplaceOrderLineItemsRequest(BaseModel):
    """Request to replace every line item of an open order."""

    order_id: int = Field(..., description="Order ID")
    line_items: list[LineItemRequest] = Field(
        default_factory=list, description="New products ordered"
    )
    actor: str | None = Field(default=None, description="Recorded on ledger rows")


class UpdateOrderDetailsRequest(BaseModel):
    """Partial update of an order's editable details."""

    order_id: int = Field(..., description="Order ID")
    delivery_date: date | None = Field(default=None, description="New delivery date")


# --- Raw materials ---


class CreateRawMaterialRequest(BaseModel):
    """Request to register a raw material."""

    name: str = Field(..., min_length=1, description="Material name")
    category: str = Field(..., min_length=1, description="Material category")
    unit: str = Field(..., min_length=1, description="Unit of measure")
    description: str | None = Field(default=None, description="Free-text description")
    current_stock: Decimal = Field(default=Decimal("0"), ge=0, description="Opening stock")
    min_stock: Decimal = Field(default=Decimal("0"), ge=0, description="Reorder threshold")
    actor: str | None = Field(default=None, description="Recorded on the opening ledger row")


class AddRawMaterialStockRequest(BaseModel):
    """Request to receive raw material stock."""

    material_id: int = Field(..., description="Raw material ID")
    quantity: Decimal = Field(..., gt=0, description="Quantity received")
    reason: str | None = Field(default=None, description="Why stock was added")
    created_by: str | None = Field(default=None, description="Recorded on the ledger row")


class AdjustRawMaterialStockRequest(BaseModel):
    """Request to correct raw material stock to a counted value."""

    material_id: int = Field(..., description="Raw material ID")
    target_stock: Decimal = Field(..., ge=0, description="Counted stock")
    reason: str | None = Field(default=None, description="Why stock was adjusted")
    actor: str | None = Field(default=None, description="Recorded on the ledger row")


class UpdateRawMaterialRequest(BaseModel):
    """Partial update of a raw material's descriptive fields."""

    material_id: int = Field(..., description="Raw material ID")
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1)
    unit: str | None = Field(default=None, min_length=1)
    min_stock: Decimal | None = Field(default=None, ge=0)


class ListRawMaterialsRequest(BaseModel):
    """Page through raw materials by name."""

    category: str | None = Field(default=None, description="Filter by category")
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


# --- Products ---


class ProduceProductStockRequest(BaseModel):
    """Request to manufacture finished goods from raw materials."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Units produced")
    actor: str | None = Field(default=None, description="Recorded on ledger rows")


# --- Ledger ---


class GetStockTransactionsRequest(BaseModel):
    """Query of the stock ledger."""

    material_id: int | None = Field(default=None, description="Filter by raw material")
    transaction_type: TransactionType | None = Field(default=None, description="Filter by type")
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class ReconcileCompensationsRequest(BaseModel):
    """Request to retry pending stock restorations."""

    limit: int = Field(default=100, ge=1, le=1000)
    actor: str | None = Field(default=None, description="Recorded on ledger rows")
