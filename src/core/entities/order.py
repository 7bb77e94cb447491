"""Order domain entities and the order status state machine."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    """Lifecycle of an order."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Whether moving from this status to ``target`` is allowed.

        Forward moves along Pending -> In Progress -> Completed -> Delivered
        may skip steps; any non-terminal status may be cancelled. Staying on
        the same status is handled by callers as a no-op.
        """
        if self.is_terminal:
            return False
        if target is OrderStatus.CANCELLED:
            return True
        return _FORWARD.index(target) > _FORWARD.index(self)


_FORWARD = [
    OrderStatus.PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.COMPLETED,
    OrderStatus.DELIVERED,
]


class OrderLineItem(BaseModel):
    """One product within an order.

    ``unit_price`` is the price snapshot taken when the order was placed.
    Line items are replaced wholesale on edit, never partially mutated.
    """

    order_id: int | None = None
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(gt=0)
    custom_amount_per_unit: Decimal | None = Field(default=None, gt=0)
    is_custom_size: bool = False
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    order_from_stock: bool = False

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """A customer order with its line items."""

    id: int | None = None
    customer_id: int
    delivery_date: date
    status: OrderStatus = OrderStatus.PENDING
    stock_restored: bool = False
    items: list[OrderLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_amount(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))


class OrderPatch(BaseModel):
    """Partial update of an order's editable details."""

    delivery_date: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.delivery_date is None
