"""Abstract interface for order storage."""

from abc import ABC, abstractmethod

from src.core.entities.order import Order, OrderLineItem, OrderPatch, OrderStatus


class IOrderStore(ABC):
    """Interface for order and line item persistence."""

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """Create an order together with all of its line items."""

    @abstractmethod
    async def get_order(self, order_id: int) -> Order | None:
        """Get order by ID with its line items."""

    @abstractmethod
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        customer_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Order]:
        """List orders, newest first, with optional filters."""

    @abstractmethod
    async def update_status(self, order_id: int, status: OrderStatus) -> None:
        """Set the status of an order."""

    @abstractmethod
    async def mark_stock_restored(self, order_id: int) -> bool:
        """
        Flag the order's stock as restored.

        Returns False if it was already flagged.
        """

    @abstractmethod
    async def replace_items(self, order_id: int, items: list[OrderLineItem]) -> None:
        """Delete the order's line items and insert ``items``."""

    @abstractmethod
    async def apply_patch(self, order_id: int, patch: OrderPatch) -> None:
        """Apply the populated fields of ``patch``."""
