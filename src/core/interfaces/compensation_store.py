"""Abstract interface for compensation record storage."""

from abc import ABC, abstractmethod

from src.core.entities.compensation import CompensationRecord, PlannedDelta


class ICompensationStore(ABC):
    """Interface for durable "pending reconciliation" markers."""

    @abstractmethod
    async def create_pending(self, order_id: int) -> CompensationRecord:
        """Create a pending record for the order (or return the existing one)."""

    @abstractmethod
    async def get_by_order(self, order_id: int) -> CompensationRecord | None:
        """Get the record for an order."""

    @abstractmethod
    async def list_pending(self, limit: int = 100) -> list[CompensationRecord]:
        """List pending records, oldest first."""

    @abstractmethod
    async def record_failure(
        self,
        order_id: int,
        error: str,
        planned_deltas: list[PlannedDelta],
        attempts: int,
    ) -> None:
        """Store the latest failure of a restoration attempt."""

    @abstractmethod
    async def mark_resolved(self, order_id: int) -> None:
        """Mark the order's record as resolved."""

    @abstractmethod
    async def mark_failed(self, order_id: int, error: str) -> None:
        """Give up on the order's record; it needs manual reconciliation."""
