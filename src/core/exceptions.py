"""
Domain exceptions for the fulfillment engine.

Provides specific exception types for different error scenarios.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.core.entities.requirement import Shortfall


class FulfillmentError(Exception):
    """Base exception for all fulfillment engine errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for caller-facing responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(FulfillmentError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidStatusTransitionError(FulfillmentError):
    """Order status cannot move from its current value to the requested one."""

    def __init__(
        self,
        order_id: int,
        current: str,
        requested: str,
        message: str | None = None,
    ):
        super().__init__(
            message or f"Order #{order_id} cannot move from '{current}' to '{requested}'",
            code="INVALID_STATUS_TRANSITION",
            details={
                "order_id": order_id,
                "current_status": current,
                "requested_status": requested,
            },
        )


# Sufficiency Exceptions
class InsufficiencyError(FulfillmentError):
    """Sufficiency gate failed for one or more materials or products."""

    def __init__(self, shortfalls: list["Shortfall"]):
        names = ", ".join(s.name for s in shortfalls)
        super().__init__(
            f"Insufficient stock for: {names}",
            code="INSUFFICIENT_STOCK",
            details={
                "shortfalls": [s.model_dump(mode="json") for s in shortfalls],
            },
        )
        self.shortfalls = shortfalls


# Lookup Exceptions
class NotFoundError(FulfillmentError):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: Any, code: str):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code,
            details={f"{entity.lower().replace(' ', '_')}_id": entity_id},
        )


class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: int):
        super().__init__("Product", product_id, "PRODUCT_NOT_FOUND")


class MaterialNotFoundError(NotFoundError):
    """Raw material not found."""

    def __init__(self, material_id: int):
        super().__init__("Raw material", material_id, "MATERIAL_NOT_FOUND")


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: int):
        super().__init__("Order", order_id, "ORDER_NOT_FOUND")


# Storage Exceptions
class StorageError(FulfillmentError):
    """Base exception for storage operations."""

    pass


class TransactionFailure(StorageError):
    """A unit of work could not be committed and was rolled back.

    The message is deliberately generic; the underlying cause is logged
    where the failure is caught.
    """

    def __init__(self, operation: str):
        super().__init__(
            f"Failed to {operation.replace('_', ' ')}",
            code="TRANSACTION_FAILED",
            details={"operation": operation},
        )


class TransactionTimeoutError(TransactionFailure):
    """A unit of work exceeded the configured transaction timeout."""

    def __init__(self, timeout: float):
        StorageError.__init__(
            self,
            f"Transaction timed out after {timeout} seconds",
            code="TRANSACTION_TIMEOUT",
            details={"timeout": timeout},
        )


class ConcurrentStockUpdateError(StorageError):
    """Stock changed between the ledger's read and its write."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"Concurrent stock update detected for {entity} {entity_id}",
            code="CONCURRENT_STOCK_UPDATE",
            details={"entity": entity, "entity_id": entity_id},
        )


class NegativeStockError(StorageError):
    """A ledger write would leave stock below zero."""

    def __init__(self, material_id: int, previous: Decimal, delta: Decimal):
        super().__init__(
            f"Stock for material {material_id} would become negative",
            code="NEGATIVE_STOCK",
            details={
                "material_id": material_id,
                "previous_stock": str(previous),
                "delta": str(delta),
            },
        )


# Compensation Exceptions
class CompensationFailure(FulfillmentError):
    """Stock restoration for an order could not complete."""

    def __init__(self, order_id: int, reason: str, deltas: list[dict] | None = None):
        super().__init__(
            f"Stock restoration failed for order #{order_id}: {reason}",
            code="COMPENSATION_FAILED",
            details={
                "order_id": order_id,
                "reason": reason,
                "deltas": deltas or [],
            },
        )
