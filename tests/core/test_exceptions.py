"""Unit tests for domain exceptions."""

from decimal import Decimal

import pytest

from src.core.entities.requirement import Shortfall, ShortfallKind
from src.core.exceptions import (
    CompensationFailure,
    ConcurrentStockUpdateError,
    FulfillmentError,
    InsufficiencyError,
    InvalidStatusTransitionError,
    MaterialNotFoundError,
    NegativeStockError,
    NotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    StorageError,
    TransactionFailure,
    TransactionTimeoutError,
    ValidationError,
)


class TestFulfillmentError:
    """Tests for base FulfillmentError exception."""

    def test_basic_initialization(self):
        error = FulfillmentError("Something broke")
        assert error.message == "Something broke"
        assert error.code == "FulfillmentError"
        assert error.details == {}

    def test_to_dict(self):
        error = FulfillmentError("Broke", code="BROKE", details={"a": 1})
        assert error.to_dict() == {
            "error": "BROKE",
            "message": "Broke",
            "details": {"a": 1},
        }


class TestValidationError:
    def test_fields(self):
        error = ValidationError("quantity", "must be greater than 0", 0)
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "quantity"
        assert error.details["value"] == "0"
        assert "quantity" in error.message

    def test_value_truncated(self):
        error = ValidationError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100


class TestNotFoundErrors:
    @pytest.mark.parametrize(
        ("exc", "code", "key"),
        [
            (ProductNotFoundError, "PRODUCT_NOT_FOUND", "product_id"),
            (MaterialNotFoundError, "MATERIAL_NOT_FOUND", "raw_material_id"),
            (OrderNotFoundError, "ORDER_NOT_FOUND", "order_id"),
        ],
    )
    def test_codes_and_details(self, exc, code, key):
        error = exc(42)
        assert isinstance(error, NotFoundError)
        assert error.code == code
        assert error.details == {key: 42}
        assert "42" in error.message


class TestInsufficiencyError:
    def test_lists_every_shortfall(self):
        shortfalls = [
            Shortfall(
                kind=ShortfallKind.MATERIAL,
                entity_id=1,
                name="Tissue Paper",
                required=Decimal("500"),
                available=Decimal("400"),
                unit="sheets",
            ),
            Shortfall(
                kind=ShortfallKind.PRODUCT,
                entity_id=9,
                name="Bag",
                required=Decimal("25"),
                available=Decimal("20"),
            ),
        ]
        error = InsufficiencyError(shortfalls)
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.shortfalls == shortfalls
        assert error.message == "Insufficient stock for: Tissue Paper, Bag"
        assert error.details["shortfalls"][0]["required"] == "500"
        assert error.details["shortfalls"][1]["kind"] == "product"


class TestStorageErrors:
    def test_transaction_failure_is_generic(self):
        error = TransactionFailure("create_order")
        assert isinstance(error, StorageError)
        assert error.message == "Failed to create order"
        assert error.details == {"operation": "create_order"}

    def test_timeout_is_a_transaction_failure(self):
        error = TransactionTimeoutError(2.5)
        assert isinstance(error, TransactionFailure)
        assert error.code == "TRANSACTION_TIMEOUT"
        assert error.details == {"timeout": 2.5}

    def test_concurrent_update(self):
        error = ConcurrentStockUpdateError("raw_material", 5)
        assert isinstance(error, StorageError)
        assert error.details == {"entity": "raw_material", "entity_id": 5}

    def test_negative_stock(self):
        error = NegativeStockError(3, Decimal("1"), Decimal("-2"))
        assert error.details["previous_stock"] == "1"
        assert error.details["delta"] == "-2"


class TestOrderErrors:
    def test_invalid_transition_default_message(self):
        error = InvalidStatusTransitionError(4, "Delivered", "Cancelled")
        assert error.message == "Order #4 cannot move from 'Delivered' to 'Cancelled'"
        assert error.details["current_status"] == "Delivered"

    def test_invalid_transition_custom_message(self):
        error = InvalidStatusTransitionError(4, "Cancelled", "Cancelled", message="locked")
        assert error.message == "locked"

    def test_compensation_failure(self):
        error = CompensationFailure(8, "disk full", [{"material_id": 1, "delta": "5"}])
        assert not isinstance(error, StorageError)
        assert error.code == "COMPENSATION_FAILED"
        assert error.details["deltas"] == [{"material_id": 1, "delta": "5"}]
        assert "#8" in error.message
