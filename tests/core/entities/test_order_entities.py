"""Tests for order entities and the status state machine."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.entities.order import Order, OrderLineItem, OrderPatch, OrderStatus


class TestOrderStatus:
    """Tests for OrderStatus transitions."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.PENDING, OrderStatus.IN_PROGRESS),
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED),
            (OrderStatus.COMPLETED, OrderStatus.DELIVERED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.COMPLETED, OrderStatus.CANCELLED),
        ],
    )
    def test_allowed_transitions(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (OrderStatus.IN_PROGRESS, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
            (OrderStatus.CANCELLED, OrderStatus.IN_PROGRESS),
        ],
    )
    def test_rejected_transitions(self, current, target):
        assert not current.can_transition_to(target)

    def test_terminal_statuses(self):
        assert OrderStatus.DELIVERED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal
        assert not OrderStatus.COMPLETED.is_terminal

    def test_values_match_stored_strings(self):
        assert OrderStatus("In Progress") is OrderStatus.IN_PROGRESS


class TestOrderLineItem:
    """Tests for OrderLineItem entity."""

    def test_line_total(self):
        item = OrderLineItem(product_id=1, quantity=3, unit_price=Decimal("2.50"))
        assert item.line_total == Decimal("7.50")

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLineItem(product_id=1, quantity=0, unit_price=Decimal("1"))

    def test_custom_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderLineItem(
                product_id=1,
                quantity=1,
                unit_price=Decimal("1"),
                custom_amount_per_unit=Decimal("0"),
            )


class TestOrder:
    """Tests for Order entity."""

    def test_defaults(self):
        order = Order(customer_id=7, delivery_date=date(2026, 1, 1))
        assert order.status is OrderStatus.PENDING
        assert order.stock_restored is False
        assert order.total_amount == Decimal("0")

    def test_total_amount(self):
        order = Order(
            customer_id=7,
            delivery_date=date(2026, 1, 1),
            items=[
                OrderLineItem(product_id=1, quantity=2, unit_price=Decimal("10")),
                OrderLineItem(product_id=2, quantity=1, unit_price=Decimal("0.99")),
            ],
        )
        assert order.total_amount == Decimal("20.99")

    def test_patch_is_empty(self):
        assert OrderPatch().is_empty
        assert not OrderPatch(delivery_date=date(2026, 2, 1)).is_empty
