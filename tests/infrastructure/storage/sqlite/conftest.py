"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import aiosqlite
import pytest

from src.core.entities.catalog import Product, RawMaterial
from src.core.entities.order import Order, OrderLineItem
from src.infrastructure.storage.sqlite.connection import ConnectionPool


@pytest.fixture
async def conn(pool: ConnectionPool) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Pooled connection; each test's writes autocommit."""
    async with pool.acquire() as conn:
        yield conn


@pytest.fixture
def sample_product() -> Product:
    return Product(name="Box", base_price=Decimal("12.50"), stock_quantity=4)


@pytest.fixture
def sample_material() -> RawMaterial:
    return RawMaterial(
        name="Tissue Paper",
        description="White, 17gsm",
        category="Paper",
        unit="sheets",
        current_stock=Decimal("1000"),
        min_stock=Decimal("100"),
    )


@pytest.fixture
def sample_order() -> Order:
    return Order(
        customer_id=11,
        delivery_date=date(2026, 4, 30),
        items=[
            OrderLineItem(product_id=1, quantity=100, unit_price=Decimal("12.50")),
        ],
    )
