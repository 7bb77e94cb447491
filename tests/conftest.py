"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable, Generator
from decimal import Decimal
from pathlib import Path

import pytest

from src.application.dto.requests import CreateRawMaterialRequest
from src.application.use_cases.create_raw_material import CreateRawMaterialUseCase
from src.config import CompensationSettings, reset_settings
from src.core.entities.catalog import BillOfMaterialsEntry, Product, RawMaterial
from src.core.entities.ledger import StockTransaction
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.migrations import initialize_database
from src.infrastructure.storage.sqlite.unit_of_work import SQLiteUnitOfWork


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep every test's settings (and data dir) away from the real environment."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("COMPENSATION_RETRY_DELAY", "0")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def compensation_settings() -> CompensationSettings:
    """Fast restoration retries for tests."""
    return CompensationSettings(
        max_retries=3,
        retry_delay=0,
        retry_multiplier=2.0,
        max_reconcile_attempts=6,
    )


@pytest.fixture
async def db_path(tmp_path: Path) -> Path:
    """Create a temporary database with the full migrated schema."""
    path = tmp_path / "test_engine.db"
    results = await initialize_database(path, create_backup_before=False)
    assert all(r.success for r in results)
    return path


@pytest.fixture
async def pool(db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Connection pool over the temporary database."""
    pool = ConnectionPool(db_path, pool_size=2, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def uow_factory(pool: ConnectionPool) -> Callable[..., SQLiteUnitOfWork]:
    """Unit-of-work factory bound to the test pool."""

    def factory(read_only: bool = False) -> SQLiteUnitOfWork:
        return SQLiteUnitOfWork(pool, read_only=read_only, timeout=10.0)

    return factory


class CatalogSeeder:
    """Creates products, materials and BOMs in the test database."""

    def __init__(self, uow_factory: Callable[..., SQLiteUnitOfWork]):
        self._uow_factory = uow_factory

    async def material(
        self,
        name: str,
        stock: str | int = 0,
        unit: str = "sheets",
        min_stock: str | int = 0,
        category: str = "Paper",
    ) -> RawMaterial:
        """Create a material; opening stock is booked on the ledger."""
        use_case = CreateRawMaterialUseCase(self._uow_factory)
        return await use_case.execute(
            CreateRawMaterialRequest(
                name=name,
                category=category,
                unit=unit,
                current_stock=Decimal(str(stock)),
                min_stock=Decimal(str(min_stock)),
            )
        )

    async def product(
        self,
        name: str,
        bom: dict[int, str | int] | None = None,
        stock_quantity: int = 0,
        base_price: str = "10",
    ) -> Product:
        """Create a product with an optional {material_id: amount_per_unit} BOM."""
        async with self._uow_factory() as uow:
            product = await uow.products.create_product(
                Product(
                    name=name,
                    base_price=Decimal(base_price),
                    stock_quantity=stock_quantity,
                )
            )
            if bom:
                await uow.bom.replace_entries(
                    product.id,
                    [
                        BillOfMaterialsEntry(
                            product_id=product.id,
                            material_id=material_id,
                            amount_per_unit=Decimal(str(amount)),
                        )
                        for material_id, amount in bom.items()
                    ],
                )
        return product

    async def material_stock(self, material_id: int) -> Decimal:
        async with self._uow_factory(read_only=True) as uow:
            material = await uow.materials.get_material(material_id)
        assert material is not None
        return material.current_stock

    async def product_stock(self, product_id: int) -> int:
        async with self._uow_factory(read_only=True) as uow:
            product = await uow.products.get_product(product_id)
        assert product is not None
        return product.stock_quantity

    async def ledger(self, material_id: int) -> list[StockTransaction]:
        """A material's ledger rows in append order."""
        async with self._uow_factory(read_only=True) as uow:
            return await uow.ledger.get_chain(material_id)


@pytest.fixture
def seed(uow_factory: Callable[..., SQLiteUnitOfWork]) -> CatalogSeeder:
    return CatalogSeeder(uow_factory)
