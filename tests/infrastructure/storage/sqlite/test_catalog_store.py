"""Tests for SQLite catalog stores."""

from decimal import Decimal

from src.core.entities.catalog import (
    BillOfMaterialsEntry,
    MaterialStatus,
    RawMaterial,
    RawMaterialPatch,
)
from src.infrastructure.storage.sqlite.catalog_store import (
    SQLiteBillOfMaterialsStore,
    SQLiteProductStore,
    SQLiteRawMaterialStore,
)


class TestSQLiteProductStore:
    async def test_create_and_get(self, conn, sample_product):
        store = SQLiteProductStore(conn)
        created = await store.create_product(sample_product)
        assert created.id is not None

        fetched = await store.get_product(created.id)
        assert fetched.name == "Box"
        assert fetched.base_price == Decimal("12.50")
        assert fetched.stock_quantity == 4

    async def test_get_missing(self, conn):
        assert await SQLiteProductStore(conn).get_product(999) is None

    async def test_get_products_skips_missing(self, conn, sample_product):
        store = SQLiteProductStore(conn)
        created = await store.create_product(sample_product)
        products = await store.get_products([created.id, 999])
        assert list(products) == [created.id]

    async def test_guarded_stock_change(self, conn, sample_product):
        store = SQLiteProductStore(conn)
        product = await store.create_product(sample_product)

        assert await store.change_stock_quantity(product.id, 4, 9) is True
        # stale expectation
        assert await store.change_stock_quantity(product.id, 4, 1) is False
        assert (await store.get_product(product.id)).stock_quantity == 9


class TestSQLiteRawMaterialStore:
    async def test_create_and_get(self, conn, sample_material):
        store = SQLiteRawMaterialStore(conn)
        created = await store.create_material(sample_material)

        fetched = await store.get_material(created.id)
        assert fetched.current_stock == Decimal("1000")
        assert fetched.min_stock == Decimal("100")
        assert fetched.description == "White, 17gsm"
        assert fetched.status is MaterialStatus.AVAILABLE

    async def test_decimal_precision_round_trip(self, conn):
        store = SQLiteRawMaterialStore(conn)
        created = await store.create_material(
            RawMaterial(
                name="Glue",
                category="Adhesive",
                unit="l",
                current_stock=Decimal("0.1"),
            )
        )
        assert await store.change_current_stock(
            created.id, Decimal("0.10"), Decimal("0.3")
        )
        fetched = await store.get_material(created.id)
        assert fetched.current_stock == Decimal("0.3")

    async def test_guard_rejects_stale_stock(self, conn, sample_material):
        store = SQLiteRawMaterialStore(conn)
        created = await store.create_material(sample_material)

        assert not await store.change_current_stock(
            created.id, Decimal("999"), Decimal("500")
        )
        assert (await store.get_material(created.id)).current_stock == Decimal("1000")

    async def test_list_by_category(self, conn, sample_material):
        store = SQLiteRawMaterialStore(conn)
        await store.create_material(sample_material)
        await store.create_material(
            RawMaterial(name="Ribbon", category="Trim", unit="m")
        )

        assert [m.name for m in await store.list_materials()] == ["Ribbon", "Tissue Paper"]
        assert [m.name for m in await store.list_materials(category="Trim")] == ["Ribbon"]

    async def test_list_low_stock(self, conn, sample_material):
        store = SQLiteRawMaterialStore(conn)
        await store.create_material(sample_material)
        await store.create_material(
            RawMaterial(
                name="Ribbon",
                category="Trim",
                unit="m",
                current_stock=Decimal("9.5"),
                min_stock=Decimal("10"),
            )
        )
        await store.create_material(
            RawMaterial(name="Twine", category="Trim", unit="m", min_stock=Decimal("1"))
        )

        low = await store.list_low_stock()
        assert [m.name for m in low] == ["Twine", "Ribbon"]
        assert low[0].status is MaterialStatus.OUT_OF_STOCK

    async def test_update_only_patched_fields(self, conn, sample_material):
        store = SQLiteRawMaterialStore(conn)
        created = await store.create_material(sample_material)

        updated = await store.update_material(
            created.id, RawMaterialPatch(unit="reams", min_stock=Decimal("2"))
        )

        assert updated.unit == "reams"
        assert updated.min_stock == Decimal("2")
        assert updated.name == "Tissue Paper"
        assert updated.current_stock == Decimal("1000")

    async def test_update_missing(self, conn):
        store = SQLiteRawMaterialStore(conn)
        assert await store.update_material(404, RawMaterialPatch(unit="m")) is None


class TestSQLiteBillOfMaterialsStore:
    async def test_replace_and_join(self, conn, sample_product, sample_material):
        product = await SQLiteProductStore(conn).create_product(sample_product)
        material = await SQLiteRawMaterialStore(conn).create_material(sample_material)
        store = SQLiteBillOfMaterialsStore(conn)

        await store.replace_entries(
            product.id,
            [
                BillOfMaterialsEntry(
                    product_id=product.id,
                    material_id=material.id,
                    amount_per_unit=Decimal("5"),
                )
            ],
        )

        [line] = await store.get_lines(product.id)
        assert line.material_name == "Tissue Paper"
        assert line.amount_per_unit == Decimal("5")
        assert line.current_stock == Decimal("1000")
        assert line.unit == "sheets"

    async def test_replace_drops_old_entries(self, conn, sample_product, sample_material):
        product = await SQLiteProductStore(conn).create_product(sample_product)
        materials = SQLiteRawMaterialStore(conn)
        first = await materials.create_material(sample_material)
        second = await materials.create_material(
            RawMaterial(name="Ribbon", category="Trim", unit="m")
        )
        store = SQLiteBillOfMaterialsStore(conn)

        entry = BillOfMaterialsEntry(
            product_id=product.id, material_id=first.id, amount_per_unit=Decimal("1")
        )
        await store.replace_entries(product.id, [entry])
        entries = await store.replace_entries(
            product.id,
            [entry.model_copy(update={"material_id": second.id})],
        )

        assert [e.material_id for e in entries] == [second.id]

    async def test_product_without_bom(self, conn, sample_product):
        product = await SQLiteProductStore(conn).create_product(sample_product)
        assert await SQLiteBillOfMaterialsStore(conn).get_lines(product.id) == []
