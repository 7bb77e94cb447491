"""SQLite implementation of catalog storage (products, raw materials, BOM)."""

from decimal import Decimal

import aiosqlite

from src.config import get_logger
from src.core.entities.catalog import (
    BillOfMaterialsEntry,
    BomLine,
    Product,
    RawMaterial,
    RawMaterialPatch,
)
from src.core.interfaces.catalog_store import (
    IBillOfMaterialsStore,
    IProductStore,
    IRawMaterialStore,
)
from src.infrastructure.storage.sqlite.columns import (
    datetime_from_db,
    decimal_from_db,
    decimal_to_db,
    now_iso,
)

logger = get_logger(__name__)


class SQLiteProductStore(IProductStore):
    """Product storage bound to a unit of work's connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create_product(self, product: Product) -> Product:
        """Create a new product."""
        cursor = await self._conn.execute(
            """
            INSERT INTO products (name, base_price, stock_quantity, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                product.name,
                decimal_to_db(product.base_price),
                product.stock_quantity,
                product.created_at.isoformat(),
                product.updated_at.isoformat(),
            ),
        )
        product.id = cursor.lastrowid
        logger.info("product_created", product_id=product.id, name=product.name)
        return product

    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        cursor = await self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_product(row)

    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Get several products keyed by ID."""
        products = {}
        for product_id in product_ids:
            product = await self.get_product(product_id)
            if product is not None:
                products[product_id] = product
        return products

    async def change_stock_quantity(
        self, product_id: int, expected: int, new: int
    ) -> bool:
        """Guarded write of finished-goods stock."""
        cursor = await self._conn.execute(
            """
            UPDATE products SET stock_quantity = ?, updated_at = ?
            WHERE id = ? AND stock_quantity = ?
            """,
            (new, now_iso(), product_id, expected),
        )
        return cursor.rowcount == 1

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            name=row["name"],
            base_price=decimal_from_db(row["base_price"]),
            stock_quantity=row["stock_quantity"],
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
        )


class SQLiteRawMaterialStore(IRawMaterialStore):
    """Raw material storage bound to a unit of work's connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def create_material(self, material: RawMaterial) -> RawMaterial:
        """Create a new raw material with its starting stock."""
        cursor = await self._conn.execute(
            """
            INSERT INTO raw_materials (
                name, description, category, current_stock, unit,
                min_stock, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                material.name,
                material.description,
                material.category,
                decimal_to_db(material.current_stock),
                material.unit,
                decimal_to_db(material.min_stock),
                material.created_at.isoformat(),
                material.updated_at.isoformat(),
            ),
        )
        material.id = cursor.lastrowid
        logger.info(
            "raw_material_created",
            material_id=material.id,
            name=material.name,
            category=material.category,
        )
        return material

    async def get_material(self, material_id: int) -> RawMaterial | None:
        """Get raw material by ID."""
        cursor = await self._conn.execute(
            "SELECT * FROM raw_materials WHERE id = ?", (material_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_material(row)

    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[RawMaterial]:
        """List raw materials by name."""
        cursor = await self._conn.execute(
            """
            SELECT * FROM raw_materials
            WHERE (? IS NULL OR category = ?)
            ORDER BY name, id
            LIMIT ? OFFSET ?
            """,
            (category, category, limit, offset),
        )
        rows = await cursor.fetchall()
        return [self._row_to_material(row) for row in rows]

    async def list_low_stock(self) -> list[RawMaterial]:
        """Materials at or below minimum stock, lowest stock first."""
        # Decimal TEXT columns are compared in Python, not by SQLite
        cursor = await self._conn.execute("SELECT * FROM raw_materials")
        rows = await cursor.fetchall()
        materials = [self._row_to_material(row) for row in rows]
        low = [m for m in materials if m.current_stock <= m.min_stock]
        return sorted(low, key=lambda m: (m.current_stock, m.id))

    async def update_material(
        self, material_id: int, patch: RawMaterialPatch
    ) -> RawMaterial | None:
        """Apply the populated fields of a patch."""
        cursor = await self._conn.execute(
            """
            UPDATE raw_materials SET
                name = COALESCE(?, name),
                description = COALESCE(?, description),
                category = COALESCE(?, category),
                unit = COALESCE(?, unit),
                min_stock = COALESCE(?, min_stock),
                updated_at = ?
            WHERE id = ?
            """,
            (
                patch.name,
                patch.description,
                patch.category,
                patch.unit,
                decimal_to_db(patch.min_stock),
                now_iso(),
                material_id,
            ),
        )
        if cursor.rowcount == 0:
            return None
        logger.info(
            "raw_material_updated",
            material_id=material_id,
            fields=sorted(patch.model_dump(exclude_none=True)),
        )
        return await self.get_material(material_id)

    async def change_current_stock(
        self, material_id: int, expected: Decimal, new: Decimal
    ) -> bool:
        """Guarded write of the cached stock; only the ledger calls this."""
        cursor = await self._conn.execute(
            """
            UPDATE raw_materials SET current_stock = ?, updated_at = ?
            WHERE id = ? AND current_stock = ?
            """,
            (decimal_to_db(new), now_iso(), material_id, decimal_to_db(expected)),
        )
        return cursor.rowcount == 1

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> RawMaterial:
        """Convert a database row to a RawMaterial entity."""
        return RawMaterial(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            category=row["category"],
            current_stock=decimal_from_db(row["current_stock"]),
            unit=row["unit"],
            min_stock=decimal_from_db(row["min_stock"]),
            created_at=datetime_from_db(row["created_at"]),
            updated_at=datetime_from_db(row["updated_at"]),
        )


class SQLiteBillOfMaterialsStore(IBillOfMaterialsStore):
    """Bill-of-materials storage bound to a unit of work's connection."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get_lines(self, product_id: int) -> list[BomLine]:
        """BOM entries joined with material name, unit and current stock."""
        cursor = await self._conn.execute(
            """
            SELECT b.product_id, b.material_id, b.amount_per_unit,
                   m.name AS material_name, m.current_stock, m.unit
            FROM bill_of_materials b
            JOIN raw_materials m ON m.id = b.material_id
            WHERE b.product_id = ?
            ORDER BY b.material_id
            """,
            (product_id,),
        )
        rows = await cursor.fetchall()
        return [
            BomLine(
                product_id=row["product_id"],
                material_id=row["material_id"],
                material_name=row["material_name"],
                amount_per_unit=decimal_from_db(row["amount_per_unit"]),
                current_stock=decimal_from_db(row["current_stock"]),
                unit=row["unit"],
            )
            for row in rows
        ]

    async def list_entries(self, product_id: int) -> list[BillOfMaterialsEntry]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM bill_of_materials
            WHERE product_id = ?
            ORDER BY material_id
            """,
            (product_id,),
        )
        rows = await cursor.fetchall()
        return [
            BillOfMaterialsEntry(
                product_id=row["product_id"],
                material_id=row["material_id"],
                amount_per_unit=decimal_from_db(row["amount_per_unit"]),
            )
            for row in rows
        ]

    async def replace_entries(
        self, product_id: int, entries: list[BillOfMaterialsEntry]
    ) -> list[BillOfMaterialsEntry]:
        """Replace all BOM entries of a product."""
        await self._conn.execute(
            "DELETE FROM bill_of_materials WHERE product_id = ?", (product_id,)
        )
        await self._conn.executemany(
            """
            INSERT INTO bill_of_materials (product_id, material_id, amount_per_unit)
            VALUES (?, ?, ?)
            """,
            [
                (product_id, entry.material_id, decimal_to_db(entry.amount_per_unit))
                for entry in entries
            ],
        )
        logger.info(
            "bill_of_materials_replaced",
            product_id=product_id,
            materials=[entry.material_id for entry in entries],
        )
        return await self.list_entries(product_id)
