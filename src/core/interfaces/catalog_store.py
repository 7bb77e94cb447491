"""
Abstract interfaces for catalog storage.

Defines the contracts for products, raw materials and the bill of
materials that links them.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from src.core.entities.catalog import (
    BillOfMaterialsEntry,
    BomLine,
    Product,
    RawMaterial,
    RawMaterialPatch,
)


class IProductStore(ABC):
    """Interface for product persistence."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a new product."""

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""

    @abstractmethod
    async def get_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Get several products keyed by ID; unknown IDs are absent."""

    @abstractmethod
    async def change_stock_quantity(
        self, product_id: int, expected: int, new: int
    ) -> bool:
        """
        Set stock_quantity to ``new`` if it still equals ``expected``.

        Returns False when the stored quantity no longer matches.
        """


class IRawMaterialStore(ABC):
    """Interface for raw material persistence."""

    @abstractmethod
    async def create_material(self, material: RawMaterial) -> RawMaterial:
        """Create a new raw material."""

    @abstractmethod
    async def get_material(self, material_id: int) -> RawMaterial | None:
        """Get raw material by ID."""

    @abstractmethod
    async def list_materials(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[RawMaterial]:
        """List raw materials with pagination and optional category filter."""

    @abstractmethod
    async def list_low_stock(self) -> list[RawMaterial]:
        """List materials at or below their minimum stock, lowest first."""

    @abstractmethod
    async def update_material(
        self, material_id: int, patch: RawMaterialPatch
    ) -> RawMaterial | None:
        """Apply the populated fields of ``patch``; None if not found."""

    @abstractmethod
    async def change_current_stock(
        self, material_id: int, expected: Decimal, new: Decimal
    ) -> bool:
        """
        Set current_stock to ``new`` if it still equals ``expected``.

        Only the stock ledger calls this. Returns False when the stored
        stock no longer matches.
        """


class IBillOfMaterialsStore(ABC):
    """Interface for bill-of-materials persistence."""

    @abstractmethod
    async def get_lines(self, product_id: int) -> list[BomLine]:
        """Get BOM entries of a product joined with material state."""

    @abstractmethod
    async def list_entries(self, product_id: int) -> list[BillOfMaterialsEntry]:
        """Get raw BOM entries of a product, ordered by material ID."""

    @abstractmethod
    async def replace_entries(
        self, product_id: int, entries: list[BillOfMaterialsEntry]
    ) -> list[BillOfMaterialsEntry]:
        """Replace all BOM entries of a product."""
