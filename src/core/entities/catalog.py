"""Catalog domain entities: products, raw materials and their bill of materials."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class MaterialStatus(str, Enum):
    """Stock status of a raw material, derived from its stock levels."""

    AVAILABLE = "Available"
    LOW_STOCK = "Low Stock"
    OUT_OF_STOCK = "Out of Stock"


def material_status(current_stock: Decimal, min_stock: Decimal) -> MaterialStatus:
    """Derive a material's status from its current and minimum stock."""
    if current_stock <= 0:
        return MaterialStatus.OUT_OF_STOCK
    if current_stock <= min_stock:
        return MaterialStatus.LOW_STOCK
    return MaterialStatus.AVAILABLE


class Product(BaseModel):
    """A finished product that can be ordered."""

    id: int | None = None
    name: str
    base_price: Decimal = Field(gt=0)
    stock_quantity: int = Field(default=0, ge=0)  # finished goods on hand
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RawMaterial(BaseModel):
    """A raw material consumed when producing products.

    ``current_stock`` is a cache of the stock ledger and is only changed
    through ledger-producing operations.
    """

    id: int | None = None
    name: str
    description: str | None = None
    category: str
    unit: str
    current_stock: Decimal = Field(default=Decimal("0"), ge=0)
    min_stock: Decimal = Field(default=Decimal("0"), ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def status(self) -> MaterialStatus:
        return material_status(self.current_stock, self.min_stock)


class RawMaterialPatch(BaseModel):
    """Partial update of a raw material's descriptive fields.

    Unset fields are left untouched. Stock is not patchable.
    """

    name: str | None = None
    description: str | None = None
    category: str | None = None
    unit: str | None = None
    min_stock: Decimal | None = Field(default=None, ge=0)

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class BillOfMaterialsEntry(BaseModel):
    """Quantity of one raw material required per unit of a product."""

    product_id: int
    material_id: int
    amount_per_unit: Decimal = Field(gt=0)


class BomLine(BaseModel):
    """A bill-of-materials entry joined with its material's current state."""

    product_id: int
    material_id: int
    material_name: str
    amount_per_unit: Decimal
    current_stock: Decimal
    unit: str
