"""Core domain entities."""

from src.core.entities.catalog import (
    BillOfMaterialsEntry,
    BomLine,
    MaterialStatus,
    Product,
    RawMaterial,
    RawMaterialPatch,
    material_status,
)
from src.core.entities.compensation import (
    CompensationRecord,
    CompensationStatus,
    PlannedDelta,
)
from src.core.entities.ledger import (
    LedgerIssue,
    LedgerVerification,
    ReferenceType,
    StockTransaction,
    TransactionType,
)
from src.core.entities.order import (
    Order,
    OrderLineItem,
    OrderPatch,
    OrderStatus,
)
from src.core.entities.requirement import (
    MaterialRequirement,
    Shortfall,
    ShortfallKind,
)

__all__ = [
    # Catalog entities
    "Product",
    "RawMaterial",
    "RawMaterialPatch",
    "MaterialStatus",
    "material_status",
    "BillOfMaterialsEntry",
    "BomLine",
    # Order entities
    "Order",
    "OrderLineItem",
    "OrderPatch",
    "OrderStatus",
    # Ledger entities
    "StockTransaction",
    "TransactionType",
    "ReferenceType",
    "LedgerIssue",
    "LedgerVerification",
    # Requirement value objects
    "MaterialRequirement",
    "Shortfall",
    "ShortfallKind",
    # Compensation entities
    "CompensationRecord",
    "CompensationStatus",
    "PlannedDelta",
]
