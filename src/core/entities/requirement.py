"""Material requirement and shortfall value objects."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class MaterialRequirement(BaseModel):
    """Raw material needed for a product quantity, with current availability."""

    material_id: int
    material_name: str
    current_stock: Decimal
    unit: str
    amount_per_unit: Decimal
    total_required: Decimal
    sufficient: bool


class ShortfallKind(str, Enum):
    """Whether a shortfall concerns a raw material or finished-goods stock."""

    MATERIAL = "material"
    PRODUCT = "product"


class Shortfall(BaseModel):
    """One entity that cannot cover what an order needs."""

    kind: ShortfallKind
    entity_id: int
    name: str
    required: Decimal
    available: Decimal
    unit: str | None = None

    @property
    def shortfall(self) -> Decimal:
        return self.required - self.available

    def describe(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        return (
            f"Insufficient {self.name}: need {self.required}{unit}, "
            f"only {self.available}{unit} available"
        )
