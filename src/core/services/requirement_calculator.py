"""
Raw material requirement calculation.

Derives how much of each raw material a product quantity consumes, based
on the product's bill of materials, and whether current stock covers it.
Pure computation apart from loading the BOM through the injected store.
"""

from collections.abc import Iterable
from decimal import Decimal

from src.config import get_logger
from src.core.entities.catalog import BomLine
from src.core.entities.requirement import MaterialRequirement
from src.core.interfaces.catalog_store import IBillOfMaterialsStore

logger = get_logger(__name__)


def effective_amount_per_unit(
    line_count: int,
    stored_amount: Decimal,
    custom_amount_per_unit: Decimal | None,
) -> Decimal:
    """
    Per-unit amount to use for one BOM entry.

    The custom override only applies to products made from exactly one
    material; a single scalar cannot be mapped onto several materials.
    """
    if custom_amount_per_unit is not None and line_count == 1:
        return custom_amount_per_unit
    return stored_amount


def calculate_requirements(
    lines: list[BomLine],
    quantity: int,
    custom_amount_per_unit: Decimal | None = None,
) -> list[MaterialRequirement]:
    """Compute requirements for ``quantity`` units from joined BOM lines."""
    requirements = []
    for line in lines:
        per_unit = effective_amount_per_unit(
            len(lines), line.amount_per_unit, custom_amount_per_unit
        )
        total_required = per_unit * quantity
        requirements.append(
            MaterialRequirement(
                material_id=line.material_id,
                material_name=line.material_name,
                current_stock=line.current_stock,
                unit=line.unit,
                amount_per_unit=per_unit,
                total_required=total_required,
                sufficient=line.current_stock >= total_required,
            )
        )
    return requirements


def aggregate_requirements(
    requirements: Iterable[MaterialRequirement],
) -> list[MaterialRequirement]:
    """
    Merge requirements per material across line items.

    Totals are summed and sufficiency is re-evaluated against the combined
    need. The result is ordered by material ID. ``amount_per_unit`` of a
    merged row is the first contributing row's value and is informational
    only.
    """
    merged: dict[int, MaterialRequirement] = {}
    for req in requirements:
        existing = merged.get(req.material_id)
        if existing is None:
            merged[req.material_id] = req.model_copy()
            continue
        existing.total_required += req.total_required

    result = []
    for material_id in sorted(merged):
        req = merged[material_id]
        req.sufficient = req.current_stock >= req.total_required
        result.append(req)
    return result


class RequirementCalculator:
    """
    Computes material requirements for products.

    The BOM store is injected via constructor so the calculator can read
    inside whichever transaction the caller holds.
    """

    def __init__(self, bom_store: IBillOfMaterialsStore) -> None:
        self._bom_store = bom_store

    async def for_product(
        self,
        product_id: int,
        quantity: int,
        custom_amount_per_unit: Decimal | None = None,
    ) -> list[MaterialRequirement]:
        """Requirements for ``quantity`` units of a product (empty if no BOM)."""
        lines = await self._bom_store.get_lines(product_id)
        if not lines:
            return []

        requirements = calculate_requirements(lines, quantity, custom_amount_per_unit)
        logger.debug(
            "requirements_calculated",
            product_id=product_id,
            quantity=quantity,
            materials=len(requirements),
            override_applied=custom_amount_per_unit is not None and len(lines) == 1,
        )
        return requirements
