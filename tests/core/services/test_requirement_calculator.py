"""Tests for raw material requirement calculation."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.entities.catalog import BomLine
from src.core.entities.requirement import MaterialRequirement
from src.core.services.requirement_calculator import (
    RequirementCalculator,
    aggregate_requirements,
    calculate_requirements,
    effective_amount_per_unit,
)


def _line(material_id: int, amount: str, stock: str, name: str = "") -> BomLine:
    return BomLine(
        product_id=1,
        material_id=material_id,
        material_name=name or f"Material {material_id}",
        amount_per_unit=Decimal(amount),
        current_stock=Decimal(stock),
        unit="sheets",
    )


def _requirement(material_id: int, total: str, stock: str) -> MaterialRequirement:
    return MaterialRequirement(
        material_id=material_id,
        material_name=f"Material {material_id}",
        current_stock=Decimal(stock),
        unit="sheets",
        amount_per_unit=Decimal("1"),
        total_required=Decimal(total),
        sufficient=Decimal(stock) >= Decimal(total),
    )


class TestEffectiveAmountPerUnit:
    def test_override_applies_to_single_material(self):
        assert effective_amount_per_unit(1, Decimal("5"), Decimal("2.5")) == Decimal("2.5")

    def test_override_ignored_for_several_materials(self):
        assert effective_amount_per_unit(2, Decimal("5"), Decimal("2.5")) == Decimal("5")

    def test_no_override(self):
        assert effective_amount_per_unit(1, Decimal("5"), None) == Decimal("5")


class TestCalculateRequirements:
    def test_tissue_paper_box(self):
        [req] = calculate_requirements([_line(1, "5", "1000", "Tissue Paper")], 100)
        assert req.total_required == Decimal("500")
        assert req.sufficient is True

    def test_insufficient(self):
        [req] = calculate_requirements([_line(1, "5", "400")], 100)
        assert req.total_required == Decimal("500")
        assert req.sufficient is False

    def test_exact_stock_is_sufficient(self):
        [req] = calculate_requirements([_line(1, "0.25", "2.5")], 10)
        assert req.total_required == Decimal("2.50")
        assert req.sufficient is True

    def test_override_ignored_with_two_materials(self):
        reqs = calculate_requirements(
            [_line(1, "2", "100"), _line(2, "3", "100")],
            10,
            custom_amount_per_unit=Decimal("7"),
        )
        assert [r.total_required for r in reqs] == [Decimal("20"), Decimal("30")]
        assert [r.amount_per_unit for r in reqs] == [Decimal("2"), Decimal("3")]

    def test_override_used_with_one_material(self):
        [req] = calculate_requirements(
            [_line(1, "2", "100")], 10, custom_amount_per_unit=Decimal("1.5")
        )
        assert req.amount_per_unit == Decimal("1.5")
        assert req.total_required == Decimal("15.0")


class TestAggregateRequirements:
    def test_merges_shared_material(self):
        merged = aggregate_requirements(
            [_requirement(2, "60", "100"), _requirement(2, "60", "100")]
        )
        assert len(merged) == 1
        assert merged[0].total_required == Decimal("120")
        # each line fits alone, the combined need does not
        assert merged[0].sufficient is False

    def test_orders_by_material_id(self):
        merged = aggregate_requirements(
            [_requirement(9, "1", "5"), _requirement(3, "1", "5"), _requirement(5, "1", "5")]
        )
        assert [r.material_id for r in merged] == [3, 5, 9]

    def test_does_not_mutate_inputs(self):
        original = _requirement(1, "10", "100")
        aggregate_requirements([original, _requirement(1, "10", "100")])
        assert original.total_required == Decimal("10")

    def test_empty(self):
        assert aggregate_requirements([]) == []


class TestRequirementCalculator:
    @pytest.fixture
    def bom_store(self):
        return AsyncMock()

    async def test_for_product(self, bom_store):
        bom_store.get_lines.return_value = [_line(1, "5", "1000")]
        calculator = RequirementCalculator(bom_store)

        reqs = await calculator.for_product(1, 100)

        bom_store.get_lines.assert_awaited_once_with(1)
        assert reqs[0].total_required == Decimal("500")

    async def test_product_without_bom(self, bom_store):
        bom_store.get_lines.return_value = []
        calculator = RequirementCalculator(bom_store)
        assert await calculator.for_product(1, 100) == []
