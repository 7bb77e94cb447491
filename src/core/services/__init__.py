"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from src.core.services.compensation import CompensationService
from src.core.services.fulfillment import (
    FulfillmentPlan,
    FulfillmentService,
    ProductDemand,
    validate_line_items,
)
from src.core.services.requirement_calculator import (
    RequirementCalculator,
    aggregate_requirements,
    calculate_requirements,
    effective_amount_per_unit,
)
from src.core.services.stock_ledger import StockLedger, verify_ledger

__all__ = [
    # Requirements
    "RequirementCalculator",
    "calculate_requirements",
    "aggregate_requirements",
    "effective_amount_per_unit",
    # Ledger
    "StockLedger",
    "verify_ledger",
    # Fulfillment
    "FulfillmentService",
    "FulfillmentPlan",
    "ProductDemand",
    "validate_line_items",
    # Compensation
    "CompensationService",
]
