"""
Use case factory functions for dependency injection.

This module wires the SQLite unit of work into the use cases. Callers
(an HTTP layer, a CLI, a job runner) should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.application.use_cases import (
    AddRawMaterialStockUseCase,
    AdjustRawMaterialStockUseCase,
    CheckMaterialsUseCase,
    CreateOrderUseCase,
    CreateRawMaterialUseCase,
    GetStockTransactionsUseCase,
    ListLowStockUseCase,
    ListRawMaterialsUseCase,
    ProduceProductStockUseCase,
    ReconcileCompensationsUseCase,
    ReplaceOrderLineItemsUseCase,
    UpdateOrderDetailsUseCase,
    UpdateOrderStatusUseCase,
    UpdateRawMaterialUseCase,
    VerifyLedgerUseCase,
)
from src.core.interfaces.unit_of_work import UnitOfWorkFactory

# Shared unit-of-work factory; None means the SQLite default
_uow_factory: UnitOfWorkFactory | None = None


def get_uow_factory() -> UnitOfWorkFactory:
    """
    Get the unit-of-work factory used by every use case.

    Lazily imports the SQLite infrastructure to avoid circular imports.
    """
    global _uow_factory
    if _uow_factory is None:
        from src.infrastructure.storage.sqlite import get_unit_of_work

        _uow_factory = get_unit_of_work
    return _uow_factory


def set_uow_factory(factory: UnitOfWorkFactory) -> None:
    """Override the unit-of-work factory (for tests or alternative storage)."""
    global _uow_factory
    _uow_factory = factory


def get_check_materials_use_case() -> CheckMaterialsUseCase:
    return CheckMaterialsUseCase(get_uow_factory())


def get_create_order_use_case() -> CreateOrderUseCase:
    return CreateOrderUseCase(get_uow_factory())


def get_update_order_status_use_case() -> UpdateOrderStatusUseCase:
    return UpdateOrderStatusUseCase(get_uow_factory())


def get_replace_order_line_items_use_case() -> ReplaceOrderLineItemsUseCase:
    return ReplaceOrderLineItemsUseCase(get_uow_factory())


def get_update_order_details_use_case() -> UpdateOrderDetailsUseCase:
    return UpdateOrderDetailsUseCase(get_uow_factory())


def get_create_raw_material_use_case() -> CreateRawMaterialUseCase:
    return CreateRawMaterialUseCase(get_uow_factory())


def get_add_raw_material_stock_use_case() -> AddRawMaterialStockUseCase:
    return AddRawMaterialStockUseCase(get_uow_factory())


def get_adjust_raw_material_stock_use_case() -> AdjustRawMaterialStockUseCase:
    return AdjustRawMaterialStockUseCase(get_uow_factory())


def get_update_raw_material_use_case() -> UpdateRawMaterialUseCase:
    return UpdateRawMaterialUseCase(get_uow_factory())


def get_list_raw_materials_use_case() -> ListRawMaterialsUseCase:
    return ListRawMaterialsUseCase(get_uow_factory())


def get_list_low_stock_use_case() -> ListLowStockUseCase:
    return ListLowStockUseCase(get_uow_factory())


def get_produce_product_stock_use_case() -> ProduceProductStockUseCase:
    return ProduceProductStockUseCase(get_uow_factory())


def get_stock_transactions_use_case() -> GetStockTransactionsUseCase:
    return GetStockTransactionsUseCase(get_uow_factory())


def get_verify_ledger_use_case() -> VerifyLedgerUseCase:
    return VerifyLedgerUseCase(get_uow_factory())


def get_reconcile_compensations_use_case() -> ReconcileCompensationsUseCase:
    return ReconcileCompensationsUseCase(get_uow_factory())


def reset_services() -> None:
    """Reset the shared factory (for testing)."""
    global _uow_factory
    _uow_factory = None
