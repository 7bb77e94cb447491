"""
Application layer - Use cases, DTOs, and factory functions.

This layer orchestrates business logic by:
1. Defining request/response DTOs as caller contracts
2. Implementing use cases that coordinate core services in units of work
3. Providing factory functions for dependency injection

Use cases are the only entry point for callers of the engine.
"""

from src.application.dto import (
    AddRawMaterialStockRequest,
    AdjustRawMaterialStockRequest,
    CheckMaterialsRequest,
    CreateOrderRequest,
    CreateRawMaterialRequest,
    GetStockTransactionsRequest,
    LineItemRequest,
    ListRawMaterialsRequest,
    ProduceProductStockRequest,
    ReconcileCompensationsRequest,
    ReplaceOrderLineItemsRequest,
    UpdateOrderDetailsRequest,
    UpdateOrderStatusRequest,
    UpdateRawMaterialRequest,
)
from src.application.services import (
    get_add_raw_material_stock_use_case,
    get_adjust_raw_material_stock_use_case,
    get_check_materials_use_case,
    get_create_order_use_case,
    get_create_raw_material_use_case,
    get_list_low_stock_use_case,
    get_list_raw_materials_use_case,
    get_produce_product_stock_use_case,
    get_reconcile_compensations_use_case,
    get_replace_order_line_items_use_case,
    get_stock_transactions_use_case,
    get_update_order_details_use_case,
    get_update_order_status_use_case,
    get_update_raw_material_use_case,
    get_verify_ledger_use_case,
    reset_services,
    set_uow_factory,
)

__all__ = [
    # Request DTOs
    "CheckMaterialsRequest",
    "LineItemRequest",
    "CreateOrderRequest",
    "UpdateOrderStatusRequest",
    "ReplaceOrderLineItemsRequest",
    "UpdateOrderDetailsRequest",
    "CreateRawMaterialRequest",
    "AddRawMaterialStockRequest",
    "AdjustRawMaterialStockRequest",
    "UpdateRawMaterialRequest",
    "ListRawMaterialsRequest",
    "ProduceProductStockRequest",
    "GetStockTransactionsRequest",
    "ReconcileCompensationsRequest",
    # Use case factories
    "get_check_materials_use_case",
    "get_create_order_use_case",
    "get_update_order_status_use_case",
    "get_replace_order_line_items_use_case",
    "get_update_order_details_use_case",
    "get_create_raw_material_use_case",
    "get_add_raw_material_stock_use_case",
    "get_adjust_raw_material_stock_use_case",
    "get_update_raw_material_use_case",
    "get_list_raw_materials_use_case",
    "get_list_low_stock_use_case",
    "get_produce_product_stock_use_case",
    "get_stock_transactions_use_case",
    "get_verify_ledger_use_case",
    "get_reconcile_compensations_use_case",
    "set_uow_factory",
    "reset_services",
]
