"""Application use cases."""

from src.application.use_cases.add_raw_material_stock import (
    AddRawMaterialStockUseCase,
    StockChangeResult,
)
from src.application.use_cases.adjust_raw_material_stock import (
    AdjustRawMaterialStockUseCase,
)
from src.application.use_cases.check_materials import (
    CheckMaterialsResult,
    CheckMaterialsUseCase,
)
from src.application.use_cases.create_order import CreateOrderUseCase
from src.application.use_cases.create_raw_material import CreateRawMaterialUseCase
from src.application.use_cases.get_stock_transactions import (
    GetStockTransactionsUseCase,
    StockTransactionPage,
)
from src.application.use_cases.list_low_stock import ListLowStockUseCase
from src.application.use_cases.list_raw_materials import ListRawMaterialsUseCase
from src.application.use_cases.produce_product_stock import (
    ProduceProductStockResult,
    ProduceProductStockUseCase,
)
from src.application.use_cases.reconcile_compensations import (
    ReconcileCompensationsUseCase,
    ReconcileResult,
)
from src.application.use_cases.replace_order_line_items import (
    ReplaceOrderLineItemsUseCase,
)
from src.application.use_cases.restore_order_stock import OrderStockRestorer
from src.application.use_cases.update_order_details import UpdateOrderDetailsUseCase
from src.application.use_cases.update_order_status import (
    UpdateOrderStatusResult,
    UpdateOrderStatusUseCase,
)
from src.application.use_cases.update_raw_material import UpdateRawMaterialUseCase
from src.application.use_cases.verify_ledger import VerifyLedgerUseCase

__all__ = [
    # Orders
    "CheckMaterialsUseCase",
    "CheckMaterialsResult",
    "CreateOrderUseCase",
    "UpdateOrderStatusUseCase",
    "UpdateOrderStatusResult",
    "ReplaceOrderLineItemsUseCase",
    "UpdateOrderDetailsUseCase",
    # Compensation
    "OrderStockRestorer",
    "ReconcileCompensationsUseCase",
    "ReconcileResult",
    # Raw materials
    "CreateRawMaterialUseCase",
    "AddRawMaterialStockUseCase",
    "AdjustRawMaterialStockUseCase",
    "StockChangeResult",
    "UpdateRawMaterialUseCase",
    "ListRawMaterialsUseCase",
    "ListLowStockUseCase",
    # Products
    "ProduceProductStockUseCase",
    "ProduceProductStockResult",
    # Ledger
    "GetStockTransactionsUseCase",
    "StockTransactionPage",
    "VerifyLedgerUseCase",
]
