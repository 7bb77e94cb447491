"""Data Transfer Objects for the use case layer.

Request DTOs: Validate and parse caller input.
Response DTOs: Structure and serialize use case results.

These are the ONLY contracts between callers and use cases.
"""

from src.application.dto.requests import (
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
from src.application.dto.responses import (
    CheckMaterialsResponse,
    CompensationResponse,
    LedgerIssueResponse,
    LedgerVerificationResponse,
    MaterialRequirementResponse,
    OrderLineItemResponse,
    OrderResponse,
    PlannedDeltaResponse,
    ProduceProductStockResponse,
    ProductResponse,
    RawMaterialListResponse,
    RawMaterialResponse,
    ReconcileCompensationsResponse,
    ShortfallResponse,
    StockChangeResponse,
    StockTransactionListResponse,
    StockTransactionResponse,
    UpdateOrderStatusResponse,
)

__all__ = [
    # Requests
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
    # Responses
    "MaterialRequirementResponse",
    "CheckMaterialsResponse",
    "ShortfallResponse",
    "ProductResponse",
    "RawMaterialResponse",
    "RawMaterialListResponse",
    "StockTransactionResponse",
    "StockChangeResponse",
    "StockTransactionListResponse",
    "LedgerIssueResponse",
    "LedgerVerificationResponse",
    "ProduceProductStockResponse",
    "OrderLineItemResponse",
    "OrderResponse",
    "PlannedDeltaResponse",
    "CompensationResponse",
    "UpdateOrderStatusResponse",
    "ReconcileCompensationsResponse",
]
