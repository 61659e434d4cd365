"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Product schemas
from .product import (
    SizeVariantInput,
    SizeVariantUpdate,
    CreateProductRequest,
    UpdateProductRequest,
    AddSizeVariantRequest,
    ReplaceSizeVariantsRequest,
    EditSizeVariantRequest,
    DeleteSizeVariantRequest,
    ProductImageRequest,
    ProductResponse,
    ProductsPageResponse,
    ProductsListResponse,
    ImageMutationResponse,
    ValidOptionsResponse
)

# Order schemas
from .order import (
    OrderItemRequest,
    CreateOrderRequest,
    UpdateOrderRequest,
    UpdateOrderItemRequest,
    OrderResponse,
    OrdersPage,
    OrdersListResponse,
    OrderStatsOverview,
    MonthlyOrderStats,
    OrderStats,
    OrderStatsResponse
)

# Auth schemas
from .auth import AdminLoginRequest, AdminProfile, AdminLoginData, AdminLoginResponse

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    SuccessResponse,
    PaginationMeta,
    OrderPaginationMeta
)

__all__ = [
    # Product schemas
    "SizeVariantInput",
    "SizeVariantUpdate",
    "CreateProductRequest",
    "UpdateProductRequest",
    "AddSizeVariantRequest",
    "ReplaceSizeVariantsRequest",
    "EditSizeVariantRequest",
    "DeleteSizeVariantRequest",
    "ProductImageRequest",
    "ProductResponse",
    "ProductsPageResponse",
    "ProductsListResponse",
    "ImageMutationResponse",
    "ValidOptionsResponse",

    # Order schemas
    "OrderItemRequest",
    "CreateOrderRequest",
    "UpdateOrderRequest",
    "UpdateOrderItemRequest",
    "OrderResponse",
    "OrdersPage",
    "OrdersListResponse",
    "OrderStatsOverview",
    "MonthlyOrderStats",
    "OrderStats",
    "OrderStatsResponse",

    # Auth schemas
    "AdminLoginRequest",
    "AdminProfile",
    "AdminLoginData",
    "AdminLoginResponse",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "SuccessResponse",
    "PaginationMeta",
    "OrderPaginationMeta"
]
