"""
Order API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import List, Optional
from pydantic import ConfigDict, Field

from ..models.base import CamelModel
from ..models.order import OrderDocument
from .common import OrderPaginationMeta


# Request Schemas

class OrderItemRequest(CamelModel):
    """Request schema for one cart item; extra cart keys are dropped."""
    model_config = ConfigDict(extra="ignore")

    image: str = Field(..., min_length=1, description="Product image URL")
    title: str = Field(..., min_length=1, description="Product title")
    quantity: int = Field(1, ge=1, description="Quantity ordered")
    size: str = Field(..., min_length=1, description="Ordered size")
    price: float = Field(..., ge=0, description="Unit price")


class CreateOrderRequest(CamelModel):
    """Request schema for creating a new order."""
    model_config = ConfigDict(extra="forbid")

    items: List[OrderItemRequest] = Field(default_factory=list, description="List of items in the order")


class UpdateOrderRequest(CreateOrderRequest):
    """Request schema replacing every item of an order."""


class UpdateOrderItemRequest(CamelModel):
    """Fields of an order item a caller may change."""
    model_config = ConfigDict(extra="forbid")

    image: Optional[str] = Field(None, min_length=1, description="Product image URL")
    title: Optional[str] = Field(None, min_length=1, description="Product title")
    quantity: Optional[int] = Field(None, ge=1, description="Quantity ordered")
    size: Optional[str] = Field(None, min_length=1, description="Ordered size")
    price: Optional[float] = Field(None, ge=0, description="Unit price")


# Response Schemas

class OrderResponse(CamelModel):
    """Response schema wrapping a single order."""
    success: bool = Field(True, description="Operation success status")
    message: Optional[str] = Field(None, description="Result message")
    data: OrderDocument = Field(..., description="Order")


class OrdersPage(CamelModel):
    orders: List[OrderDocument] = Field(..., description="Orders on this page")
    pagination: OrderPaginationMeta = Field(..., description="Pagination metadata")


class OrdersListResponse(CamelModel):
    """Response schema for order list with pagination."""
    success: bool = Field(True, description="Operation success status")
    data: OrdersPage = Field(..., description="Orders and pagination")


class OrderStatsOverview(CamelModel):
    total_orders: int = Field(..., description="Number of orders")
    total_revenue: float = Field(..., description="Sum of all order totals")
    avg_order_value: float = Field(..., description="Average order total, 2 decimals")


class MonthlyOrderStats(CamelModel):
    year: int = Field(..., description="Calendar year")
    month: int = Field(..., description="Calendar month (1-12)")
    total_orders: int = Field(..., description="Orders placed that month")
    total_revenue: float = Field(..., description="Revenue that month")


class OrderStats(CamelModel):
    overview: OrderStatsOverview
    recent_orders: List[OrderDocument] = Field(..., description="Five most recent orders")
    monthly_stats: List[MonthlyOrderStats] = Field(..., description="Last six months")


class OrderStatsResponse(CamelModel):
    """Response schema for order statistics."""
    success: bool = Field(True, description="Operation success status")
    data: OrderStats
