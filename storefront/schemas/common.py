"""
Common schemas used across the API.
"""
from typing import Optional
from pydantic import Field

from ..models.base import CamelModel


class HealthCheckResponse(CamelModel):
    """Response schema for health check endpoint."""
    status: str = Field(..., description="Application health status")
    database: str = Field(..., description="Database connection status")
    timestamp: str = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")


class RootResponse(CamelModel):
    """Response schema for root endpoint."""
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="API version")
    docs: str = Field(..., description="Documentation URL")
    health: str = Field(..., description="Health check URL")
    status: str = Field(..., description="Application status")
    timestamp: str = Field(..., description="Response timestamp")


class ErrorResponse(CamelModel):
    """Structured failure result returned for every handled error."""
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Additional error details")


class SuccessResponse(CamelModel):
    """Generic success response schema."""
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Success message")


class PaginationMeta(CamelModel):
    """Page based pagination metadata for catalog listings."""
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of items")
    pages: int = Field(..., description="Total number of pages")


class OrderPaginationMeta(CamelModel):
    """Pagination metadata for order listings."""
    current_page: int = Field(..., description="Current page number")
    total_pages: int = Field(..., description="Total number of pages")
    total_count: int = Field(..., description="Total number of orders")
    has_next_page: bool = Field(..., description="Whether a later page exists")
    has_prev_page: bool = Field(..., description="Whether an earlier page exists")
    limit: int = Field(..., description="Orders per page")
