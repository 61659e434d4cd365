"""
Product API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import Any, List, Optional
from pydantic import ConfigDict, Field

from ..models.base import CamelModel
from ..models.product import ProductDocument, ProductImage, ProductSize
from .common import PaginationMeta


# Request Schemas

class SizeVariantInput(CamelModel):
    """Unvalidated size variant as submitted by a client."""
    model_config = ConfigDict(extra="ignore")

    size: Optional[Any] = Field(None, description="Small or Large")
    price: Optional[Any] = Field(None, description="Non-negative price")
    is_available: Optional[bool] = Field(None, description="Defaults to true")


class SizeVariantUpdate(CamelModel):
    """Fields of a single variant a caller may change."""
    model_config = ConfigDict(extra="forbid")

    size: Optional[ProductSize] = Field(None, description="New size")
    price: Optional[float] = Field(None, ge=0, description="New price")
    is_available: Optional[bool] = Field(None, description="New availability")


class CreateProductRequest(CamelModel):
    """Form fields of a product creation request."""
    title: Optional[str] = Field(None, description="Product title")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, description="Product category")
    size_variants: Any = Field(None, description="Size variants as a list or JSON string")


class UpdateProductRequest(CamelModel):
    """Request schema for updating a product; unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Product ID")
    title: Optional[str] = Field(None, description="Product title")
    description: Optional[str] = Field(None, description="Product description")
    category: Optional[str] = Field(None, description="Product category")
    size_variants: Optional[Any] = Field(None, description="Replacement size variants")


class AddSizeVariantRequest(CamelModel):
    """Request schema for adding one size variant."""
    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., description="Product ID")
    size: str = Field(..., description="Variant size")
    price: Any = Field(..., description="Variant price")
    stock: int = Field(0, ge=0, description="Accepted for compatibility, not stored")
    is_available: bool = Field(True, description="Whether the variant can be ordered")


class ReplaceSizeVariantsRequest(CamelModel):
    """Request schema for replacing every size variant of a product."""
    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., description="Product ID")
    size_variants: Any = Field(..., description="Complete variant list")


class EditSizeVariantRequest(SizeVariantUpdate):
    """Request schema for editing one size variant."""
    product_id: str = Field(..., description="Product ID")
    variant_id: str = Field(..., description="Variant ID")


class DeleteSizeVariantRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., description="Product ID")
    variant_id: str = Field(..., description="Variant ID")


class ProductImageRequest(CamelModel):
    """Identifies one image of one product."""
    model_config = ConfigDict(extra="forbid")

    product_id: str = Field(..., description="Product ID")
    image_id: str = Field(..., description="Image ID")


# Response Schemas

class ProductResponse(CamelModel):
    """Response schema wrapping a single product."""
    success: bool = Field(True, description="Operation success status")
    message: Optional[str] = Field(None, description="Result message")
    product: ProductDocument = Field(..., description="Product")


class ProductsPageResponse(CamelModel):
    """Response schema for a paginated product listing."""
    success: bool = Field(True, description="Operation success status")
    products: List[ProductDocument] = Field(..., description="Products on this page")
    pagination: PaginationMeta = Field(..., description="Pagination metadata")


class ProductsListResponse(CamelModel):
    """Response schema for unpaginated product listings."""
    success: bool = Field(True, description="Operation success status")
    message: Optional[str] = Field(None, description="Result message")
    category: Optional[str] = Field(None, description="Category filter applied")
    products: List[ProductDocument] = Field(..., description="Matching products")
    count: int = Field(..., description="Number of products returned")


class ImageMutationResponse(CamelModel):
    """Response schema for image add/delete/replace operations."""
    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Result message")
    product: ProductDocument = Field(..., description="Updated product")
    added_images: Optional[List[ProductImage]] = Field(None, description="Images that were added")
    deleted_image: Optional[ProductImage] = Field(None, description="Image that was removed")
    updated_image: Optional[ProductImage] = Field(None, description="Image that was replaced")


class ValidOptionsResponse(CamelModel):
    """Categories and sizes accepted by the catalog."""
    success: bool = Field(True, description="Operation success status")
    valid_categories: List[str] = Field(..., description="Accepted categories")
    valid_sizes: List[str] = Field(..., description="Accepted sizes")
