"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from enum import Enum
from typing import List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from .base import CamelModel, new_object_id, utcnow

# 1 cover + 6 body images
MAX_PRODUCT_IMAGES = 7


class ProductSize(str, Enum):
    """Sizes a product can be sold in."""
    SMALL = "Small"
    LARGE = "Large"


class ProductCategory(str, Enum):
    """Fixed catalog categories."""
    STRAWBERRY_FLAVOUR = "Strawberry Flavour"
    DARK_DESIRE = "Dark Desire"
    VANILLA_LUST = "Vanilla Lust"
    BUNDLE_OF_3_FLAVOURS = "Bundle of 3 Flavours"


class SizeVariant(CamelModel):
    """Size/price/availability combination owned by one product."""
    id: str = Field(default_factory=new_object_id, alias="_id", description="Variant ID")
    size: ProductSize = Field(..., description="Variant size")
    price: float = Field(..., ge=0, description="Variant price")
    is_available: bool = Field(default=True, description="Whether the variant can be ordered")


class ProductImage(CamelModel):
    """Image sub-document; ``filename`` is the blob store key."""
    id: str = Field(default_factory=new_object_id, alias="_id", description="Image ID")
    url: str = Field(..., min_length=1, description="Public image URL")
    filename: str = Field(..., min_length=1, description="Stored file name")
    is_cover: bool = Field(default=False, description="Whether this is the cover image")
    uploaded_at: datetime = Field(default_factory=utcnow, description="Upload timestamp")


class ProductDocument(CamelModel):
    """
    Product document model representing the MongoDB document structure.

    Validation enforces the aggregate invariants: at least one size variant,
    unique sizes, at most seven images and at most one cover image.
    """
    id: Optional[str] = Field(None, alias="_id", description="Product ID")
    title: str = Field(..., description="Product title")
    description: str = Field(..., description="Product description")
    category: ProductCategory = Field(..., description="Product category")
    size_variants: List[SizeVariant] = Field(..., description="Size variants")
    images: List[ProductImage] = Field(default_factory=list, description="Product images")

    # Timestamps
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("size_variants")
    @classmethod
    def validate_size_variants(cls, v):
        if not v:
            raise ValueError("At least one size variant is required")
        sizes = [variant.size for variant in v]
        if len(sizes) != len(set(sizes)):
            raise ValueError("Size variant sizes must be unique")
        return v

    @field_validator("images")
    @classmethod
    def validate_images(cls, v):
        if len(v) > MAX_PRODUCT_IMAGES:
            raise ValueError(f"Maximum {MAX_PRODUCT_IMAGES} images allowed (1 cover + 6 body images)")
        if sum(1 for image in v if image.is_cover) > 1:
            raise ValueError("Only one cover image is allowed")
        return v

    @property
    def cover_image(self) -> Optional[ProductImage]:
        """The designated cover image, falling back to the first image."""
        for image in self.images:
            if image.is_cover:
                return image
        return self.images[0] if self.images else None

    @property
    def body_images(self) -> List[ProductImage]:
        return [image for image in self.images if not image.is_cover]

    def get_variant(self, variant_id: str) -> Optional[SizeVariant]:
        return next((v for v in self.size_variants if v.id == variant_id), None)

    def get_image(self, image_id: str) -> Optional[ProductImage]:
        return next((img for img in self.images if img.id == image_id), None)
