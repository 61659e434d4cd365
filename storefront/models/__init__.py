"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .base import CamelModel, new_object_id, utcnow
from .product import (
    MAX_PRODUCT_IMAGES,
    ProductCategory,
    ProductDocument,
    ProductImage,
    ProductSize,
    SizeVariant
)
from .order import OrderDocument, OrderItemDocument, generate_order_id

__all__ = [
    "CamelModel",
    "new_object_id",
    "utcnow",

    # Product models
    "MAX_PRODUCT_IMAGES",
    "ProductCategory",
    "ProductDocument",
    "ProductImage",
    "ProductSize",
    "SizeVariant",

    # Order models
    "OrderDocument",
    "OrderItemDocument",
    "generate_order_id"
]
