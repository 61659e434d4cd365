"""
Order data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
import secrets
import string
import time
from typing import List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from .base import CamelModel, new_object_id

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_id() -> str:
    """Human readable order reference: ``ORD-<epoch millis>-<9 chars>``."""
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


class OrderItemDocument(CamelModel):
    """Line item captured with the price and size at order time."""
    id: str = Field(default_factory=new_object_id, alias="_id", description="Item ID")
    image: str = Field(..., description="Product image URL")
    title: str = Field(..., description="Product title")
    quantity: int = Field(default=1, ge=1, description="Quantity ordered")
    size: str = Field(..., description="Ordered size")
    price: float = Field(..., ge=0, description="Unit price")

    @field_validator("image", "title", "size", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderDocument(CamelModel):
    """
    Order document model representing the MongoDB document structure.

    ``total_cart_price`` is derived from the items and is recomputed by the
    order service before every write.
    """
    id: Optional[str] = Field(None, alias="_id", description="Order ID")
    order_id: str = Field(default_factory=generate_order_id, description="Human readable order reference")
    items: List[OrderItemDocument] = Field(..., min_length=1, description="Order items")
    total_cart_price: float = Field(default=0.0, ge=0, description="Total order amount")

    # Timestamps
    created_at: Optional[datetime] = Field(None, description="Order creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def get_item(self, item_id: str) -> Optional[OrderItemDocument]:
        return next((item for item in self.items if item.id == item_id), None)
